from typing import Dict, List

from pydantic import BaseModel, Field

from evaluation.issues import IssueStats, TopIssueItem


class PenaltyBreakdown(BaseModel):
    grammar: float
    structure: float
    content: float
    vocabulary: float
    task_achievement: float


class HeuristicPenalties(BaseModel):
    shortness_penalty: float
    paragraph_penalty: float
    sentence_penalty: float


class ScoringBreakdown(BaseModel):
    weights: Dict[str, float]
    penalties_per_100_words: PenaltyBreakdown
    deterministic_heuristics: HeuristicPenalties


class RubricScores(BaseModel):
    word_count: int
    sentence_count: int
    paragraph_count: int
    issue_stats: IssueStats
    grammar_score: float
    structure_score: float
    content_score: float
    vocabulary_score: float
    task_achievement_score: float
    overall_score: float
    grade_letter: str
    qualitative_label: str
    scoring_breakdown: ScoringBreakdown


class RepetitionNote(BaseModel):
    word: str
    count: int
    message: str


class GrammarFeedback(BaseModel):
    summary: str
    key_issues: List[TopIssueItem] = Field(default_factory=list)


class StructureFeedback(BaseModel):
    summary: str
    coherence_issues: List[TopIssueItem] = Field(default_factory=list)
    paragraph_notes: List[str] = Field(default_factory=list)


class ContentFeedback(BaseModel):
    summary: str
    relevance_issues: List[TopIssueItem] = Field(default_factory=list)
    idea_development_notes: List[str] = Field(default_factory=list)


class VocabularyFeedback(BaseModel):
    summary: str
    word_choice_issues: List[TopIssueItem] = Field(default_factory=list)
    repetition_issues: List[RepetitionNote] = Field(default_factory=list)


class StructuredFeedback(BaseModel):
    grammar_feedback: GrammarFeedback
    structure_feedback: StructureFeedback
    content_feedback: ContentFeedback
    vocabulary_feedback: VocabularyFeedback


class EvaluationResult(BaseModel):
    rubric: RubricScores
    structured_feedback: StructuredFeedback
    effective_rubric: RubricScores
    has_teacher_overrides: bool
    general_comments: str
