from typing import List

from evaluation.constants import (
    CONTENT_LABEL,
    DIMENSION_LABELS,
    GRAMMAR_LABEL,
    MAX_TOP_ISSUES,
    SHORT_RESPONSE_NOTE,
    SINGLE_BLOCK_NOTE,
    STRUCTURE_LABEL,
    VOCABULARY_LABEL,
)
from evaluation.issues import (
    Issue,
    build_top_issue_items,
    compute_issue_stats,
    content_issues,
    grammar_issues,
    structure_issues,
    vocabulary_issues,
)
from evaluation.models import (
    ContentFeedback,
    GrammarFeedback,
    RepetitionNote,
    RubricScores,
    StructuredFeedback,
    StructureFeedback,
    VocabularyFeedback,
)
from evaluation.text_stats import calculate_text_stats, find_repeated_words


def summarize(label: str, word_count: int, issue_count: int) -> str:
    if not word_count:
        return f"{label}: No text extracted."
    if not issue_count:
        return f"{label}: No issues detected."
    noun = "issue" if issue_count == 1 else "issues"
    return f"{label}: Detected {issue_count} {noun} based on automated checks."


def repetition_notes(text: str) -> List[RepetitionNote]:
    return [
        RepetitionNote(
            word=word,
            count=count,
            message=(
                f'The word "{word}" is repeated {count} times. '
                "Consider using synonyms or rephrasing."
            ),
        )
        for word, count in find_repeated_words(text)
    ]


def build_structured_feedback(text: str, issues: List[Issue]) -> StructuredFeedback:
    """One summary line plus the top issues for each feedback category."""
    stats = compute_issue_stats(issues)
    text_stats = calculate_text_stats(text)
    wc = text_stats["word_count"]

    paragraph_notes = []
    idea_notes = []
    if wc and text_stats["paragraph_count"] <= 1:
        paragraph_notes.append(SINGLE_BLOCK_NOTE)
    if wc and text_stats["sentence_count"] < 3:
        idea_notes.append(SHORT_RESPONSE_NOTE)

    return StructuredFeedback(
        grammar_feedback=GrammarFeedback(
            summary=summarize(
                GRAMMAR_LABEL, wc, stats.grammar + stats.spelling + stats.typography
            ),
            key_issues=build_top_issue_items(grammar_issues(issues), MAX_TOP_ISSUES),
        ),
        structure_feedback=StructureFeedback(
            summary=summarize(STRUCTURE_LABEL, wc, stats.style + stats.typography),
            coherence_issues=build_top_issue_items(
                structure_issues(issues), MAX_TOP_ISSUES
            ),
            paragraph_notes=paragraph_notes,
        ),
        content_feedback=ContentFeedback(
            summary=summarize(CONTENT_LABEL, wc, stats.other),
            relevance_issues=build_top_issue_items(
                content_issues(issues), MAX_TOP_ISSUES
            ),
            idea_development_notes=idea_notes,
        ),
        vocabulary_feedback=VocabularyFeedback(
            summary=summarize(VOCABULARY_LABEL, wc, stats.style + stats.other),
            word_choice_issues=build_top_issue_items(
                vocabulary_issues(issues), MAX_TOP_ISSUES
            ),
            repetition_issues=repetition_notes(text),
        ),
    )


def build_general_comments(rubric: RubricScores) -> str:
    """Short overall comment naming the two weakest rubric dimensions."""
    ranked = sorted(DIMENSION_LABELS, key=lambda item: getattr(rubric, item[0]))
    focus = ", ".join(label for _, label in ranked[:2])
    return (
        f"Analysis processed {rubric.word_count} words. "
        f"Detected {rubric.issue_stats.total} issue(s). "
        f"Focus areas: {focus}."
    )
