import math
from collections import Counter
from typing import Any, List, Optional, Tuple

from evaluation.constants import (
    CONTENT_BIAS,
    CONTENT_ISSUE_FACTOR,
    EMPTY_TEXT_PENALTY,
    FAILING_GRADE,
    GRADE_THRESHOLDS,
    GRAMMAR_BIAS,
    LONG_TEXT_WORDS,
    MIN_WORDS,
    OVERALL_WEIGHTS,
    PARAGRAPH_PENALTY,
    SCORE_MAX,
    SCORE_MIN,
    SENTENCE_PENALTY,
    SEVERITY_MULTIPLIERS,
    SHORTNESS_PER_WORD,
    STRUCTURE_BIAS,
    STRUCTURE_PARAGRAPH_FACTOR,
    STRUCTURE_SENTENCE_FACTOR,
    TASK_BIAS,
    VOCABULARY_BIAS,
)
from evaluation.issues import (
    Issue,
    compute_issue_stats,
    content_issues,
    grammar_issues,
    structure_issues,
    vocabulary_issues,
)
from evaluation.models import (
    HeuristicPenalties,
    PenaltyBreakdown,
    RubricScores,
    ScoringBreakdown,
)
from evaluation.text_stats import calculate_text_stats


def safe_number(value: Any, fallback: Optional[float]) -> Optional[float]:
    """Return value as a finite float, or fallback"""
    if isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    return number if math.isfinite(number) else fallback


def clamp_score(value: float) -> float:
    return max(SCORE_MIN, min(SCORE_MAX, value))


def round_half_up(value: float, digits: int = 1) -> float:
    """Round with .5 going up, unlike round() which rounds to even."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def grade_for(overall_score: Any) -> Tuple[str, str]:
    """Map an overall score onto (grade letter, qualitative label)."""
    score = safe_number(overall_score, 0)
    for minimum, letter, label in GRADE_THRESHOLDS:
        if score >= minimum:
            return letter, label
    return FAILING_GRADE


def penalty_per_100_words(issues: List[Issue], word_count: int) -> float:
    """
    Penalty for one issue subset, normalised per 100 words.

    Repeated issues of the same kind contribute sqrt(count) rather than
    count, each kind weighted by its severity multiplier.
    """
    per_word_norm = 100 / word_count if word_count > 0 else 0

    penalty = 0.0
    for category, count in Counter(i.category for i in issues).items():
        penalty += math.sqrt(count) * SEVERITY_MULTIPLIERS[category.value]

    return penalty * per_word_norm


def shortness_penalty(word_count: int) -> float:
    if word_count == 0:
        return EMPTY_TEXT_PENALTY
    if word_count < MIN_WORDS:
        return (MIN_WORDS - word_count) * SHORTNESS_PER_WORD
    return 0


def paragraph_penalty(word_count: int, paragraph_count: int) -> float:
    if word_count >= LONG_TEXT_WORDS and paragraph_count <= 1:
        return PARAGRAPH_PENALTY
    return 0


def sentence_penalty(word_count: int, sentence_count: int) -> float:
    if word_count >= LONG_TEXT_WORDS and sentence_count <= 2:
        return SENTENCE_PENALTY
    return 0


def category_score(base_penalty: float, bias: float) -> float:
    """Turn a combined penalty into a 0-100 score, one decimal"""
    return clamp_score(round_half_up(100 - base_penalty * bias))


def compute_rubric_scores(text: str, issues: List[Issue]) -> RubricScores:
    """
    Score text on the five rubric dimensions.

    Two signals are combined: detected-issue penalties per 100 words, and
    length/shape heuristics that catch answers which are too short or
    written as a single block.
    """
    stats = calculate_text_stats(text)
    wc = stats["word_count"]

    grammar_penalty = penalty_per_100_words(grammar_issues(issues), wc)
    structure_penalty = penalty_per_100_words(structure_issues(issues), wc)
    vocabulary_penalty = penalty_per_100_words(vocabulary_issues(issues), wc)
    content_issue_penalty = penalty_per_100_words(content_issues(issues), wc)

    shortness = shortness_penalty(wc)
    paragraph = paragraph_penalty(wc, stats["paragraph_count"])
    sentence = sentence_penalty(wc, stats["sentence_count"])

    content_penalty = content_issue_penalty * CONTENT_ISSUE_FACTOR + shortness + paragraph
    task_penalty = shortness + sentence

    grammar_score = category_score(grammar_penalty, GRAMMAR_BIAS)
    structure_score = category_score(
        structure_penalty
        + paragraph * STRUCTURE_PARAGRAPH_FACTOR
        + sentence * STRUCTURE_SENTENCE_FACTOR,
        STRUCTURE_BIAS,
    )
    content_score = category_score(content_penalty, CONTENT_BIAS)
    vocabulary_score = category_score(vocabulary_penalty, VOCABULARY_BIAS)
    task_achievement_score = category_score(task_penalty, TASK_BIAS)

    overall = (
        grammar_score * OVERALL_WEIGHTS["grammar"]
        + structure_score * OVERALL_WEIGHTS["structure"]
        + content_score * OVERALL_WEIGHTS["content"]
        + vocabulary_score * OVERALL_WEIGHTS["vocabulary"]
        + task_achievement_score * OVERALL_WEIGHTS["task"]
    )
    overall_score = clamp_score(round_half_up(overall))
    grade_letter, qualitative_label = grade_for(overall_score)

    return RubricScores(
        **stats,
        issue_stats=compute_issue_stats(issues),
        grammar_score=grammar_score,
        structure_score=structure_score,
        content_score=content_score,
        vocabulary_score=vocabulary_score,
        task_achievement_score=task_achievement_score,
        overall_score=overall_score,
        grade_letter=grade_letter,
        qualitative_label=qualitative_label,
        scoring_breakdown=ScoringBreakdown(
            weights=dict(OVERALL_WEIGHTS),
            penalties_per_100_words=PenaltyBreakdown(
                grammar=round_half_up(grammar_penalty, 2),
                structure=round_half_up(structure_penalty, 2),
                content=round_half_up(content_issue_penalty, 2),
                vocabulary=round_half_up(vocabulary_penalty, 2),
                task_achievement=round_half_up(task_penalty, 2),
            ),
            deterministic_heuristics=HeuristicPenalties(
                shortness_penalty=round_half_up(shortness),
                paragraph_penalty=round_half_up(paragraph),
                sentence_penalty=round_half_up(sentence),
            ),
        ),
    )
