from typing import Any

from evaluation.feedback import build_general_comments, build_structured_feedback
from evaluation.issues import coerce_issues
from evaluation.models import EvaluationResult
from evaluation.overrides import apply_teacher_overrides
from evaluation.scoring import compute_rubric_scores
from evaluation.text_stats import normalize_text


def evaluate(
    text: Any, issues: Any = None, teacher_override_scores: Any = None
) -> EvaluationResult:
    """
    Evaluate a piece of writing against the five-dimension rubric.

    Args:
        text: The writing sample. Non-string values count as empty text.
        issues: Detected writing issues (Issue objects or plain dicts).
        teacher_override_scores: Optional partial map of score fields.

    Returns:
        EvaluationResult with the computed rubric, structured feedback and
        the effective rubric after teacher overrides. Never raises for
        malformed input.
    """
    text = normalize_text(text)
    issue_list = coerce_issues(issues)

    rubric = compute_rubric_scores(text, issue_list)
    effective_rubric, overridden = apply_teacher_overrides(
        rubric, teacher_override_scores
    )

    return EvaluationResult(
        rubric=rubric,
        structured_feedback=build_structured_feedback(text, issue_list),
        effective_rubric=effective_rubric,
        has_teacher_overrides=overridden,
        general_comments=build_general_comments(rubric),
    )
