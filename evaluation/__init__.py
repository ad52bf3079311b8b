"""
Deterministic academic evaluation engine.
Turns text plus detected writing issues into rubric scores and feedback.
"""

from evaluation.engine import evaluate
from evaluation.issues import Issue, IssueCategory, classify
from evaluation.models import EvaluationResult, RubricScores, StructuredFeedback

__all__ = [
    "evaluate",
    "Issue",
    "IssueCategory",
    "classify",
    "EvaluationResult",
    "RubricScores",
    "StructuredFeedback",
]
