from collections.abc import Mapping
from typing import Any, Dict, Optional, Tuple

from evaluation.constants import OVERRIDE_FIELDS
from evaluation.models import RubricScores
from evaluation.scoring import clamp_score, grade_for, safe_number


def _camel_case(field: str) -> str:
    head, *rest = field.split("_")
    return head + "".join(part.title() for part in rest)


def _pick(override: Mapping, field: str) -> Optional[float]:
    """Finite override value for field (snake_case first, then camelCase)."""
    for key in (field, _camel_case(field)):
        if key in override:
            value = safe_number(override[key], None)
            if value is not None:
                return clamp_score(value)
    return None


def apply_teacher_overrides(
    base: RubricScores, override: Any
) -> Tuple[RubricScores, bool]:
    """
    Replace computed scores with teacher-supplied ones.

    Returns the effective rubric and whether any override field was usable.
    The grade is always recomputed from the overall score in effect.
    """
    if not isinstance(override, Mapping):
        return base.model_copy(deep=True), False

    picked: Dict[str, float] = {}
    for field in OVERRIDE_FIELDS:
        value = _pick(override, field)
        if value is not None:
            picked[field] = value

    grade_letter, qualitative_label = grade_for(
        picked.get("overall_score", base.overall_score)
    )
    effective = base.model_copy(
        deep=True,
        update={
            **picked,
            "grade_letter": grade_letter,
            "qualitative_label": qualitative_label,
        },
    )
    return effective, bool(picked)
