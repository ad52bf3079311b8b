from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from evaluation import EvaluationResult, Issue


class CheckRequest(BaseModel):
    text: str
    language: Optional[str] = None


class CheckResponse(BaseModel):
    text: str
    language: str
    issues: List[Issue]


class EvaluateRequest(BaseModel):
    text: str
    # Raw issue objects; the engine coerces them permissively
    issues: Optional[List[Any]] = None
    teacher_override_scores: Optional[Dict[str, Any]] = None
    language: Optional[str] = None


class EvaluationResponse(BaseModel):
    evaluation: EvaluationResult
    issues: List[Issue]
    grammar_checked: bool
    language: str
