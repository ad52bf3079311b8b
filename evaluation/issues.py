from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from evaluation.constants import SEVERITY_MULTIPLIERS

LABEL_KEYS = ("group_key", "groupKey", "group_label", "groupLabel", "category")
SUGGESTION_KEYS = ("suggestion", "suggested_text", "suggestedText")


class IssueCategory(str, Enum):
    SPELLING = "spelling"
    GRAMMAR = "grammar"
    TYPOGRAPHY = "typography"
    STYLE = "style"
    OTHER = "other"


def classify(raw_label: Optional[str]) -> IssueCategory:
    """Map a checker's group/category label onto one of the five buckets."""
    label = raw_label.lower() if isinstance(raw_label, str) else ""
    if "spell" in label:
        return IssueCategory.SPELLING
    if "gram" in label:
        return IssueCategory.GRAMMAR
    if "typ" in label:
        return IssueCategory.TYPOGRAPHY
    if "style" in label:
        return IssueCategory.STYLE
    return IssueCategory.OTHER


class Issue(BaseModel):
    """A single detected writing problem, as reported by a grammar checker."""

    model_config = ConfigDict(frozen=True)

    label: str = ""
    symbol: str = ""
    message: str = ""
    description: str = ""
    suggestion: str = ""
    start: Optional[int] = None
    end: Optional[int] = None
    wrong_text: str = ""

    @property
    def category(self) -> IssueCategory:
        return classify(self.label)

    @property
    def severity(self) -> float:
        return SEVERITY_MULTIPLIERS[self.category.value]

    @property
    def text(self) -> str:
        return self.message or self.description


class IssueStats(BaseModel):
    spelling: int = 0
    grammar: int = 0
    typography: int = 0
    style: int = 0
    other: int = 0
    total: int = 0


class TopIssueItem(BaseModel):
    group_key: IssueCategory
    symbol: str = ""
    message: str = ""
    suggestion: str = ""


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _first_string(raw: Mapping, keys: Iterable[str]) -> str:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def _offset(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def coerce_issue(raw: Any) -> Issue:
    """Build an Issue from whatever the caller handed us, never raising."""
    if isinstance(raw, Issue):
        return raw
    if not isinstance(raw, Mapping):
        return Issue()
    return Issue(
        label=_first_string(raw, LABEL_KEYS),
        symbol=_string(raw.get("symbol")),
        message=_string(raw.get("message")),
        description=_string(raw.get("description")),
        suggestion=_first_string(raw, SUGGESTION_KEYS),
        start=_offset(raw.get("start")),
        end=_offset(raw.get("end")),
        wrong_text=_first_string(raw, ("wrong_text", "wrongText")),
    )


def coerce_issues(raw_issues: Any) -> List[Issue]:
    if not isinstance(raw_issues, (list, tuple)):
        return []
    return [coerce_issue(raw) for raw in raw_issues]


def compute_issue_stats(issues: List[Issue]) -> IssueStats:
    counts = {category.value: 0 for category in IssueCategory}
    for issue in issues:
        counts[issue.category.value] += 1
    return IssueStats(total=len(issues), **counts)


# Rubric partitions. They overlap: one issue may feed several dimensions.
def grammar_issues(issues: List[Issue]) -> List[Issue]:
    return [
        i
        for i in issues
        if i.category
        in (IssueCategory.GRAMMAR, IssueCategory.TYPOGRAPHY, IssueCategory.SPELLING)
    ]


def structure_issues(issues: List[Issue]) -> List[Issue]:
    return [
        i
        for i in issues
        if i.category in (IssueCategory.STYLE, IssueCategory.TYPOGRAPHY)
    ]


def vocabulary_issues(issues: List[Issue]) -> List[Issue]:
    return [
        i for i in issues if i.category in (IssueCategory.STYLE, IssueCategory.OTHER)
    ]


def content_issues(issues: List[Issue]) -> List[Issue]:
    return [i for i in issues if i.category == IssueCategory.OTHER]


def build_top_issue_items(issues: List[Issue], max_items: int) -> List[TopIssueItem]:
    """Pick the first issues that have something to show, up to max_items."""
    items = []
    for issue in issues:
        if not (issue.text or issue.symbol or issue.suggestion):
            continue
        items.append(
            TopIssueItem(
                group_key=issue.category,
                symbol=issue.symbol,
                message=issue.text,
                suggestion=issue.suggestion,
            )
        )
        if len(items) >= max_items:
            break
    return items
