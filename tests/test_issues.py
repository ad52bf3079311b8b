"""
Test: Issue classification, coercion, statistics and rubric partitions.
"""
import pytest

from evaluation.issues import (
    Issue,
    IssueCategory,
    build_top_issue_items,
    classify,
    coerce_issue,
    coerce_issues,
    compute_issue_stats,
    content_issues,
    grammar_issues,
    structure_issues,
    vocabulary_issues,
)


class TestClassify:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("spelling_mistake", IssueCategory.SPELLING),
            ("Grammar Error", IssueCategory.GRAMMAR),
            ("TYPOGRAPHY", IssueCategory.TYPOGRAPHY),
            ("style-suggestion", IssueCategory.STYLE),
            ("unknown", IssueCategory.OTHER),
        ],
    )
    def test_substring_match(self, label, expected):
        assert classify(label) == expected

    def test_empty_and_missing(self):
        assert classify("") == IssueCategory.OTHER
        assert classify(None) == IssueCategory.OTHER

    def test_spelling_checked_before_grammar(self):
        assert classify("grammar/spelling") == IssueCategory.SPELLING

    def test_category_values(self):
        assert [c.value for c in IssueCategory] == [
            "spelling",
            "grammar",
            "typography",
            "style",
            "other",
        ]


class TestCoerceIssue:
    def test_dict_with_snake_case_fields(self):
        issue = coerce_issue(
            {"group_key": "grammar", "message": "Agreement.", "suggestion": "are", "symbol": "GR"}
        )
        assert issue.category == IssueCategory.GRAMMAR
        assert issue.message == "Agreement."
        assert issue.suggestion == "are"
        assert issue.symbol == "GR"

    def test_dict_with_camel_case_fields(self):
        issue = coerce_issue({"groupLabel": "Spelling", "description": "Typo.", "suggestedText": "their"})
        assert issue.category == IssueCategory.SPELLING
        assert issue.text == "Typo."
        assert issue.suggestion == "their"

    def test_category_fallback_label(self):
        assert coerce_issue({"category": "STYLE"}).category == IssueCategory.STYLE

    def test_wrong_types_are_dropped(self):
        issue = coerce_issue({"group_key": 7, "message": ["x"], "start": "3", "end": True})
        assert issue.category == IssueCategory.OTHER
        assert issue.message == ""
        assert issue.start is None
        assert issue.end is None

    def test_non_mapping_becomes_empty_other(self):
        for raw in (None, "grammar", 12):
            issue = coerce_issue(raw)
            assert issue == Issue()
            assert issue.category == IssueCategory.OTHER

    def test_issue_passthrough(self):
        issue = Issue(label="grammar")
        assert coerce_issue(issue) is issue

    def test_coerce_issues_requires_sequence(self):
        assert coerce_issues(None) == []
        assert coerce_issues("grammar") == []
        assert coerce_issues({"group_key": "grammar"}) == []
        assert len(coerce_issues(({"group_key": "grammar"}, None))) == 2

    def test_caller_dict_not_mutated(self):
        raw = {"group_key": "grammar", "message": "x"}
        coerce_issue(raw)
        assert raw == {"group_key": "grammar", "message": "x"}


def test_issue_stats():
    issues = coerce_issues(
        [
            {"group_key": "grammar"},
            {"group_key": "grammar"},
            {"group_key": "spelling"},
            {"group_key": "whitespace"},
            None,
        ]
    )
    stats = compute_issue_stats(issues)
    assert stats.grammar == 2
    assert stats.spelling == 1
    assert stats.other == 2
    assert stats.typography == 0
    assert stats.total == 5


class TestPartitions:
    """Partitions overlap: one issue can count toward several dimensions."""

    def setup_method(self):
        self.issues = [Issue(label=c.value) for c in IssueCategory]

    def labels(self, subset):
        return [i.category.value for i in subset]

    def test_grammar(self):
        assert self.labels(grammar_issues(self.issues)) == ["spelling", "grammar", "typography"]

    def test_structure(self):
        assert self.labels(structure_issues(self.issues)) == ["typography", "style"]

    def test_vocabulary(self):
        assert self.labels(vocabulary_issues(self.issues)) == ["style", "other"]

    def test_content(self):
        assert self.labels(content_issues(self.issues)) == ["other"]

    def test_typography_counts_twice(self):
        typo = [Issue(label="typography")]
        assert grammar_issues(typo) == typo
        assert structure_issues(typo) == typo


class TestTopIssueItems:
    def test_capped(self):
        issues = [Issue(label="grammar", message=f"Issue {n}") for n in range(8)]
        items = build_top_issue_items(issues, 6)
        assert len(items) == 6
        assert items[0].message == "Issue 0"
        assert items[-1].message == "Issue 5"

    def test_skips_issues_without_text(self):
        issues = [Issue(label="grammar"), Issue(label="style", suggestion="use 'therefore'")]
        items = build_top_issue_items(issues, 6)
        assert len(items) == 1
        assert items[0].group_key == IssueCategory.STYLE
        assert items[0].suggestion == "use 'therefore'"

    def test_description_used_when_no_message(self):
        items = build_top_issue_items([Issue(label="spelling", description="Possible misspelling.")], 6)
        assert items[0].message == "Possible misspelling."
