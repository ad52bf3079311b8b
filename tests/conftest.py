"""
Shared test fixtures for the writing evaluator.
No test starts LanguageTool or touches the network.
"""
import os

# Must be set before api.main / utils.config are imported
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["GRAMMAR_RETRY_BACKOFF"] = "0"

from types import SimpleNamespace

import pytest

# Ten words, one sentence
SENTENCE = "Students often write clear answers when they plan carefully ahead."


def build_essay(sentences=10, paragraphs=3):
    """Essay of `sentences` ten-word sentences spread over `paragraphs` blocks."""
    blocks = [[] for _ in range(paragraphs)]
    for i in range(sentences):
        blocks[i % paragraphs].append(SENTENCE)
    return "\n\n".join(" ".join(block) for block in blocks)


def words(n):
    """n words, no punctuation: one sentence, one paragraph"""
    return " ".join(["word"] * n)


@pytest.fixture
def essay():
    return build_essay


@pytest.fixture
def plain_words():
    return words


@pytest.fixture
def issue():
    def _issue(label, message="Check this.", **extra):
        return {"group_key": label, "message": message, **extra}

    return _issue


@pytest.fixture
def make_match():
    """Stand-in for language_tool_python Match objects"""

    def _match(issue_type="grammar", offset=0, length=4, message="Possible error.", replacements=None):
        return SimpleNamespace(
            ruleIssueType=issue_type,
            offset=offset,
            errorLength=length,
            message=message,
            replacements=["fix"] if replacements is None else replacements,
        )

    return _match


class FakeChecker:
    """Grammar checker double: returns canned issues or raises canned errors."""

    def __init__(self, issues=None, errors=None):
        self.issues = issues or []
        self.errors = list(errors or [])
        self.calls = []
        self.closed = False

    def close(self):
        self.closed = True

    def check(self, text, language=None):
        self.calls.append((text, language))
        if self.errors:
            raise self.errors.pop(0)
        return list(self.issues)


@pytest.fixture
def fake_checker():
    return FakeChecker
