import threading
from typing import Any, Dict, List, Optional

import language_tool_python

from evaluation.issues import Issue
from utils.config import DEFAULT_LANGUAGE, LANGUAGETOOL_URL

# Legend shown next to annotated text; one symbol per issue group
LEGEND = {
    "version": "1.0.0",
    "description": "LanguageTool-based writing corrections legend.",
    "groups": [
        {
            "key": "spelling",
            "label": "Spelling",
            "color": "#F44336",
            "symbol": "SP",
            "symbol_label": "Spelling",
            "description": "Possible misspelling.",
        },
        {
            "key": "grammar",
            "label": "Grammar",
            "color": "#FF9800",
            "symbol": "GR",
            "symbol_label": "Grammar",
            "description": "Possible grammar issue.",
        },
        {
            "key": "style",
            "label": "Style",
            "color": "#2196F3",
            "symbol": "ST",
            "symbol_label": "Style",
            "description": "Style suggestion.",
        },
        {
            "key": "typography",
            "label": "Typography",
            "color": "#9C27B0",
            "symbol": "TY",
            "symbol_label": "Typography",
            "description": "Punctuation/typography suggestion.",
        },
        {
            "key": "other",
            "label": "Other",
            "color": "#607D8B",
            "symbol": "CK",
            "symbol_label": "Check",
            "description": "Review this suggestion.",
        },
    ],
}


def get_legend() -> dict:
    return LEGEND


def legend_group(group_key: str) -> Dict[str, str]:
    """Legend entry for a group key, falling back to 'other'"""
    for group in LEGEND["groups"]:
        if group["key"] == group_key:
            return group
    return LEGEND["groups"][-1]


def normalize_server_url(raw: Any) -> str:
    """
    Accept either a server root or a full check endpoint.

    https://api.languagetool.org, https://api.languagetool.org/v2/check and
    a misconfigured .../check all resolve to https://api.languagetool.org.
    """
    if not isinstance(raw, str):
        return ""
    url = raw.strip().rstrip("/")
    for suffix in ("/v2/check", "/check"):
        if url.endswith(suffix):
            return url[: -len(suffix)]
    return url


def classify_match(match) -> str:
    """Map LanguageTool's rule issue type onto an issue group key"""
    issue_type = getattr(match, "ruleIssueType", None)
    issue_type = issue_type.lower() if isinstance(issue_type, str) else ""

    if "misspelling" in issue_type:
        return "spelling"
    if "grammar" in issue_type:
        return "grammar"
    if "typographical" in issue_type:
        return "typography"
    if "style" in issue_type:
        return "style"
    return "other"


def issues_from_matches(text: str, matches: list) -> List[Issue]:
    """
    Convert LanguageTool matches into Issues.

    Matches without a usable offset/length are dropped.
    """
    issues = []
    for match in matches or []:
        start = getattr(match, "offset", None)
        length = getattr(match, "errorLength", None)
        if not isinstance(start, int) or not isinstance(length, int) or length <= 0:
            continue

        end = start + length
        group_key = classify_match(match)
        group = legend_group(group_key)

        message = getattr(match, "message", "")
        message = message if isinstance(message, str) else ""
        replacements = getattr(match, "replacements", None) or []
        suggestion = ""
        if replacements and isinstance(replacements[0], str):
            suggestion = replacements[0]

        issues.append(
            Issue(
                label=group_key,
                symbol=group["symbol"],
                message=message,
                description=group["description"],
                suggestion=suggestion,
                start=start,
                end=end,
                wrong_text=text[start:end],
            )
        )
    return issues


class GrammarChecker:
    """
    LanguageTool wrapper producing Issues for the evaluation engine.
    One LanguageTool instance per language, started on first use.
    """

    def __init__(
        self, language: Optional[str] = None, remote_server: Optional[str] = None
    ):
        self.language = language or DEFAULT_LANGUAGE
        self.remote_server = normalize_server_url(
            LANGUAGETOOL_URL if remote_server is None else remote_server
        )
        self._tools = {}
        self._lock = threading.Lock()

    def _get_tool(self, language: str):
        """Lazy load the LanguageTool instance for a language"""
        with self._lock:
            if language not in self._tools:
                where = self.remote_server or "local server"
                print(f"  → Starting LanguageTool ({language}, {where})...", flush=True)
                self._tools[language] = language_tool_python.LanguageTool(
                    language, remote_server=self.remote_server or None
                )
                print("  ✓ LanguageTool ready", flush=True)
            return self._tools[language]

    def check(self, text: str, language: Optional[str] = None) -> List[Issue]:
        """Check text and return the detected issues."""
        safe_text = text if isinstance(text, str) else ""
        lang = (language or "").strip() or self.language

        matches = self._get_tool(lang).check(safe_text)
        return issues_from_matches(safe_text, matches)

    def close(self):
        with self._lock:
            tools, self._tools = self._tools, {}
        for tool in tools.values():
            tool.close()
