import threading
import time
from typing import Any, List, Optional

from language_tool_python.utils import LanguageToolError

from evaluation import Issue, evaluate
from evaluation.issues import coerce_issues
from tools.grammar_checker import GrammarChecker
from utils.config import (
    DEFAULT_LANGUAGE,
    GRAMMAR_CHECK_RETRIES,
    GRAMMAR_RETRY_BACKOFF,
    MAX_TEXT_CHARS,
)


class EvaluationOrchestrator:
    """
    Coordinates the grammar checker and the evaluation engine.
    The grammar checker is only started when a request needs it.
    """

    def __init__(self, grammar_checker=None, max_retries: int = GRAMMAR_CHECK_RETRIES):
        self.grammar_checker = grammar_checker
        self.max_retries = max_retries
        self._lock = threading.Lock()
        print("✓ Evaluation orchestrator initialized", flush=True)

    def _get_grammar_checker(self):
        """Lazy load the grammar checker (only when issues must be detected)"""
        with self._lock:
            if self.grammar_checker is None:
                print("  → Initializing grammar checker...", flush=True)
                self.grammar_checker = GrammarChecker()
            return self.grammar_checker

    def close(self):
        """Shut down the grammar checker, if one was started."""
        with self._lock:
            checker, self.grammar_checker = self.grammar_checker, None
        if checker is not None:
            print("🛑 Stopping grammar checker...", flush=True)
            checker.close()

    def process(
        self,
        text: Any,
        issues: Optional[list] = None,
        teacher_override_scores: Optional[dict] = None,
        language: Optional[str] = None,
    ) -> dict:
        """
        Main evaluation workflow.

        Steps:
        1. Validate text
        2. Detect issues (skipped when the caller supplies them)
        3. Score with the evaluation engine
        """
        print("\n" + "=" * 60, flush=True)
        print("🎯 EVALUATION START", flush=True)
        print("=" * 60, flush=True)

        print("\n📝 Step 1: Validating text...", flush=True)
        text = self._validate_text(text)
        lang = (language or "").strip() or DEFAULT_LANGUAGE
        print(f"✓ Text: {len(text)} chars, {len(text.split())} words", flush=True)

        grammar_checked = False
        if issues is None:
            print("\n🔍 Step 2: Checking grammar...", flush=True)
            issues, grammar_checked = self._check_with_retry(text, lang)
            print(f"✓ Issues detected: {len(issues)}", flush=True)
        else:
            print("\n🔍 Step 2: Using caller-supplied issues", flush=True)
            issues = coerce_issues(issues)

        print("\n📊 Step 3: Scoring...", flush=True)
        evaluation = evaluate(text, issues, teacher_override_scores)
        print(
            f"✓ Scoring complete: {evaluation.effective_rubric.overall_score:.1f}/100 "
            f"({evaluation.effective_rubric.grade_letter})",
            flush=True,
        )

        print("\n" + "=" * 60, flush=True)
        print("✨ EVALUATION COMPLETE", flush=True)
        print("=" * 60 + "\n", flush=True)

        return {
            "evaluation": evaluation,
            "issues": issues,
            "grammar_checked": grammar_checked,
            "language": lang,
        }

    def check(self, text: Any, language: Optional[str] = None) -> dict:
        """Run only the grammar checker. Errors propagate to the caller."""
        text = self._validate_text(text)
        lang = (language or "").strip() or DEFAULT_LANGUAGE
        issues = self._get_grammar_checker().check(text, lang) if text.strip() else []
        return {"text": text, "issues": issues, "language": lang}

    def _validate_text(self, text: Any) -> str:
        text = text if isinstance(text, str) else ""
        if len(text) > MAX_TEXT_CHARS:
            raise ValueError(
                f"Text is too long ({len(text)} characters, limit {MAX_TEXT_CHARS})"
            )
        return text

    def _check_with_retry(self, text: str, language: str):
        """
        Grammar check with exponential backoff.

        Falls back to an empty issue list when every attempt fails, so the
        text is still scored on its length and shape.
        """
        if not text.strip():
            return [], True

        for attempt in range(1, self.max_retries + 1):
            try:
                print(f"  → Grammar check attempt {attempt}/{self.max_retries}", flush=True)
                issues: List[Issue] = self._get_grammar_checker().check(text, language)
                return issues, True

            except (LanguageToolError, OSError) as e:
                print(f"  ⚠️  Grammar check error: {e}", flush=True)

                if attempt == self.max_retries:
                    print("  ❌ Grammar check failed, scoring without issues", flush=True)
                    return [], False

                wait_time = GRAMMAR_RETRY_BACKOFF * 2 ** (attempt - 1)
                print(f"  ⏳ Retrying in {wait_time:.1f}s...", flush=True)
                time.sleep(wait_time)

        return [], False
