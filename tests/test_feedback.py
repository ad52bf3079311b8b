"""
Test: Structured feedback summaries, top issues, notes and general comments.
"""
from evaluation.constants import SHORT_RESPONSE_NOTE, SINGLE_BLOCK_NOTE
from evaluation.feedback import build_general_comments, build_structured_feedback, summarize
from evaluation.issues import Issue
from evaluation.scoring import compute_rubric_scores


class TestSummarize:
    def test_no_text(self):
        assert summarize("Grammar & Mechanics", 0, 3) == "Grammar & Mechanics: No text extracted."

    def test_no_issues(self):
        assert summarize("Content & Relevance", 120, 0) == "Content & Relevance: No issues detected."

    def test_singular(self):
        assert (
            summarize("Vocabulary & Style", 120, 1)
            == "Vocabulary & Style: Detected 1 issue based on automated checks."
        )

    def test_plural(self):
        assert (
            summarize("Structure & Organization", 120, 4)
            == "Structure & Organization: Detected 4 issues based on automated checks."
        )


class TestStructuredFeedback:
    def test_empty_text(self):
        feedback = build_structured_feedback("", [Issue(label="grammar", message="x")])
        assert feedback.grammar_feedback.summary == "Grammar & Mechanics: No text extracted."
        assert feedback.structure_feedback.summary == "Structure & Organization: No text extracted."
        assert feedback.content_feedback.summary == "Content & Relevance: No text extracted."
        assert feedback.vocabulary_feedback.summary == "Vocabulary & Style: No text extracted."
        assert feedback.structure_feedback.paragraph_notes == []
        assert feedback.content_feedback.idea_development_notes == []

    def test_clean_essay(self, essay):
        feedback = build_structured_feedback(essay(10, 3), [])
        assert feedback.grammar_feedback.summary == "Grammar & Mechanics: No issues detected."
        assert feedback.grammar_feedback.key_issues == []
        assert feedback.structure_feedback.paragraph_notes == []
        assert feedback.content_feedback.idea_development_notes == []

    def test_category_counts(self, essay):
        issues = [
            Issue(label="grammar", message="Agreement."),
            Issue(label="typography", message="Comma."),
            Issue(label="typography", message="Dash."),
        ]
        feedback = build_structured_feedback(essay(10, 3), issues)
        assert feedback.grammar_feedback.summary == (
            "Grammar & Mechanics: Detected 3 issues based on automated checks."
        )
        assert feedback.structure_feedback.summary == (
            "Structure & Organization: Detected 2 issues based on automated checks."
        )
        assert feedback.content_feedback.summary == "Content & Relevance: No issues detected."
        assert [i.message for i in feedback.structure_feedback.coherence_issues] == ["Comma.", "Dash."]

    def test_top_issues_capped_at_six(self, essay):
        issues = [Issue(label="other", message=f"Check {n}.") for n in range(9)]
        feedback = build_structured_feedback(essay(10, 3), issues)
        assert len(feedback.content_feedback.relevance_issues) == 6
        assert len(feedback.vocabulary_feedback.word_choice_issues) == 6
        assert feedback.content_feedback.summary == (
            "Content & Relevance: Detected 9 issues based on automated checks."
        )

    def test_single_short_block_notes(self, plain_words):
        feedback = build_structured_feedback(plain_words(50), [])
        assert feedback.structure_feedback.paragraph_notes == [SINGLE_BLOCK_NOTE]
        assert feedback.content_feedback.idea_development_notes == [SHORT_RESPONSE_NOTE]

    def test_repetition_notes(self, essay):
        notes = build_structured_feedback(essay(10, 3), []).vocabulary_feedback.repetition_issues
        assert [n.word for n in notes] == ["students", "often", "write", "clear", "answers"]
        assert all(n.count == 10 for n in notes)
        assert notes[0].message == (
            'The word "students" is repeated 10 times. Consider using synonyms or rephrasing.'
        )


class TestGeneralComments:
    def test_weakest_dimensions(self, essay):
        rubric = compute_rubric_scores(essay(10, 3), [Issue(label="grammar", message="x")])
        assert build_general_comments(rubric) == (
            "Analysis processed 100 words. Detected 1 issue(s). Focus areas: Grammar, Structure."
        )

    def test_empty_text(self):
        rubric = compute_rubric_scores("", [])
        assert build_general_comments(rubric) == (
            "Analysis processed 0 words. Detected 0 issue(s). Focus areas: Task Achievement, Content."
        )
