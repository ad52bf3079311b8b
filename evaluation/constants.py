"""
Fixed scoring constants for the academic evaluation engine.
Every weight, threshold and message the scorer uses lives here.
"""

# Severity multiplier per issue classification
SEVERITY_MULTIPLIERS = {
    "grammar": 1.35,
    "spelling": 1.05,
    "typography": 0.90,
    "style": 0.75,
    "other": 0.65,
}

# Strictness bias applied to each dimension's combined penalty
GRAMMAR_BIAS = 1.25
STRUCTURE_BIAS = 1.1
CONTENT_BIAS = 0.9
VOCABULARY_BIAS = 0.85
TASK_BIAS = 1.0

CONTENT_ISSUE_FACTOR = 1.1
STRUCTURE_PARAGRAPH_FACTOR = 0.6
STRUCTURE_SENTENCE_FACTOR = 0.4

# Overall blend (sums to 1.0)
OVERALL_WEIGHTS = {
    "grammar": 0.25,
    "structure": 0.25,
    "content": 0.25,
    "vocabulary": 0.15,
    "task": 0.10,
}

# Length / shape heuristics
EMPTY_TEXT_PENALTY = 100
MIN_WORDS = 40
SHORTNESS_PER_WORD = 0.9
LONG_TEXT_WORDS = 80
PARAGRAPH_PENALTY = 8
SENTENCE_PENALTY = 10

# (minimum overall score, grade letter, qualitative label), highest first
GRADE_THRESHOLDS = [
    (90, "A", "Excellent"),
    (80, "B", "Good"),
    (70, "C", "Satisfactory"),
    (60, "D", "Needs Improvement"),
]
FAILING_GRADE = ("F", "Unsatisfactory")

SCORE_MIN = 0.0
SCORE_MAX = 100.0

# Structured feedback
MAX_TOP_ISSUES = 6
MAX_REPETITION_NOTES = 5
REPETITION_MIN_COUNT = 4
REPETITION_MIN_LENGTH = 4

GRAMMAR_LABEL = "Grammar & Mechanics"
STRUCTURE_LABEL = "Structure & Organization"
CONTENT_LABEL = "Content & Relevance"
VOCABULARY_LABEL = "Vocabulary & Style"

SINGLE_BLOCK_NOTE = (
    "The response appears to be a single block. "
    "Consider splitting into paragraphs (intro, body, conclusion)."
)
SHORT_RESPONSE_NOTE = (
    "The response is very short. "
    "Add supporting details and examples to develop your ideas."
)

# Dimension names used by general comments, in tie-break order
DIMENSION_LABELS = [
    ("grammar_score", "Grammar"),
    ("structure_score", "Structure"),
    ("content_score", "Content"),
    ("vocabulary_score", "Vocabulary"),
    ("task_achievement_score", "Task Achievement"),
]

OVERRIDE_FIELDS = [
    "grammar_score",
    "structure_score",
    "content_score",
    "vocabulary_score",
    "task_achievement_score",
    "overall_score",
]
