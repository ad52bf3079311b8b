import json

import requests
import streamlit as st

from utils.config import API_URL

DIMENSIONS = [
    ("grammar_score", "Grammar"),
    ("structure_score", "Structure"),
    ("content_score", "Content"),
    ("vocabulary_score", "Vocabulary"),
    ("task_achievement_score", "Task Achievement"),
]

FEEDBACK_BLOCKS = [
    ("grammar_feedback", "✏️ Grammar & Mechanics", "key_issues", None),
    ("structure_feedback", "🧱 Structure & Organization", "coherence_issues", "paragraph_notes"),
    ("content_feedback", "💡 Content & Relevance", "relevance_issues", "idea_development_notes"),
    ("vocabulary_feedback", "📚 Vocabulary & Style", "word_choice_issues", None),
]

GRADE_COLORS = {"A": "🟢", "B": "🟢", "C": "🟡", "D": "🟠", "F": "🔴"}

# Page config
st.set_page_config(page_title="Writing Evaluator", page_icon="📝", layout="wide")

st.title("📝 Writing Evaluation Tool")
st.markdown("""
Score student writing on a five-dimension rubric (grammar, structure, content,
vocabulary, task achievement). Scores are deterministic and can be overridden
by the teacher.
""")

# Sidebar for configuration
st.sidebar.header("⚙️ Configuration")
api_url = st.sidebar.text_input(
    "API Endpoint",
    value=f"{API_URL}/evaluate",
    help="FastAPI backend URL",
)
language = st.sidebar.text_input("Language", value="en-US", help="LanguageTool language code")

col1, col2 = st.columns([2, 1])

with col1:
    st.subheader("📄 Student Writing")
    essay_text = st.text_area(
        "Paste the student's text here:",
        height=300,
        placeholder="In my opinion, schools should...",
        key="essay_text",
    )

with col2:
    st.subheader("🧑‍🏫 Teacher Overrides")
    use_overrides = st.checkbox("Override computed scores", key="use_overrides")

    overrides = {}
    if use_overrides:
        for field, label in DIMENSIONS + [("overall_score", "Overall")]:
            value = st.number_input(
                label,
                min_value=0.0,
                max_value=100.0,
                value=None,
                step=1.0,
                key=f"override_{field}",
            )
            if value is not None:
                overrides[field] = value

st.markdown("---")
evaluate_button = st.button("🚀 Evaluate", type="primary", key="evaluate")


def render_result(result: dict):
    evaluation = result["evaluation"]
    rubric = evaluation["rubric"]
    effective = evaluation["effective_rubric"]

    st.success("✅ Evaluation Complete!")
    if not result.get("grammar_checked"):
        st.warning("⚠️ Grammar check did not run; scores use text-shape heuristics and supplied issues only.")

    st.markdown("---")
    st.subheader("📊 Overall Results")

    col_score1, col_score2, col_score3 = st.columns(3)
    with col_score1:
        st.metric("Overall Score", f"{effective['overall_score']:.1f}/100")
    with col_score2:
        st.metric("Word Count", rubric["word_count"])
    with col_score3:
        grade = effective["grade_letter"]
        st.metric("Grade", f"{GRADE_COLORS.get(grade, '')} {grade} ({effective['qualitative_label']})")

    st.progress(effective["overall_score"] / 100)
    if evaluation["has_teacher_overrides"]:
        st.info(f"🧑‍🏫 Teacher overrides applied (computed overall: {rubric['overall_score']:.1f})")
    st.caption(evaluation["general_comments"])

    st.markdown("---")
    st.subheader("📋 Rubric")
    for field, label in DIMENSIONS:
        computed = rubric[field]
        shown = effective[field]
        suffix = f" (computed {computed:.1f})" if shown != computed else ""
        st.markdown(f"**{label}:** {shown:.1f}/100{suffix}")
        st.progress(shown / 100)

    st.markdown("---")
    st.subheader("💬 Feedback")
    feedback = evaluation["structured_feedback"]
    for block_key, title, issues_key, notes_key in FEEDBACK_BLOCKS:
        block = feedback[block_key]
        with st.expander(title, expanded=(block_key == "grammar_feedback")):
            st.info(block["summary"])
            for item in block[issues_key]:
                symbol = f"[{item['symbol']}] " if item["symbol"] else ""
                fix = f" → *{item['suggestion']}*" if item["suggestion"] else ""
                st.markdown(f"- {symbol}{item['message']}{fix}")
            for note in block.get(notes_key, []) if notes_key else []:
                st.markdown(f"- {note}")
            for note in block.get("repetition_issues", []):
                st.markdown(f"- {note['message']}")

    with st.expander("🔍 Scoring breakdown"):
        st.json(rubric["scoring_breakdown"])

    st.markdown("---")
    st.download_button(
        label="📥 Download Results (JSON)",
        data=json.dumps(result, indent=2),
        file_name="writing_evaluation.json",
        mime="application/json",
    )


if evaluate_button:
    if not essay_text.strip():
        st.error("❌ Please provide the student's text")
    else:
        with st.spinner("🔄 Evaluating..."):
            try:
                payload = {"text": essay_text, "language": language}
                if overrides:
                    payload["teacher_override_scores"] = overrides

                response = requests.post(api_url, json=payload, timeout=60)

                if response.status_code == 200:
                    render_result(response.json())
                else:
                    st.error(f"❌ Error: {response.status_code}")
                    st.json(response.json())

            except requests.exceptions.ConnectionError:
                st.error(
                    "❌ Cannot connect to API. Make sure the FastAPI server is running on http://localhost:8000"
                )
            except Exception as e:
                st.error(f"❌ Error: {str(e)}")

# Footer
st.markdown("---")
st.markdown(
    """
<div style='text-align: center; color: gray;'>
    <small>Deterministic rubric scoring | Built with Streamlit & FastAPI</small>
</div>
""",
    unsafe_allow_html=True,
)
