import asyncio
import logging
from datetime import date

import streamlit as st
from PIL import Image

from snapquiz.clean_text import extracted_text_filename
from snapquiz.config import TIME_LIMIT_SECONDS, settings
from snapquiz.errors import AllModelsFailed, ConfigurationError, InvalidInput
from snapquiz.fallback import placeholder_quiz
from snapquiz.image_ocr import SUPPORTED_EXTENSIONS, extract_text_from_image
from snapquiz.llm import GeminiClient
from snapquiz.quiz_engine import QuizEngine
from snapquiz.session import QuizSession

# ==================================================
# 1. SETUP & CONFIG
# ==================================================
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("snapquiz.app")

st.set_page_config(
    page_title="SnapQuiz",
    page_icon="⚡",
    layout="wide"
)

# --- CSS FOR UI POLISH ---
st.markdown("""
    <style>
    .question-card {
        background-color: #1e293b;
        padding: 25px;
        border-radius: 15px;
        border: 1px solid #334155;
        box-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1);
        margin-bottom: 20px;
        font-size: 20px;
    }
    .score { font-size: 48px; font-weight: 700; color: #60a5fa; text-align: center; }
    </style>
""", unsafe_allow_html=True)


@st.cache_resource
def load_engine():
    llm = GeminiClient(settings.gemini_api_key)
    return QuizEngine(llm, candidates=settings.candidates,
                      timeout=settings.candidate_timeout)


try:
    quiz_engine = load_engine()
except ConfigurationError as e:
    st.error(f"❌ {e}")
    st.stop()

# ==================================================
# 2. STATE MANAGEMENT
# ==================================================
if "view" not in st.session_state: st.session_state.view = "upload"
if "source_text" not in st.session_state: st.session_state.source_text = ""
if "session" not in st.session_state: st.session_state.session = None
if "model_used" not in st.session_state: st.session_state.model_used = None
if "notice" not in st.session_state: st.session_state.notice = None


def go(view):
    st.session_state.view = view
    st.rerun()


def start_quiz(quiz, model_used, time_limit):
    st.session_state.session = QuizSession(quiz, time_limit=time_limit)
    st.session_state.model_used = model_used
    go("quiz")

# ==================================================
# 3. GENERATION
# ==================================================
def generate(text):
    try:
        with st.spinner("🧠 Generating your quiz..."):
            result = asyncio.run(quiz_engine.generate_quiz(text))
    except InvalidInput as e:
        st.warning(str(e))
        return
    except AllModelsFailed as e:
        tried = ", ".join(a.model for a in e.attempts)
        st.session_state.notice = f"AI Error: {e.last_error or e} (tried {tried}). Using a basic quiz template instead."
        start_quiz(placeholder_quiz(), None, TIME_LIMIT_SECONDS)
        return
    st.session_state.notice = None
    st.toast(f"Quiz ready! Generated {result.quiz.total_questions} questions.")
    start_quiz(result.quiz, result.model_used, result.time_limit_seconds)

# ==================================================
# 4. UI LAYOUT
# ==================================================
with st.sidebar:
    st.title("Settings")
    st.caption("Models: " + ", ".join(quiz_engine.candidates))
    if st.button("🩺 Check Gemini"):
        with st.spinner("Pinging models..."):
            report = asyncio.run(quiz_engine.ping())
        if report.ok:
            st.success(f"Working model: {report.working_model}")
        else:
            st.error("All models failed")
        for attempt in report.tried:
            st.markdown(f"- `{attempt.model}` {'✅' if attempt.ok else '❌ ' + (attempt.error or '')}")
    if st.button("🔄 Start Over"):
        st.session_state.source_text = ""
        st.session_state.session = None
        go("upload")

st.title("⚡ SnapQuiz")
st.caption("Image or Text → OCR → Quiz")

view = st.session_state.view

if view == "upload":
    uploaded_file = st.file_uploader("📸 Upload an image", type=[ext.lstrip(".") for ext in SUPPORTED_EXTENSIONS])
    if uploaded_file:
        img = Image.open(uploaded_file)
        img_width = st.slider("🖼️ Image Size", 100, 800, 300, 10)
        st.image(img, caption="Preview", width=img_width)
        if st.button("🔍 Extract Text", use_container_width=True):
            bar = st.progress(0, text="Recognizing text...")
            try:
                text = extract_text_from_image(img, lang=settings.ocr_lang,
                                               progress=lambda pct: bar.progress(pct, text=f"{pct}% complete"))
            except Exception as e:
                logger.exception("OCR failed")
                st.error(f"OCR failed: {e}")
            else:
                if not text:
                    st.warning("No text found in the image.")
                else:
                    st.session_state.source_text = text
                    go("confirm")

    st.divider()
    pasted = st.text_area("…or paste text:", height=200)
    if st.button("✍️ Use This Text", use_container_width=True):
        cleaned = pasted.strip()
        if cleaned:
            st.session_state.source_text = cleaned
            go("confirm")
        else:
            st.warning("Please paste some text first.")

elif view == "confirm":
    st.subheader("📝 Review the extracted text")
    edited = st.text_area("Text:", value=st.session_state.source_text, height=300)
    st.session_state.source_text = edited
    st.download_button(label="💾 Download Text", data=edited,
                       file_name=extracted_text_filename(date.today()), mime="text/markdown")
    col_back, col_go = st.columns(2)
    with col_back:
        if st.button("⬅️ Back", use_container_width=True): go("upload")
    with col_go:
        if st.button("🚀 Generate Quiz", use_container_width=True):
            generate(edited)

elif view == "quiz":
    session = st.session_state.session
    if session.is_expired:
        session.finish()
        go("results")

    if st.session_state.notice:
        st.warning(st.session_state.notice)

    q = session.current_question
    remaining = session.time_remaining()
    st.subheader(f"Question {session.current_index + 1} of {session.total}")
    st.caption(f"⏱️ {remaining // 60}:{remaining % 60:02d} left • {session.answered_count} answered")
    st.progress((session.current_index + 1) / session.total)
    st.markdown(f'<div class="question-card">{q.question}</div>', unsafe_allow_html=True)

    chosen = st.radio("Select:", list(range(len(q.options))), format_func=lambda i: q.options[i],
                      index=session.answer_for(), key=f"q_{q.id}_{session.started_at}")
    if chosen is not None and chosen != session.answer_for():
        session.select_answer(chosen)

    col_prev, col_next = st.columns([1, 1])
    with col_prev:
        if st.button("⬅️ Prev", use_container_width=True, disabled=session.is_first):
            session.previous(); st.rerun()
    with col_next:
        label = "Finish ✅" if session.is_last else "Next ➡️"
        if st.button(label, use_container_width=True):
            if not session.next():
                session.finish()
                go("results")
            st.rerun()

elif view == "results":
    session = st.session_state.session
    result = session.finish()
    st.markdown(f'<div class="score">Your Score: {result.score}%</div>', unsafe_allow_html=True)
    st.caption(f"{result.correct} of {result.total} correct"
               + (f" • generated by {st.session_state.model_used}" if st.session_state.model_used else ""))

    for n, review in enumerate(result.reviews, start=1):
        rq = review.question
        icon = "✅" if review.is_correct else "❌"
        with st.expander(f"{icon} Q{n}: {rq.question}"):
            for i, opt in enumerate(rq.options):
                if i == rq.correct_answer:
                    st.success(opt)
                elif i == review.chosen:
                    st.error(opt)
                else:
                    st.markdown(f"- {opt}")
            if rq.explanation:
                st.info(rq.explanation)

    st.download_button(label="💾 Download Results", data=result.to_markdown(),
                       file_name="quiz-results.md", mime="text/markdown")
    col_retry, col_new = st.columns(2)
    with col_retry:
        if st.button("🔁 Retake Quiz", use_container_width=True):
            st.session_state.notice = None
            session.restart(); go("quiz")
    with col_new:
        if st.button("🆕 New Quiz", use_container_width=True):
            st.session_state.session = None
            st.session_state.notice = None
            go("upload")
