"""
TutorVerse - Math & Physics Tutoring Chatbot
Streamlit Web Application

Entry point for the chatbot interface. Students ask math or physics
questions; each one is routed to a specialist agent and the reply is shown
under that agent's name.
"""

import streamlit as st
import uuid
import logging

from config import (
    APP_TITLE,
    APP_SUBTITLE,
    PAGE_ICON,
    GEMINI_MODEL,
    AGENT_AVATARS,
    get_agent_name,
    validate_settings,
    get_log_level,
)
from ai import health_check
from services import ChatService, Transcript, Message

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_log_level(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ============================================================================
# PAGE CONFIGURATION
# ============================================================================

st.set_page_config(
    page_title=f"{APP_TITLE} - Math & Physics Tutor",
    page_icon=PAGE_ICON,
    layout="centered",
    initial_sidebar_state="expanded",
)

EXAMPLE_QUESTIONS = [
    ("🧮 Multiply", "What is 25 into 11?"),
    ("⚛️ Newton", "What is Newton's second law?"),
    ("💡 Light", "What is the speed of light?"),
]


# ============================================================================
# SESSION STATE
# ============================================================================

def initialize_session_state():
    """Initialize Streamlit session state variables."""

    if "transcript" not in st.session_state:
        st.session_state.transcript = Transcript()

    if "chat_service" not in st.session_state:
        st.session_state.chat_service = ChatService()
        logger.info("✅ Chat service created")

    if "session_id" not in st.session_state:
        st.session_state.session_id = str(uuid.uuid4())

    if "pending_query" not in st.session_state:
        st.session_state.pending_query = None

    if "suggestions" not in st.session_state:
        st.session_state.suggestions = []


def queue_query(query: str):
    """Stash a query and rerun so the input renders disabled while it runs."""
    st.session_state.pending_query = query
    st.session_state.suggestions = []
    st.rerun()


# ============================================================================
# RENDERING
# ============================================================================

def render_chat_message(message: Message):
    """Render a single transcript message."""
    if message.role == "user":
        with st.chat_message("user", avatar="👤"):
            st.markdown(message.content)
        return

    with st.chat_message("assistant", avatar=AGENT_AVATARS.get(message.intent, "🧠")):
        st.caption(f"**{get_agent_name(message.intent)}**")
        st.markdown(message.content)


def run_pending_query():
    """Show the in-flight turn, run it, then rerun with the resolved transcript."""
    query = st.session_state.pending_query

    with st.chat_message("user", avatar="👤"):
        st.markdown(query)

    with st.chat_message("assistant", avatar="🧠"):
        with st.spinner("🤔 Thinking..."):
            service: ChatService = st.session_state.chat_service
            reply = service.submit(
                st.session_state.transcript,
                query,
                session_id=st.session_state.session_id,
            )

    st.session_state.suggestions = service.generate_suggestions(reply.intent) or []
    st.session_state.pending_query = None
    st.rerun()


def render_suggestions(suggestions):
    """Render clickable follow-up suggestions."""
    if not suggestions:
        return

    st.markdown("**💡 You might want to ask:**")

    cols = st.columns(len(suggestions))
    for idx, suggestion in enumerate(suggestions):
        with cols[idx]:
            if st.button(suggestion, key=f"suggestion_{idx}", use_container_width=True):
                queue_query(suggestion)


# ============================================================================
# SIDEBAR
# ============================================================================

def render_sidebar():
    """Render sidebar with app info and controls."""

    with st.sidebar:
        st.markdown(f"## {PAGE_ICON} {APP_TITLE}")
        st.caption(APP_SUBTITLE)

        st.divider()

        # Session info
        with st.expander("📊 System Status", expanded=False):
            st.caption(f"**Model:** {GEMINI_MODEL}")
            st.caption(f"**Chat History:** {len(st.session_state.transcript)} msgs")
            st.caption(f"**Session ID:** {st.session_state.session_id[:8]}...")
            for problem in validate_settings():
                st.warning(problem)

            if st.button("🩺 Run Health Check", use_container_width=True):
                with st.spinner("Checking..."):
                    st.json(health_check())

        st.divider()

        # Clear conversation
        if st.button(
            "🔄 Clear Conversation",
            use_container_width=True,
            disabled=st.session_state.pending_query is not None,
        ):
            st.session_state.transcript.clear()
            st.session_state.suggestions = []
            st.rerun()

        # Footer
        st.markdown("---")
        st.caption("🧮 Math Whiz and ⚛️ Physics Pro at your service")


# ============================================================================
# MAIN APP
# ============================================================================

def main():
    """Main application entry point."""

    # Initialize session state
    initialize_session_state()

    for problem in validate_settings():
        logger.warning(f"⚠️  {problem}")

    # Render sidebar
    render_sidebar()

    st.title(f"{PAGE_ICON} {APP_TITLE}")
    st.markdown(f"#### {APP_SUBTITLE}")

    transcript: Transcript = st.session_state.transcript
    pending = st.session_state.pending_query is not None

    # Display conversation
    for message in transcript:
        render_chat_message(message)

    if pending:
        run_pending_query()

    render_suggestions(st.session_state.suggestions)

    # Example questions (shown when only the greeting is present)
    if len(transcript) <= 1:
        st.markdown("### 💡 Example Questions:")

        cols = st.columns(len(EXAMPLE_QUESTIONS))
        for col, (label, question) in zip(cols, EXAMPLE_QUESTIONS):
            with col:
                if st.button(label, help=question, use_container_width=True):
                    queue_query(question)

    # Chat input
    user_input = st.chat_input(
        "Ask a math or physics question...",
        key="chat_input",
        disabled=pending,
    )

    if user_input:
        queue_query(user_input)


# ============================================================================
# ERROR HANDLING & ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        st.error(f"""
        ❌ **Application Error**

        An unexpected error occurred: {str(e)}

        Please refresh the page or clear the conversation if the issue persists.
        """)
