import logging

import streamlit as st
from streamlit_image_coordinates import streamlit_image_coordinates

from globe_quiz.config import (
    CAMERA_DISTANCE,
    MAX_CAMERA_DISTANCE,
    MIN_CAMERA_DISTANCE,
    configure_logging,
)
from globe_quiz.errors import FeatureDataError
from globe_quiz.features import load_features
from globe_quiz.render import render_globe
from globe_quiz.resolver import Camera, resolve, view_rotation
from globe_quiz.session import GuessOutcome, GuessSession

configure_logging()
logger = logging.getLogger("globe_quiz.app")

# Set Page Configuration
st.set_page_config(page_title="Globe Guesser", layout="wide")

# --- Make layout tighter ---
st.markdown("""
    <style>
    /* Reduce top padding */
    .block-container {
        padding-top: 2rem;
        padding-bottom: 0rem;
    }
    /* Tighter buttons */
    div.stButton > button {
        padding: 0.5rem 1rem;
        font-size: 1rem;
    }
    /* Tighter text inputs */
    div.stTextInput {
        margin-bottom: 0.5rem;
    }
    </style>
""", unsafe_allow_html=True)


# ==================== Prepare Geo Data ====================
@st.cache_data(show_spinner="Loading countries...")
def load_countries():
    return load_features()


@st.cache_data(show_spinner=False)
def draw_globe(_features, center_lng, center_lat, distance, selected_iso):
    camera = Camera.at_distance(distance)
    return render_globe(_features, camera, view_rotation(center_lng, center_lat), selected_iso)


try:
    features = load_countries()
except FeatureDataError as exc:
    logger.error("Failed to load countries: %s", exc)
    st.error(f"Could not load the country map. {exc}")
    st.stop()

if not features:
    st.error("The country map is empty.")
    st.stop()


# ==================== Session ====================
if "session" not in st.session_state:
    st.session_state.session = GuessSession(features)
if "last_click_processed" not in st.session_state:
    st.session_state.last_click_processed = None
if "pick_message" not in st.session_state:
    st.session_state.pick_message = ""

session = st.session_state.session


def clear_game():
    for key in list(st.session_state.keys()):
        del st.session_state[key]


# ==================== Sidebar: View ====================
with st.sidebar:
    st.title("🌍 Globe Guesser")
    st.caption("Turn the globe, click a country and type its English name.")
    center_lng = st.slider("Longitude", -180, 180, 0, step=5)
    center_lat = st.slider("Latitude", -80, 80, 20, step=5)
    distance = st.slider("Zoom (camera distance)", int(MIN_CAMERA_DISTANCE),
                         int(MAX_CAMERA_DISTANCE), int(CAMERA_DISTANCE), step=10)
    st.write("---")
    if st.button("🔁 Start New Game"):
        clear_game()
        st.rerun()

camera = Camera.at_distance(distance)
transform = view_rotation(center_lng, center_lat)


left_col, right_col = st.columns([1.5, 2], gap="large")

# ==================== Globe ====================
with right_col:
    image = draw_globe(features, center_lng, center_lat, distance, session.selected_iso)
    click = streamlit_image_coordinates(image, key="globe", width=camera.width)

    if click:
        click_data = (click["x"], click["y"], click.get("unix_time"))
        if click_data != st.session_state.last_click_processed:
            st.session_state.last_click_processed = click_data
            px = click["x"] * camera.width / (click.get("width") or camera.width)
            py = click["y"] * camera.height / (click.get("height") or camera.height)
            feature = resolve(px, py, camera, transform, features)
            if feature is None:
                st.session_state.pick_message = "🌊 No country there. Try again."
            else:
                st.session_state.pick_message = ""
                session.select(feature)
            st.rerun()

    if st.session_state.pick_message:
        st.caption(st.session_state.pick_message)

# ==================== Guess ====================
with left_col:
    st.subheader(f"Score: {session.score}")

    if session.selected is None:
        st.info("Click a country on the globe to guess its name.")
    else:
        st.markdown("### Which country did you click?")

        if session.message:
            if session.outcome == GuessOutcome.CORRECT:
                st.success(session.message)
            else:
                st.error(session.message)

        if session.hint_shown:
            st.warning(f"💡 {session.hint}")

        if session.outcome != GuessOutcome.CORRECT:
            with st.form("guess_form", clear_on_submit=True):
                guess = st.text_input("Country name", placeholder="Type the English name")
                if st.form_submit_button("Submit"):
                    session.submit(guess)
                    st.rerun()

            if session.can_request_hint:
                if st.button("💡 Get a hint (halves the points)"):
                    session.request_hint()
                    st.rerun()

        if st.button("OK" if session.outcome == GuessOutcome.CORRECT else "❌ Cancel"):
            session.close()
            st.rerun()
