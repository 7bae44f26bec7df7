"""CPTu SBT Chart — Main Streamlit Application."""

import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent))
from cptu_sbt.config import FR_GRID_RATIO, FR_GRID_START, FR_GRID_STOP
from cptu_sbt.log import setup_logger

st.set_page_config(
    page_title="CPTu SBT Chart",
    page_icon="\U0001F4C8",
    layout="wide",
    initial_sidebar_state="expanded",
)

setup_logger()


def init_session_state():
    """Initialize all session state defaults."""
    defaults = {
        # Loaded sounding (replaced wholesale on each successful load)
        "dataset": None,
        "load_result": None,
        # Parsing
        "delimiter": "Auto-detect",
        # Chart
        "fr_start": FR_GRID_START,
        "fr_stop": FR_GRID_STOP,
        "fr_ratio": FR_GRID_RATIO,
        "marker_size": 6.0,
        "chart_height": 600,
    }
    for key, val in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = val


init_session_state()

st.title("CPTu Soil Behaviour Type Chart")
st.caption("Qtn · Fr · CD = 70 · IB = 22 / 32 boundaries")

st.markdown("---")
st.markdown(
    "Use the **sidebar pages** to load a CPTu sounding and plot it. "
    "Start with **Load Soundings**, then open **SBT Chart**."
)
st.markdown(
    "Input files are delimited text with a header row containing "
    "`depth`, `qt`, `fs`, `u2` and `sigma_vo_eff`."
)

dataset = st.session_state.get("dataset")
if dataset is not None:
    st.sidebar.success(f"Loaded: {dataset.source or 'sounding'} ({len(dataset)} rows)")
else:
    st.sidebar.info("No sounding loaded.")
