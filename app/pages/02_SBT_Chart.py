"""Page 2: Robertson SBT chart — Qtn vs Fr with CD / IB boundaries."""

import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent.parent))
from cptu_sbt.boundaries import fr_sampling_grid
from cptu_sbt.chart import ChartResult, NoDataLoadedError, build_chart_result
from cptu_sbt.config import FR_GRID_RATIO, FR_GRID_START, FR_GRID_STOP, ChartSettings

st.header("SBT Chart")
st.caption("Normalized cone resistance Qtn vs friction ratio Fr, log-log")

# Widget defaults when this page is opened before the main page
for _key, _val in (
    ("fr_start", FR_GRID_START),
    ("fr_stop", FR_GRID_STOP),
    ("fr_ratio", FR_GRID_RATIO),
    ("marker_size", 6.0),
    ("chart_height", 600),
):
    st.session_state.setdefault(_key, _val)

# --- Chart options ---
with st.expander("Chart Options", expanded=False):
    col1, col2, col3 = st.columns(3)
    with col1:
        fr_start = st.number_input(
            "Fr grid start (%)", min_value=0.001, max_value=1.0, step=0.01, format="%.3f",
            key="fr_start",
        )
    with col2:
        fr_stop = st.number_input(
            "Fr grid stop (%)", min_value=1.0, max_value=100.0, step=1.0, format="%.1f",
            key="fr_stop",
        )
    with col3:
        fr_ratio = st.number_input(
            "Grid ratio", min_value=1.01, max_value=2.0, step=0.01, format="%.2f",
            key="fr_ratio",
        )
    col4, col5 = st.columns(2)
    with col4:
        marker_size = st.slider("Marker size", 2.0, 14.0, key="marker_size")
    with col5:
        height = st.slider("Chart height (px)", 400, 1000, key="chart_height")

settings = ChartSettings(
    fr_start=fr_start,
    fr_stop=fr_stop,
    fr_ratio=fr_ratio,
    marker_size=marker_size,
    height=height,
)
st.caption(f"{len(fr_sampling_grid(fr_start, fr_stop, fr_ratio))} Fr samples per boundary curve")

if st.button("Plot", type="primary"):
    try:
        st.session_state["chart_result"] = build_chart_result(st.session_state.get("dataset"), settings)
    except NoDataLoadedError as e:
        st.session_state.pop("chart_result", None)
        st.error(str(e))

if "chart_result" in st.session_state:
    result: ChartResult = st.session_state["chart_result"]
    current = st.session_state.get("dataset")
    if current is not result.dataset:
        st.info(
            f"Showing the last plot ({result.dataset.source or 'sounding'}). "
            "Press Plot to chart the currently loaded data."
        )

    st.plotly_chart(result.sbt_figure, width="stretch")

    st.subheader("Depth Profile")
    st.plotly_chart(result.depth_figure, width="stretch")

    # Download matches the plotted data, not whatever is loaded now
    st.download_button(
        label="Download Normalized Data (CSV)",
        data=result.table.to_csv(index=False),
        file_name=result.csv_name,
        mime="text/csv",
        width="stretch",
    )
