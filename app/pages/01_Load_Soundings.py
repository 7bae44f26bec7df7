"""Page 1: Load a CPTu sounding file."""

import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent.parent))
from cptu_sbt.config import ChartSettings
from cptu_sbt.loader import LoadResult, install_dataset, load_dataset
from cptu_sbt.normalizer import normalize, points_to_frame

st.header("Load Soundings")
st.caption("Delimited text with a header row: depth, qt, fs, u2, sigma_vo_eff")

_DELIMITERS = {
    "Auto-detect": None,
    "Comma (,)": ",",
    "Semicolon (;)": ";",
    "Tab": "\t",
}

delim_choice = st.selectbox(
    "Delimiter",
    list(_DELIMITERS),
    index=list(_DELIMITERS).index(st.session_state.get("delimiter", "Auto-detect")),
)
st.session_state.delimiter = delim_choice

uploaded = st.file_uploader(
    "Upload CPTu data (.csv, .txt)",
    type=["csv", "txt", "tsv"],
    key="cptu_file_uploader",
)

if uploaded is not None:
    # Parse on fresh upload or if file / delimiter changed
    file_bytes = uploaded.getvalue()
    cache_key = f"{delim_choice}:{uploaded.name}:{len(file_bytes)}"

    if st.session_state.get("_load_cache_key") != cache_key:
        result = load_dataset(
            file_bytes,
            source=uploaded.name,
            settings=ChartSettings(delimiter=_DELIMITERS[delim_choice]),
        )
        st.session_state["load_result"] = result
        st.session_state["_load_cache_key"] = cache_key
        # A failed load leaves the previous dataset in place
        st.session_state["dataset"] = install_dataset(st.session_state.get("dataset"), result)

    result: LoadResult = st.session_state.get("load_result")

    if result is None:
        st.warning("No load result available. Try re-uploading.")
    elif not result.success:
        for err in result.errors:
            st.error(err)
        if st.session_state.get("dataset") is not None:
            st.info(f"Previously loaded data is still available: {st.session_state.dataset.source}")
    else:
        st.success("File loaded successfully!")
        if result.warnings:
            with st.expander(f"Warnings ({len(result.warnings)})", expanded=False):
                for w in result.warnings:
                    st.warning(w)

st.markdown("---")

dataset = st.session_state.get("dataset")
if dataset is None:
    st.info("No sounding loaded yet.")
    st.stop()

st.subheader(f"Current Dataset: {dataset.source or 'sounding'}")
st.metric("Rows", len(dataset))
if not dataset.is_empty:
    df = points_to_frame(normalize(dataset.records))
    st.dataframe(df, width="stretch", hide_index=True)
