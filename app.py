# app.py
"""
Indonesia is Big: click any country to see Indonesia's outline scaled to it

Indonesia's boundary is shrunk or grown by the square root of the area ratio
and recentered on the clicked country, with a text comparison next to the map.
"""

import logging
from datetime import datetime

import streamlit as st
from streamlit_folium import st_folium

from sizecompare.comparison import ComparisonOrchestrator
from sizecompare.config import AREAS_PATH, BOUNDARIES_URL, CACHE_DIR, REFERENCE_COUNTRY, REFERENCE_FACTS
from sizecompare.errors import LoadError
from sizecompare.loader import load_datasets
from sizecompare.mapview import build_map, clicked_region_name
from sizecompare.registry import BoundaryRegistry

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("sizecompare.app")

# --------------------------
# Config
# --------------------------
st.set_page_config(page_title=f"{REFERENCE_COUNTRY} is Big", layout="wide")

st.title(f"{REFERENCE_COUNTRY} is Big")
st.markdown("I promise it's bigger than it looks. Here's the proof.")

# =========================
# Data loading (once per session)
# =========================
@st.cache_data(show_spinner=False)
def fetch_datasets(boundaries_source: str, areas_source: str):
    return load_datasets(boundaries_source, areas_source, cache_dir=CACHE_DIR)


def get_orchestrator():
    if "orchestrator" in st.session_state:
        return st.session_state["orchestrator"]

    orchestrator = None
    try:
        with st.spinner("Loading country boundaries..."):
            features, areas = fetch_datasets(BOUNDARIES_URL, AREAS_PATH)
        registry = BoundaryRegistry.build(features, areas, reference=REFERENCE_COUNTRY)
        orchestrator = ComparisonOrchestrator(registry)
    except LoadError as e:
        logger.error("Error loading data: %s", e)
        st.session_state["load_error"] = str(e)
    st.session_state["orchestrator"] = orchestrator
    return orchestrator


orchestrator = get_orchestrator()

# =========================
# UI
# =========================
col1, col2 = st.columns([3, 1])

with col2:
    st.header("Comparison")
    message_slot = st.empty()

    if st.button("Reset Comparison", type="primary", disabled=orchestrator is None):
        # last_click is kept: st_folium keeps returning the old click after a reset
        orchestrator.reset()

    st.markdown("---")
    st.subheader(f"{REFERENCE_COUNTRY} quick facts")
    for label, value in REFERENCE_FACTS:
        st.markdown(f"- {label}: **{value}**")

    st.markdown("---")
    st.subheader("Recent comparisons")
    history_slot = st.container()

    st.caption("Click & drag to move the map. Click any country to see the size comparison.")

with col1:
    if st.session_state.get("load_error"):
        st.error(f"Failed to load country data: {st.session_state['load_error']}")
        st.info("The map is still usable, but countries cannot be compared until the data loads.")

    m = build_map(
        registry=orchestrator.registry if orchestrator else None,
        overlay=orchestrator.overlay if orchestrator else None,
    )
    out = st_folium(m, width=1000, height=620, key="world_map", returned_objects=["last_active_drawing", "last_object_clicked"])

# =========================
# Click handling
# =========================
if orchestrator is not None and out:
    name = clicked_region_name(out.get("last_active_drawing"))
    clicked = out.get("last_object_clicked") or {}
    click_key = (name, clicked.get("lat"), clicked.get("lng"))
    if name and click_key != st.session_state.get("last_click"):
        st.session_state["last_click"] = click_key
        region = orchestrator.registry.get(name)
        # Leaflet only reports completed clicks, so the gesture is a zero-displacement press
        if region is not None and region.interaction is not None:
            region.interaction.click()
            st.rerun()

# =========================
# Outputs
# =========================
if orchestrator is not None:
    message_slot.markdown(f"**{orchestrator.message}**")
    with history_slot:
        if len(orchestrator.history):
            for entry in orchestrator.history.entries:
                stamp = datetime.fromtimestamp(entry.timestamp).strftime("%H:%M")
                st.markdown(f"**{entry.country}** ({stamp})  \n{entry.detail}")
        else:
            st.caption("No comparisons yet, click a country to start.")
else:
    message_slot.warning("Country data unavailable.")
