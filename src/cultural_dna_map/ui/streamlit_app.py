from __future__ import annotations

import asyncio
import html
import logging
from pathlib import Path
from typing import Any

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from cultural_dna_map.models.types import Graph, TrackRecord
from cultural_dna_map.pipeline.navigation import GENRE_FOCUS, NavigationController, NavigationError, ViewUpdate
from cultural_dna_map.ui.render import empty_graph_html, render_graph_html
from cultural_dna_map.ui.state import featured_tracks, init_session_state, reset_session_state
from cultural_dna_map.ui.styles import APP_CSS, info_section
from cultural_dna_map.utils.io import load_config

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "default.yaml"
GRAPH_HEIGHT = 540


@st.cache_resource(show_spinner=False)
def _load_app_config(config_path: str) -> dict[str, Any]:
    config = load_config(config_path)
    level = str((config.get("logging") or {}).get("level", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return config


def _inject_styles() -> None:
    st.markdown(APP_CSS, unsafe_allow_html=True)


def _run(coro: Any) -> Any:
    try:
        return asyncio.run(coro)
    except NavigationError as exc:
        st.session_state["last_error"] = str(exc)
        return None


def _report(update: ViewUpdate | None) -> None:
    if update is not None and not update.applied:
        st.toast("A newer selection finished first; this result was discarded.")


def _render_sidebar(controller: NavigationController, config: dict[str, Any]) -> None:
    st.sidebar.markdown("### Find a track")
    with st.sidebar.form("search_form", clear_on_submit=False):
        query = st.text_input("Search iTunes", value=st.session_state.get("search_query", ""))
        submitted = st.form_submit_button("Search")
    if submitted and query.strip():
        st.session_state["search_query"] = query.strip()
        with st.spinner("Searching..."):
            st.session_state["search_results"] = _run(controller.search(query.strip())) or []

    results: list[TrackRecord] = st.session_state.get("search_results", [])
    if st.session_state.get("search_query") and not results:
        st.sidebar.caption("No tracks found. Try another search.")

    tracks = results or featured_tracks(config)
    st.sidebar.markdown("#### Results" if results else "#### Featured")
    for idx, track in enumerate(tracks):
        label = f"{track.name} - {track.artist}"
        if st.sidebar.button(label, key=f"track_card_{idx}_{track.track_id or label}", use_container_width=True):
            with st.spinner(f"Loading tags for {track.name}..."):
                _report(_run(controller.select_track(track)))

    st.sidebar.divider()
    if st.sidebar.button("Reset session", key="reset_session"):
        reset_session_state(st.session_state, config)
        st.rerun()


def _render_graph(controller: NavigationController) -> None:
    graph = controller.graph
    title = graph.title if graph is not None else "Cultural DNA Map"
    st.markdown(f"<div class='map-title'>{html.escape(title)}</div>", unsafe_allow_html=True)

    if graph is None:
        st.markdown(empty_graph_html("Pick a track to map its genre DNA."), unsafe_allow_html=True)
        return
    if not graph.nodes:
        st.markdown(empty_graph_html(), unsafe_allow_html=True)
        return

    components.html(render_graph_html(graph, height=f"{GRAPH_HEIGHT - 20}px"), height=GRAPH_HEIGHT, scrolling=False)
    _render_node_chips(controller, graph)

    with st.expander("Nodes", expanded=False):
        frame = pd.DataFrame(
            [
                {
                    "id": node.id,
                    "label": node.label,
                    "kind": node.kind,
                    "central": node.is_central,
                    "context": node.is_context,
                    "placeholder": node.is_placeholder,
                }
                for node in graph.nodes
            ]
        )
        st.dataframe(frame, use_container_width=True, hide_index=True)


def _render_node_chips(controller: NavigationController, graph: Graph) -> None:
    clickable = [node for node in graph.nodes if not node.is_central]
    if not clickable:
        st.caption("No related nodes for this view.")
        return

    st.markdown("**Explore**")
    columns = st.columns(4)
    for idx, node in enumerate(clickable):
        prefix = "↩ " if node.is_context else ""
        with columns[idx % 4]:
            if st.button(f"{prefix}{node.label}", key=f"node_{graph.title}_{node.id}", use_container_width=True):
                with st.spinner(f"Opening {node.label}..."):
                    _report(_run(controller.click_node(node)))
                st.rerun()


def _render_panel(controller: NavigationController) -> None:
    panel = controller.panel
    if controller.can_go_back:
        if st.button("← Back to track", key="back_to_track", type="primary"):
            with st.spinner("Restoring track view..."):
                _report(_run(controller.click_back()))
            st.rerun()

    if panel is None:
        st.markdown(info_section("Overview", "Search for a track or pick a featured one."), unsafe_allow_html=True)
        return

    st.markdown(f"### {html.escape(str(panel.get('title', '')))}")
    for section in panel.get("sections", []):
        label = html.escape(str(section.get("label", "")))
        main = html.escape(str(section.get("main", "")))
        url = section.get("url")
        if label == "Artwork" and url:
            st.image(url, use_container_width=True)
            continue
        if label == "Preview" and url:
            st.markdown(info_section(label, ""), unsafe_allow_html=True)
            st.audio(url)
            continue
        if url:
            main = f"{main}<br/><a href='{html.escape(url)}' target='_blank'>Open on Wikipedia</a>"
        st.markdown(info_section(label, main), unsafe_allow_html=True)

    _render_hover_preview(controller)


def _render_hover_preview(controller: NavigationController) -> None:
    graph = controller.graph
    if graph is None:
        return
    names = [node.label for node in graph.nodes if node.kind != "track" and not node.is_central]
    if not names:
        return
    with st.expander("Genre preview", expanded=False):
        name = st.selectbox("Preview a tag or genre", names, key=f"hover_select_{graph.title}")
        if st.button("Show preview", key="hover_button"):
            st.session_state["hover_name"] = name
            st.session_state["hover_section"] = _run(controller.hover(name))
        section = st.session_state.get("hover_section")
        if section and st.session_state.get("hover_name") == name:
            st.markdown(
                info_section(html.escape(str(section.get("label", ""))), html.escape(str(section.get("main", "")))),
                unsafe_allow_html=True,
            )


def main() -> None:
    st.set_page_config(
        page_title="Cultural DNA Map",
        page_icon="\U0001F3A7",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    _inject_styles()

    config = _load_app_config(str(DEFAULT_CONFIG_PATH))
    controller = init_session_state(st.session_state, config)

    _render_sidebar(controller, config)

    error = st.session_state.get("last_error", "")
    if error:
        st.warning(error)
        st.session_state["last_error"] = ""

    graph_col, panel_col = st.columns([3, 2])
    with graph_col:
        _render_graph(controller)
    with panel_col:
        _render_panel(controller)

    if controller.state.kind == GENRE_FOCUS and controller.state.context_track is not None:
        track = controller.state.context_track
        st.caption(f"Exploring from {track.name} - {track.artist}")


if __name__ == "__main__":
    main()
