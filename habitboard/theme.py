import streamlit as st

THEME_PRESETS = {
    "dark": {
        "bg_main": "#121017",
        "bg_glow": "#1f1a2a",
        "bg_card": "#1e1a27",
        "border": "#5b4f70",
        "text_main": "#f3edf9",
        "text_soft": "#c8bbd8",
        "button": "#5f4f79",
        "button_hover": "#725f90",
        "accent": "#8e79af",
        "plot_grid": "#3d3550",
        "plot_marker_line": "#ddd1ea",
        "today_border": "#d9c979",
    },
    "light": {
        "bg_main": "#f7f3ed",
        "bg_glow": "#eee2d3",
        "bg_card": "#fff9f1",
        "border": "#c4b59f",
        "text_main": "#1b1b1b",
        "text_soft": "#5d5d5d",
        "button": "#b29a7d",
        "button_hover": "#9f876b",
        "accent": "#8f7aa9",
        "plot_grid": "#d9ccbb",
        "plot_marker_line": "#ffffff",
        "today_border": "#9b845f",
    },
}


def ensure_theme_state():
    if st.session_state.get("ui_theme") not in THEME_PRESETS:
        st.session_state["ui_theme"] = "dark"
    return st.session_state["ui_theme"]


def get_active_theme():
    name = ensure_theme_state()
    return name, THEME_PRESETS[name]


def toggle_theme():
    name = ensure_theme_state()
    st.session_state["ui_theme"] = "light" if name == "dark" else "dark"


def inject_theme_css():
    _, theme = get_active_theme()
    st.markdown(
        f"""
<style>
@import url('https://fonts.googleapis.com/css2?family=Crimson+Text:wght@400;600&family=IBM+Plex+Sans:wght@300;400;500&display=swap');

:root {{
    --bg-main: {theme['bg_main']};
    --bg-glow: {theme['bg_glow']};
    --bg-card: {theme['bg_card']};
    --border: {theme['border']};
    --text-main: {theme['text_main']};
    --text-soft: {theme['text_soft']};
    --button: {theme['button']};
    --button-hover: {theme['button_hover']};
    --today-border: {theme['today_border']};
}}

html, body, [class*="css"] {{
    font-family: 'IBM Plex Sans', sans-serif;
    color: var(--text-main);
}}

h1, h2, h3, .page-title, .section-title {{
    font-family: 'Crimson Text', serif;
    letter-spacing: 0.4px;
}}

.stApp {{
    background: radial-gradient(1400px 900px at 20% 0%, var(--bg-glow) 0%, var(--bg-main) 58%);
    color: var(--text-main);
}}

.section-title {{
    font-size: 1.35rem;
    margin: 0.4rem 0 0.6rem 0;
}}

.stButton > button {{
    background: var(--button);
    color: var(--text-main);
    border: 1px solid var(--border);
    border-radius: 8px;
}}

.stButton > button:hover {{
    background: var(--button-hover);
}}

.grid-today {{
    border: 1px solid var(--today-border);
    border-radius: 6px;
}}

.metric-card {{
    background: var(--bg-card);
    border: 1px solid var(--border);
    border-radius: 10px;
    padding: 0.8rem 1rem;
}}
</style>
""",
        unsafe_allow_html=True,
    )
