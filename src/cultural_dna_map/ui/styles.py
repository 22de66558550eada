from __future__ import annotations


PALETTE = {
    "background": "#050509",
    "text": "#dddddd",
    "link": "#444444",
    "central": "#b36cff",
    "track": "#6c8cff",
    "tag": "#e08a3c",
    "genre": "#3d365b",
    "context": "#2a2838",
    "placeholder": "#5c5c66",
    "border": "#050509",
}

NODE_SIZES = {
    "central": 28,
    "context": 14,
    "track": 20,
    "tag": 16,
    "genre": 18,
}

APP_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;800&display=swap');

:root {
  --bg: #0b0b12;
  --surface: #14141f;
  --text: #ededf3;
  --muted: #9a98ad;
  --border: #2a2838;
  --accent: #b36cff;
  --accent-soft: #2b1e40;
  --tag: #e08a3c;
  --radius: 12px;
}

html, body, [class*="css"] {
  font-family: 'Manrope', sans-serif;
}

.stApp {
  background: radial-gradient(circle at 15% 0%, rgba(179,108,255,0.10), transparent 40%), var(--bg);
  color: var(--text);
}

.info-section {
  background: var(--surface);
  border: 1px solid var(--border);
  border-radius: var(--radius);
  padding: 0.65rem 0.85rem;
  margin-bottom: 0.6rem;
}

.info-label {
  font-size: 0.72rem;
  text-transform: uppercase;
  letter-spacing: 0.06em;
  color: var(--muted);
  margin-bottom: 0.2rem;
}

.info-main {
  font-size: 0.92rem;
  line-height: 1.45;
}

.graph-empty {
  color: var(--muted);
  padding: 2rem;
  text-align: center;
  border: 1px dashed var(--border);
  border-radius: var(--radius);
}

.map-title {
  font-weight: 800;
  font-size: 1.05rem;
  margin-bottom: 0.4rem;
}
</style>
"""


def info_section(label: str, main: str) -> str:
    return (
        "<div class='info-section'>"
        f"<div class='info-label'>{label}</div>"
        f"<div class='info-main'>{main}</div>"
        "</div>"
    )
