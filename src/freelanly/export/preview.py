from __future__ import annotations

from pathlib import Path

import markdown
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

from freelanly.export.pdf_exporter import is_heading

BASE_TEMPLATE_DIR = Path(__file__).parent


def render_html_preview(body: str, title: str = "Document") -> str:
    """Convert a plain-text document body to a styled HTML page for preview."""
    html_body = markdown.markdown(
        _to_markdown(body),
        extensions=["nl2br"],
    )
    env = Environment(
        loader=FileSystemLoader(str(BASE_TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template("preview.html")
    return template.render(title=title, body=Markup(html_body))


def _to_markdown(body: str) -> str:
    """Marker lines become headings; everything else is escaped text."""
    lines = []
    for line in body.splitlines():
        text = str(escape(line.strip()))
        if text and is_heading(line):
            lines.append(f"## {text}")
        else:
            lines.append(text)
    return "\n".join(lines)
