"""Render a resume preview with suggestions attached to their blocks."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from resume_coach.models.suggestion import SuggestionItem
from resume_coach.preview.blocks import split_blocks
from resume_coach.refresh.suggestion_state import match_suggestions

HTML_TEMPLATES_DIR = Path(__file__).parent / "html"


def annotate_blocks(
    content: str, suggestions: Iterable[SuggestionItem]
) -> list[tuple[str, list[str]]]:
    """Pair each rendered block's HTML with the advice that matches it."""
    items = list(suggestions)
    annotated = []
    for block in split_blocks(content):
        advice = (
            [item.advice for item in match_suggestions(block.text, items)]
            if block.annotatable
            else []
        )
        annotated.append((block.html, advice))
    return annotated


def render_preview_html(
    content: str,
    suggestions: Iterable[SuggestionItem] = (),
    title: str = "Resume",
) -> str:
    """Render resume markdown plus inline suggestions to a standalone HTML page."""
    env = Environment(
        loader=FileSystemLoader(str(HTML_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
    )
    template = env.get_template("preview.html")
    return template.render(title=title, blocks=annotate_blocks(content, suggestions))


def save_html(html_content: str, output_path: str | Path) -> Path:
    """Save HTML content to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html_content, encoding="utf-8")
    return path
