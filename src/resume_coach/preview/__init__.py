"""Markdown preview with inline suggestions."""
from resume_coach.preview.blocks import Block, split_blocks
from resume_coach.preview.renderer import render_preview_html, save_html

__all__ = ["Block", "render_preview_html", "save_html", "split_blocks"]
