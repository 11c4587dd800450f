"""Markdown to HTML conversion for the editor preview."""

from .renderer import convert_to_html, render_markdown

__all__ = ("convert_to_html", "render_markdown")
