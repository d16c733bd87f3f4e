"""Rich-text rendering of a round's diff for QLabel display."""

from __future__ import annotations

import html

from vegam.core.comparator import CharStatus, DiffResult
from vegam.ui.colors import RoundColors


def _escape(text: str) -> str:
    return html.escape(text, quote=True).replace("\n", "<br>")


def _span(css_class: str, style: str, text: str) -> str:
    return f'<span class="{css_class}" style="{style}">{_escape(text)}</span>'


def render_diff_html(diff: DiffResult, typed: str) -> str:
    """Build the overlay markup: typed characters colored by status, then the pending text."""
    fragments = []
    for status, chunk in diff.runs(typed):
        if status is CharStatus.MATCH:
            fragments.append(_span("correct", f"color:{RoundColors.CORRECT};", chunk))
        else:
            style = f"color:{RoundColors.INCORRECT}; background:{RoundColors.INCORRECT_BG};"
            fragments.append(_span("incorrect", style, chunk))
    if diff.pending_suffix:
        fragments.append(_span("pending", f"color:{RoundColors.PENDING};", diff.pending_suffix))
    return "".join(fragments)
