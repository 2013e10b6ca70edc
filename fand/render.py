"""Result tree rendering — compact JSON or an indented, colored report."""

from __future__ import annotations

import json

from rich.console import Console
from rich.text import Text

from fand.config import settings
from fand.result import Issue, Priority, Result

INDENT_STEP = 2

# longest issue token is "UNKNOWN"; one extra column of separation
ISSUE_RESERVE = len("UNKNOWN") + 1

ISSUE_TOKENS = {
    Issue.NO: ("OK", "bold green"),
    Issue.MAYBE: ("UNKNOWN", "bold yellow"),
    Issue.YES: ("NOT OK", "red"),
}

PRIORITY_STYLES = {
    Priority.EMERGENCY: "red",
    Priority.ALERT: "red",
    Priority.ERROR: "red",
    Priority.WARNING: "bold yellow",
    Priority.NOTICE: "bold green",
    Priority.INFO: "bold green",
    Priority.DEBUG: "bold green",
}


def line_wrap(
    text: str,
    width: int,
    leading_indent: int,
    hanging_indent: int,
    fill: str = ".",
) -> str:
    """Wrap ``text`` to ``width`` columns, padding lines with ``fill``.

    The first line is indented by ``leading_indent`` and continuation lines by
    ``hanging_indent``. Lines break at the last space at or before the width;
    a word longer than the width runs on to the next space.
    """
    if len(text) + leading_indent <= width:
        return " " * leading_indent + text + fill * (width - len(text) - leading_indent)

    lines: list[str] = []
    cur = 0
    indent = leading_indent
    boundary = width - indent

    while boundary < len(text):
        space = text.rfind(" ", 0, boundary + 1)
        if space == -1 or space <= cur:
            space = text.find(" ", boundary)
            if space == -1:
                break
        lines.append(_pad(" " * indent + text[cur:space], width, fill))
        cur = space + 1
        indent = hanging_indent
        boundary = cur + width - indent

    lines.append(_pad(" " * indent + text[cur:], width, fill))
    return "\n".join(lines)


def _pad(line: str, width: int, fill: str) -> str:
    return line + fill * max(width - len(line), 0)


def issue_text(issue: Issue) -> Text:
    token, style = ISSUE_TOKENS[issue]
    return Text(token, style=style)


def priority_text(priority: Priority) -> Text:
    return Text(priority.name, style=PRIORITY_STYLES[priority])


def report_width(console: Console) -> int:
    """Columns available to the wrapped text, leaving room for the issue token."""
    if console.is_terminal:
        return max(console.width - ISSUE_RESERVE, 20)
    return settings.fallback_width


def render_human(result: Result, width: int, indent: int = 0) -> Text:
    """Pre-order, indented rendering of a result tree."""
    out = Text()
    _render(out, result, width, indent)
    return out


def _render(out: Text, node: Result, width: int, indent: int) -> None:
    out.append(line_wrap(node.brief, width, indent, indent + INDENT_STEP))
    out.append_text(issue_text(node.issue))
    out.append("\n")

    if node.detail:
        out.append(
            line_wrap(node.detail, width, indent + INDENT_STEP, indent + 2 * INDENT_STEP, " ")
        )
        out.append("\n")

    out.append("Level: ")
    out.append_text(priority_text(node.priority))
    out.append("\n")

    for child in node.children:
        _render(out, child, width, indent + INDENT_STEP)


def render_json(result: Result) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, separators=(",", ":"))


def print_result(console: Console, result: Result, as_json: bool = False) -> None:
    if as_json:
        console.out(render_json(result), highlight=False)
        return
    console.print(render_human(result, report_width(console)), end="", soft_wrap=True)
