"""Line-oriented block rendering: paragraphs, headings, code blocks and lists."""

import html
import re
from typing import Optional

from chrisdown.core.images import rewrite_image_urls
from chrisdown.core.inline import format_inline
from chrisdown.core.models import Line, ListLevel, RenderConfig, RenderState

LIST_ITEM_PATTERN = re.compile(r"^([-*+]|\d+\.|[a-z]\.|[ivxIVX]+\.)\s+(.+)$")
TASK_PATTERN = re.compile(r"^\[([ xX])\]\s+(.+)$")
HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+?)(?:\s+\{#([^}]+)\})?$")
FENCE = "```"

# list-style-type by depth % 3
UNORDERED_STYLES = {1: "circle", 2: "disc", 0: "square"}
ORDERED_STYLES = {1: "decimal", 2: "lower-alpha", 0: "upper-roman"}


def render(markdown_text: str, config: Optional[RenderConfig] = None) -> str:
    """
    renders markdown text to an HTML fragment.

    Never raises for string input: malformed syntax falls through to
    paragraph text.

    Args:
        markdown_text: markdown source
        config: renderer configuration (defaults to no image rewriting)

    Returns:
        HTML fragment, without any surrounding document
    """
    config = config or RenderConfig()
    text = rewrite_image_urls(markdown_text, config.image_base_url)
    lines = [Line.from_raw(raw) for raw in text.split("\n")]

    state = RenderState()
    for index, line in enumerate(lines):
        next_line = lines[index + 1] if index + 1 < len(lines) else None
        _render_line(state, line, next_line)

    _close_paragraph(state)
    _close_lists(state)
    if state.in_code_block:
        _close_code_block(state)

    return state.output()


def _render_line(state: RenderState, line: Line, next_line: Optional[Line]) -> None:
    """classifies one line and emits its HTML."""
    if state.in_code_block:
        if line.text.startswith(FENCE):
            _close_code_block(state)
        else:
            state.emit(html.escape(line.raw) + "\n")
        return

    if line.is_blank:
        _close_paragraph(state)
        return

    item = LIST_ITEM_PATTERN.match(line.text)
    if item:
        _render_list_item(state, line, item.group(1), item.group(2), next_line)
        return

    if line.text.startswith(FENCE):
        _open_code_block(state, line.text[len(FENCE) :].strip())
        return

    heading = HEADING_PATTERN.match(line.text)
    if heading:
        _render_heading(state, heading)
        return

    _render_paragraph_line(state, line.text)


def _render_list_item(
    state: RenderState,
    line: Line,
    marker: str,
    content: str,
    next_line: Optional[Line],
) -> None:
    """emits one list item, opening and closing list levels around it."""
    _close_paragraph(state)

    ordered = marker.endswith(".")
    depth = line.indent // 2 + 1

    _close_lists(state, deeper_than=depth)

    # same depth but a different kind of list: the old one ends here
    top = state.list_stack[-1] if state.list_stack else None
    if top is not None and top.depth == depth and top.ordered != ordered:
        _close_lists(state, deeper_than=depth - 1)
        top = state.list_stack[-1] if state.list_stack else None

    if top is None or top.depth < depth:
        _open_list(state, ListLevel(ordered=ordered, depth=depth))

    task = TASK_PATTERN.match(content)
    if task:
        checked = " checked" if task.group(1) in "xX" else ""
        state.emit(
            f'<li><input type="checkbox" disabled{checked}> '
            f"{format_inline(html.escape(task.group(2)))}</li>\n"
        )
    else:
        state.emit(f"<li>{format_inline(html.escape(content))}</li>\n")

    if next_line is None or next_line.is_blank or next_line.indent < line.indent:
        _close_lists(state, deeper_than=depth - 1)


def list_style(ordered: bool, depth: int) -> str:
    """returns the list-style-type used for a list opened at depth."""
    styles = ORDERED_STYLES if ordered else UNORDERED_STYLES
    return styles[depth % 3]


def _open_list(state: RenderState, level: ListLevel) -> None:
    tag = "ol" if level.ordered else "ul"
    style = list_style(level.ordered, level.depth)
    state.emit(f'<{tag} style="list-style-type: {style}">\n')
    state.list_stack.append(level)


def _close_lists(state: RenderState, deeper_than: int = 0) -> None:
    """closes open list levels, innermost first, down to the given depth."""
    while state.list_stack and state.list_stack[-1].depth > deeper_than:
        level = state.list_stack.pop()
        state.emit("</ol>\n" if level.ordered else "</ul>\n")


def _open_code_block(state: RenderState, language: str) -> None:
    _close_paragraph(state)
    _close_lists(state)

    state.in_code_block = True
    state.code_language = language
    if language:
        state.emit(f'<pre><code class="language-{html.escape(language)}">\n')
    else:
        state.emit("<pre><code>\n")


def _close_code_block(state: RenderState) -> None:
    state.emit("</code></pre>\n")
    state.in_code_block = False
    state.code_language = ""


def _render_heading(state: RenderState, match: re.Match[str]) -> None:
    _close_paragraph(state)
    _close_lists(state)

    level = len(match.group(1))
    text = format_inline(html.escape(match.group(2)))
    anchor = match.group(3)
    id_attr = f' id="{html.escape(anchor)}"' if anchor else ""
    state.emit(f"<h{level}{id_attr}>{text}</h{level}>\n")


def _render_paragraph_line(state: RenderState, text: str) -> None:
    """appends a line to the open paragraph, opening one if needed."""
    if state.in_paragraph:
        state.emit(" ")
    else:
        # any non-list block ends open lists, not just the lookahead
        _close_lists(state)
        state.emit("<p>")
        state.in_paragraph = True
    state.emit(format_inline(html.escape(text)))


def _close_paragraph(state: RenderState) -> None:
    if state.in_paragraph:
        state.emit("</p>\n")
        state.in_paragraph = False
