"""Inline span formatting for block text content."""

import re

IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
BOLD_PATTERNS = (re.compile(r"\*\*(.+?)\*\*"), re.compile(r"__(.+?)__"))
ITALIC_PATTERNS = (re.compile(r"\*(.+?)\*"), re.compile(r"_(.+?)_"))
CODE_PATTERN = re.compile(r"`([^`]+)`")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
STRIKE_PATTERN = re.compile(r"~~(.+?)~~")

# marks an image tag held back from the emphasis passes
PLACEHOLDER = "╣"
PLACEHOLDER_PATTERN = re.compile(f"{PLACEHOLDER}(\\d+){PLACEHOLDER}")
# literal placeholder characters wait here; html.escape never produces it
PLACEHOLDER_ENTITY = "&#9571;"


def _protect_images(text: str) -> tuple[str, list[str]]:
    """replaces images with rendered tags stashed behind placeholders."""
    images: list[str] = []

    def replacer(match: re.Match[str]) -> str:
        images.append(f'<img src="{match.group(2)}" alt="{match.group(1)}">')
        return f"{PLACEHOLDER}{len(images) - 1}{PLACEHOLDER}"

    text = text.replace(PLACEHOLDER, PLACEHOLDER_ENTITY)
    return IMAGE_PATTERN.sub(replacer, text), images


def _restore_images(text: str, images: list[str]) -> str:
    """puts stashed image tags and literal placeholder characters back."""
    text = PLACEHOLDER_PATTERN.sub(lambda m: images[int(m.group(1))], text)
    return text.replace(PLACEHOLDER_ENTITY, PLACEHOLDER)


def format_inline(text: str) -> str:
    """
    rewrites inline markdown spans into HTML.

    Expects text that has already been HTML-escaped. Passes run in a fixed
    order: images, bold, italic, code, links, strikethrough. Images go first
    so their syntax is never read as a link, and bold goes before italic so
    doubled delimiters are consumed whole.

    Args:
        text: escaped block text

    Returns:
        text with inline spans converted to HTML tags
    """
    text, images = _protect_images(text)

    for pattern in BOLD_PATTERNS:
        text = pattern.sub(r"<strong>\1</strong>", text)
    for pattern in ITALIC_PATTERNS:
        text = pattern.sub(r"<em>\1</em>", text)

    text = CODE_PATTERN.sub(r"<code>\1</code>", text)
    text = LINK_PATTERN.sub(r'<a href="\2">\1</a>', text)
    text = STRIKE_PATTERN.sub(r"<del>\1</del>", text)

    return _restore_images(text, images)
