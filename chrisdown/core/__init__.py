"""markdown to HTML rendering core."""

from chrisdown.core.blocks import list_style, render
from chrisdown.core.images import rewrite_image_urls
from chrisdown.core.inline import format_inline
from chrisdown.core.models import RenderConfig

__all__ = [
    "render",
    "RenderConfig",
    "format_inline",
    "rewrite_image_urls",
    "list_style",
]
