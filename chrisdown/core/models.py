"""Data models for a single render call."""

from dataclasses import dataclass, field
from typing import Optional

TAB_WIDTH = 4


@dataclass(frozen=True)
class RenderConfig:
    """Renderer configuration."""

    image_base_url: Optional[str] = None  # prefix for relative image paths


@dataclass(frozen=True)
class Line:
    """Single source line with its indentation measured."""

    indent: int
    text: str
    raw: str = ""

    @classmethod
    def from_raw(cls, raw: str) -> "Line":
        """builds a Line from raw text, dropping a trailing carriage return."""
        raw = raw.rstrip("\r")
        expanded = raw.expandtabs(TAB_WIDTH)
        stripped = expanded.lstrip()
        return cls(
            indent=len(expanded) - len(stripped), text=stripped.rstrip(), raw=raw
        )

    @property
    def is_blank(self) -> bool:
        return not self.text


@dataclass(frozen=True)
class ListLevel:
    """Open list element on the nesting stack."""

    ordered: bool
    depth: int


@dataclass
class RenderState:
    """Mutable state owned by one render call."""

    in_paragraph: bool = False
    in_code_block: bool = False
    code_language: str = ""
    list_stack: list[ListLevel] = field(default_factory=list)
    parts: list[str] = field(default_factory=list)

    def emit(self, text: str) -> None:
        self.parts.append(text)

    def output(self) -> str:
        return "".join(self.parts)
