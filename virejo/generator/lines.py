"""Line tree used to assemble generated code with explicit indentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union


@dataclass
class CodeBlock:
    """An opener line, an indented body and a closer line."""

    opener: str
    body: List["Fragment"] = field(default_factory=list)
    closer: str = "});"

    def add(self, *fragments: "Fragment") -> "CodeBlock":
        self.body.extend(fragments)
        return self


Fragment = Union[str, CodeBlock]

BLANK = ""


def render_lines(fragments: Iterable[Fragment], *, indent: str = "  ", level: int = 0) -> List[str]:
    """Flatten ``fragments`` into lines; blank strings stay unindented."""
    lines: List[str] = []
    prefix = indent * level
    for fragment in fragments:
        if isinstance(fragment, CodeBlock):
            lines.append(prefix + fragment.opener)
            lines.extend(render_lines(fragment.body, indent=indent, level=level + 1))
            lines.append(prefix + fragment.closer)
        elif fragment == BLANK:
            lines.append("")
        else:
            lines.append(prefix + fragment)
    return lines


def render(fragments: Iterable[Fragment], *, indent: str = "  ") -> str:
    return "\n".join(render_lines(fragments, indent=indent))


def comma_separated(entries: Sequence[str]) -> List[str]:
    """Append a comma to every entry except the last, as in an object literal."""
    return [entry + ("," if index < len(entries) - 1 else "") for index, entry in enumerate(entries)]


__all__ = ["BLANK", "CodeBlock", "Fragment", "comma_separated", "render", "render_lines"]
