"""Documentation comments for generated declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass

_TAG = re.compile(r"</?[A-Za-z][^>]*>")


@dataclass(frozen=True)
class Documentation:
    """Cleaned documentation text attached to a declaration or member."""

    lines: tuple[str, ...]

    @property
    def is_single_line(self) -> bool:
        return len(self.lines) == 1

    def as_comment(self, indent: str = "") -> str:
        """Render as a JSDoc comment, one line when possible."""
        lines = [line.replace("*/", "*\\/") for line in self.lines]
        if len(lines) == 1:
            return f"{indent}/** {lines[0]} */"
        body = "\n".join(f"{indent} * {line}" for line in lines)
        return f"{indent}/**\n{body}\n{indent} */"


def clean_documentation(text: str | None) -> Documentation | None:
    """Strip markup, trim lines and drop blank lines.

    Returns None when nothing is left.
    """
    if not text:
        return None
    stripped = _TAG.sub("", text)
    lines = tuple(line.strip() for line in stripped.splitlines() if line.strip())
    if not lines:
        return None
    return Documentation(lines=lines)
