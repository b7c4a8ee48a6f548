"""Icon record models shared by both container formats."""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

DEFAULT_VIEW_BOX = "0 0 24 24"
# Must collapse to a valid JS identifier
ICON_NAME_PATTERN = r"^[A-Za-z_$][\w$:-]*$"

_NUMBER = r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
# min-x min-y width height, separated by whitespace and/or a comma
VIEW_BOX_PATTERN = rf"^\s*{_NUMBER}(?:(?:\s+|\s*,\s*){_NUMBER}){{3}}\s*$"

# Words that cannot be bound by `export const` in a module (strict mode)
JS_RESERVED_WORDS = frozenset({
    "arguments", "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "enum", "eval", "export",
    "extends", "false", "finally", "for", "function", "if", "implements", "import",
    "in", "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this", "throw",
    "true", "try", "typeof", "var", "void", "while", "with", "yield",
})

_NAME_SPLIT_RE = re.compile(r"[-:]")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")


def to_identifier(name: str) -> str:
    """Collapse an icon name into its module identifier.

    ``arrow-right`` -> ``arrowRight``, ``mdi:home`` -> ``mdiHome``.
    """
    parts = _NAME_SPLIT_RE.split(name)
    return parts[0] + "".join(p[:1].upper() + p[1:] for p in parts[1:])


def to_icon_name(identifier: str) -> str:
    """Best-effort inverse of :func:`to_identifier` (``arrowRight`` -> ``arrow-right``)."""
    return _CAMEL_BOUNDARY_RE.sub(r"\1-\2", identifier).lower()


def check_icon_name(name: str) -> str:
    identifier = to_identifier(name)
    if identifier in JS_RESERVED_WORDS:
        raise ValueError(f"{name!r} becomes the reserved word {identifier!r}")
    return name


IconName = Annotated[str, Field(pattern=ICON_NAME_PATTERN), AfterValidator(check_icon_name)]
ViewBox = Annotated[str, Field(pattern=VIEW_BOX_PATTERN)]


class IconAnimation(BaseModel):
    type: str
    duration: float = 1.0
    timing: str = "ease"
    iteration: str = "infinite"
    delay: float | None = None
    direction: str | None = None


class IconRecord(BaseModel):
    """One icon as stored in a container file."""

    name: IconName
    body: str = ""
    view_box: ViewBox = DEFAULT_VIEW_BOX
    animation: IconAnimation | None = None

    @property
    def identifier(self) -> str:
        return to_identifier(self.name)
