"""Module-form output store — ``icons.js`` with one export per icon plus a manifest.

File grammar::

    // header comment
    export const <identifier> = { name: '<name>', body: `<markup>`, viewBox: '<box>' };
    ...
    export const icons = { '<name>': <identifier>, ... };

Mutations are splices at the character spans recorded by :func:`parse_module`,
so every declaration that is not the target stays byte-identical.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from pydantic import ValidationError

from iconsmith.models.icon import DEFAULT_VIEW_BOX, IconAnimation, IconRecord, to_identifier
from iconsmith.store.literal import (
    MalformedContainerError,
    Reference,
    escape_single_quoted,
    escape_template,
    find_matching_brace,
    parse_object,
)

logger = logging.getLogger(__name__)

HEADER = "// Auto-generated by iconsmith\n// Do not edit manually"
DEFAULT_MANIFEST = "icons"

_EXPORT_RE = re.compile(r"export\s+const\s+([\w$]+)\s*=\s*(?=\{)")
_SEMICOLON_RE = re.compile(r"[ \t]*;")


class IdentifierConflictError(ValueError):
    """An icon would be declared under an identifier the module already uses."""


@dataclass
class ModuleEntry:
    """One icon declaration and where it sits in the file."""

    record: IconRecord
    identifier: str
    start: int
    end: int  # just past the closing ';'


@dataclass
class ManifestEntry:
    key: str
    identifier: str


@dataclass
class Manifest:
    name: str
    start: int  # start of the declaration
    inner_start: int  # just past '{'
    inner_end: int  # index of the closing '}'
    entries: list[ManifestEntry] = field(default_factory=list)

    def references(self, name: str, identifier: str) -> bool:
        return any(e.key == name or e.identifier == identifier for e in self.entries)


@dataclass
class IconModule:
    """Deserialized view of a module-form container."""

    content: str
    entries: list[ModuleEntry] = field(default_factory=list)
    manifest: Manifest | None = None
    declared: set[str] = field(default_factory=set)  # every exported identifier

    @property
    def manifest_found(self) -> bool:
        return self.manifest is not None

    @property
    def records(self) -> list[IconRecord]:
        return [e.record for e in self.entries]

    def find(self, identifier: str) -> ModuleEntry | None:
        for entry in self.entries:
            if entry.identifier == identifier:
                return entry
        return None


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------

def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def _render_animation(animation: IconAnimation) -> str:
    delay = animation.delay if animation.delay is not None else 0
    direction = animation.direction or "normal"
    return (
        f"{{ type: '{escape_single_quoted(animation.type)}', "
        f"duration: {_format_number(animation.duration)}, "
        f"timing: '{escape_single_quoted(animation.timing)}', "
        f"iteration: '{escape_single_quoted(animation.iteration)}', "
        f"delay: {_format_number(delay)}, "
        f"direction: '{escape_single_quoted(direction)}' }}"
    )


def render_icon_export(record: IconRecord) -> str:
    lines = [
        f"export const {record.identifier} = {{",
        f"  name: '{escape_single_quoted(record.name)}',",
        f"  body: `{escape_template(record.body)}`,",
        f"  viewBox: '{escape_single_quoted(record.view_box)}'",
    ]
    if record.animation is not None:
        lines[-1] += ","
        lines.append(f"  animation: {_render_animation(record.animation)}")
    lines.append("};")
    return "\n".join(lines)


def _render_manifest_inner(entries: list[ManifestEntry]) -> str:
    if not entries:
        return ""
    rows = [f"  '{escape_single_quoted(e.key)}': {e.identifier}" for e in entries]
    return "\n" + ",\n".join(rows) + "\n"


def _claim_identifier(record: IconRecord, taken: set[str]) -> None:
    if record.identifier in taken:
        raise IdentifierConflictError(
            f"Icon {record.name!r} would redeclare the identifier {record.identifier!r}"
        )
    taken.add(record.identifier)


def render_module(
    records: list[IconRecord],
    manifest_name: str = DEFAULT_MANIFEST,
    header: str = HEADER,
) -> str:
    """Serialize a whole container from scratch."""
    taken = {manifest_name}
    parts = [header, ""]
    for record in records:
        _claim_identifier(record, taken)
        parts.append(render_icon_export(record))
        parts.append("")
    manifest = [ManifestEntry(r.name, r.identifier) for r in records]
    parts.append(f"export const {manifest_name} = {{{_render_manifest_inner(manifest)}}};")
    return "\n".join(parts) + "\n"


def new_module_content(
    name: str,
    body: str,
    view_box: str = DEFAULT_VIEW_BOX,
    animation: IconAnimation | None = None,
    manifest_name: str = DEFAULT_MANIFEST,
) -> str:
    """Content for a container that does not exist yet."""
    record = IconRecord(name=name, body=body, view_box=view_box, animation=animation)
    return render_module([record], manifest_name)


# ---------------------------------------------------------------------------
# Deserializer
# ---------------------------------------------------------------------------

def _to_record(value: dict) -> IconRecord | None:
    name = value.get("name")
    if not isinstance(name, str) or isinstance(name, Reference):
        return None
    animation = value.get("animation")
    try:
        return IconRecord(
            name=name,
            body=str(value.get("body", "")),
            view_box=str(value.get("viewBox", DEFAULT_VIEW_BOX)),
            animation=IconAnimation(**animation) if isinstance(animation, dict) else None,
        )
    except ValidationError as e:
        logger.warning("Skipping icon declaration %r: %s", name, e)
        return None


def _to_manifest_entries(value: dict) -> list[ManifestEntry]:
    entries = []
    for key, ref in value.items():
        if not isinstance(ref, Reference):
            logger.warning("Manifest entry %r is not an identifier reference, skipping", key)
            continue
        entries.append(ManifestEntry(key, str(ref)))
    return entries


def parse_module(content: str, manifest_name: str = DEFAULT_MANIFEST) -> IconModule:
    """Locate every icon declaration and the manifest.

    Declarations that are not icon records (no ``name`` string) are ignored.
    Raises :class:`MalformedContainerError` when a declaration never closes.
    """
    module = IconModule(content=content)
    pos = 0
    while True:
        m = _EXPORT_RE.search(content, pos)
        if m is None:
            break
        identifier = m.group(1)
        module.declared.add(identifier)
        brace = m.end()
        close = find_matching_brace(content, brace)
        end = close + 1
        semi = _SEMICOLON_RE.match(content, end)
        if semi:
            end = semi.end()
        pos = end

        if identifier == manifest_name:
            value, _ = parse_object(content, brace)
            if module.manifest is not None:
                logger.warning("Duplicate manifest declaration at offset %d ignored", m.start())
                continue
            module.manifest = Manifest(
                name=manifest_name,
                start=m.start(),
                inner_start=brace + 1,
                inner_end=close,
                entries=_to_manifest_entries(value),
            )
            continue

        try:
            value, _ = parse_object(content, brace)
        except MalformedContainerError as e:
            logger.debug("Declaration %s is not a plain object literal (%s), ignoring", identifier, e)
            continue
        record = _to_record(value)
        if record is None:
            continue
        module.entries.append(ModuleEntry(record, identifier, m.start(), end))

    return module


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

def _apply_splices(content: str, splices: list[tuple[int, int, str]]) -> str:
    # Sort by offset descending so earlier splices don't shift later offsets
    for start, end, replacement in sorted(splices, key=lambda s: s[0], reverse=True):
        content = content[:start] + replacement + content[end:]
    return content


def _manifest_splice(manifest: Manifest, entries: list[ManifestEntry]) -> tuple[int, int, str]:
    return manifest.inner_start, manifest.inner_end, _render_manifest_inner(entries)


def upsert(
    content: str,
    name: str,
    body: str,
    view_box: str = DEFAULT_VIEW_BOX,
    animation: IconAnimation | None = None,
    manifest_name: str = DEFAULT_MANIFEST,
) -> str:
    """Add a new icon or replace an existing one in place."""
    record = IconRecord(name=name, body=body, view_box=view_box, animation=animation)
    export = render_icon_export(record)
    module = parse_module(content, manifest_name)
    manifest = module.manifest
    splices: list[tuple[int, int, str]] = []

    existing = module.find(record.identifier)
    if existing is not None:
        splices.append((existing.start, existing.end, export))
        if manifest is not None and not manifest.references(name, record.identifier):
            logger.info("Icon %s was defined but not registered; adding manifest entry", name)
            splices.append(_manifest_splice(manifest, manifest.entries + [ManifestEntry(name, record.identifier)]))
        logger.info("Replaced icon %s", name)
        return _apply_splices(content, splices)

    _claim_identifier(record, module.declared | {manifest_name})

    if manifest is None:
        logger.warning("Manifest %r not found; appending %s without registering it", manifest_name, name)
        if not content.strip():
            return export + "\n"
        return content.rstrip("\n") + "\n\n" + export + "\n"

    entries = [e for e in manifest.entries if not (e.key == name or e.identifier == record.identifier)]
    entries.append(ManifestEntry(name, record.identifier))
    splices.append(_manifest_splice(manifest, entries))
    splices.append((manifest.start, manifest.start, export + "\n\n"))
    logger.info("Added icon %s", name)
    return _apply_splices(content, splices)


def _consume_newlines(content: str, end: int, limit: int = 2) -> int:
    for _ in range(limit):
        if content.startswith("\r\n", end):
            end += 2
        elif content.startswith("\n", end):
            end += 1
        else:
            break
    return end


def remove(content: str, name: str, manifest_name: str = DEFAULT_MANIFEST) -> str:
    """Delete an icon's declaration and its manifest reference.

    Returns ``content`` unchanged when neither exists.
    """
    identifier = to_identifier(name)
    module = parse_module(content, manifest_name)
    splices: list[tuple[int, int, str]] = []

    entry = module.find(identifier)
    if entry is not None:
        splices.append((entry.start, _consume_newlines(content, entry.end), ""))

    manifest = module.manifest
    if manifest is not None:
        remaining = [e for e in manifest.entries if not (e.key == name or e.identifier == identifier)]
        if len(remaining) != len(manifest.entries):
            splices.append(_manifest_splice(manifest, remaining))

    if not splices:
        logger.debug("Icon %s not present, nothing to remove", name)
        return content

    logger.info("Removed icon %s", name)
    return _apply_splices(content, splices)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def exists(content: str, name: str, manifest_name: str = DEFAULT_MANIFEST) -> bool:
    return parse_module(content, manifest_name).find(to_identifier(name)) is not None


def count(content: str, manifest_name: str = DEFAULT_MANIFEST) -> int:
    return len(parse_module(content, manifest_name).entries)


def list_names(content: str, manifest_name: str = DEFAULT_MANIFEST) -> list[str]:
    return [e.record.name for e in parse_module(content, manifest_name).entries]


def manifest_names(content: str, manifest_name: str = DEFAULT_MANIFEST) -> list[str] | None:
    """Keys registered in the manifest, or None when there is no manifest."""
    manifest = parse_module(content, manifest_name).manifest
    if manifest is None:
        return None
    return [e.key for e in manifest.entries]
