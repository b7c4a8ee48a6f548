"""Disk-backed container access with serialized read-modify-write per output file."""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Literal

from pydantic import ValidationError

from iconsmith.config import Settings
from iconsmith.models.icon import IconAnimation, IconRecord, to_identifier
from iconsmith.store import module_file, sprite_file
from iconsmith.variants.persistence import VariantsDocument, parse_variants_file, render_variants_file

logger = logging.getLogger(__name__)

OutputTarget = Literal["module", "sprite"]

ANIMATIONS_HEADER = (
    "// Auto-generated by iconsmith\n"
    "// Animations for icons - defines default animation per icon\n"
    "// Available animations: spin, pulse, bounce, shake, fade"
)


class WriteStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    MANIFEST_MISSING = "manifest_missing"


@dataclass
class SupportingFiles:
    variants_created: bool = False
    animations_created: bool = False


def render_animations_file() -> str:
    return f"{ANIMATIONS_HEADER}\n\nexport const animations = {{\n}};\n"


def read_if_exists(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def write_safe(path: Path, content: str) -> None:
    """Write through a temp file in the same directory, then swap it in."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class IconOutputService:
    """Icon, sprite and variants files of one output directory.

    Every mutation reads the current content, transforms it in memory and
    writes it back while holding the lock for that path.
    """

    def __init__(self, output_dir: str | Path, settings: Settings):
        self.output_dir = Path(output_dir)
        self.settings = settings
        self._locks: dict[Path, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # -- paths ---------------------------------------------------------------

    def path_for(self, target: OutputTarget) -> Path:
        name = self.settings.sprite_file_name if target == "sprite" else self.settings.icons_file_name
        return self.output_dir / name

    @property
    def variants_path(self) -> Path:
        return self.output_dir / self.settings.variants_file_name

    @property
    def animations_path(self) -> Path:
        return self.output_dir / self.settings.animations_file_name

    def _lock(self, path: Path) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(path.resolve(), threading.Lock())

    def _mutate(self, path: Path, transform: Callable[[str | None], str | None]) -> bool:
        """Apply ``transform`` to the file content; ``None`` or no change skips the write."""
        with self._lock(path):
            current = read_if_exists(path)
            updated = transform(current)
            if updated is None or updated == current:
                return False
            write_safe(path, updated)
            return True

    # -- icons ---------------------------------------------------------------

    def add_icon(
        self,
        name: str,
        body: str,
        view_box: str | None = None,
        animation: IconAnimation | None = None,
        target: OutputTarget = "module",
    ) -> WriteStatus:
        """Create the container if needed, otherwise upsert into it."""
        view_box = view_box or self.settings.default_view_box
        manifest_name = self.settings.manifest_name
        path = self.path_for(target)
        status = WriteStatus.UPDATED

        def transform(content: str | None) -> str:
            nonlocal status
            if content is None or not content.strip():
                status = WriteStatus.CREATED
                if target == "sprite":
                    return sprite_file.new_sprite_content(name, body, view_box)
                return module_file.new_module_content(name, body, view_box, animation, manifest_name)

            if target == "sprite":
                return sprite_file.upsert(content, name, body, view_box)
            if not module_file.parse_module(content, manifest_name).manifest_found:
                status = WriteStatus.MANIFEST_MISSING
            return module_file.upsert(content, name, body, view_box, animation, manifest_name)

        self._mutate(path, transform)
        logger.info("Wrote icon %s to %s (%s)", name, path, status.value)
        if status == WriteStatus.CREATED:
            self.create_supporting_files()
        return status

    def remove_icon(self, name: str, target: OutputTarget = "module") -> bool:
        """False when the file or the icon does not exist."""
        path = self.path_for(target)

        def transform(content: str | None) -> str | None:
            if content is None:
                return None
            if target == "sprite":
                return sprite_file.remove(content, name)
            return module_file.remove(content, name, self.settings.manifest_name)

        return self._mutate(path, transform)

    def rename_icon(self, old_name: str, new_name: str, target: OutputTarget = "module") -> bool:
        """Remove ``old_name`` and register its record under ``new_name`` in one write.

        Raises ``ValueError`` when ``new_name`` is already taken.
        """
        path = self.path_for(target)

        def transform(content: str | None) -> str | None:
            if content is None:
                return None
            record = self._find_record(content, old_name, target)
            if record is None:
                return None
            if old_name != new_name and self._find_record(content, new_name, target) is not None:
                raise ValueError(f"Icon {new_name!r} already exists")

            if target == "sprite":
                content = sprite_file.remove(content, old_name)
                return sprite_file.upsert(content, new_name, record.body, record.view_box)
            manifest_name = self.settings.manifest_name
            content = module_file.remove(content, old_name, manifest_name)
            return module_file.upsert(
                content, new_name, record.body, record.view_box, record.animation, manifest_name
            )

        renamed = self._mutate(path, transform)
        if renamed:
            logger.info("Renamed icon %s -> %s in %s", old_name, new_name, path)
        return renamed

    def _find_record(self, content: str, name: str, target: OutputTarget) -> IconRecord | None:
        if target == "sprite":
            for symbol in sprite_file.parse_sprite(content):
                if symbol.name == name:
                    try:
                        return IconRecord(name=symbol.name, body=symbol.body, view_box=symbol.view_box)
                    except ValidationError as e:
                        logger.warning("Skipping symbol %r: %s", symbol.name, e)
                        return None
            return None
        entry = module_file.parse_module(content, self.settings.manifest_name).find(to_identifier(name))
        return entry.record if entry else None

    def get_icon(self, name: str, target: OutputTarget = "module") -> IconRecord | None:
        content = read_if_exists(self.path_for(target))
        if content is None:
            return None
        return self._find_record(content, name, target)

    def list_icons(self, target: OutputTarget = "module") -> list[str] | None:
        """Registered names, or None when the container file does not exist."""
        content = read_if_exists(self.path_for(target))
        if content is None:
            return None
        if target == "sprite":
            return sprite_file.list_ids(content)
        return module_file.list_names(content, self.settings.manifest_name)

    def create_supporting_files(self) -> SupportingFiles:
        """Write the default variants and animations files when they do not exist yet."""
        return SupportingFiles(
            variants_created=self._create_if_missing(self.variants_path, render_variants_file(VariantsDocument())),
            animations_created=self._create_if_missing(self.animations_path, render_animations_file()),
        )

    def _create_if_missing(self, path: Path, content: str) -> bool:
        created = self._mutate(path, lambda current: content if current is None else None)
        if created:
            logger.info("Created %s", path)
        return created

    # -- variants ------------------------------------------------------------

    def read_variants(self) -> VariantsDocument:
        content = read_if_exists(self.variants_path)
        return parse_variants_file(content) if content else VariantsDocument()

    def update_variants(self, update: Callable[[VariantsDocument], None]) -> None:
        """Load the variants file, let ``update`` mutate it, write it back."""
        def transform(content: str | None) -> str:
            document = parse_variants_file(content) if content else VariantsDocument()
            update(document)
            return render_variants_file(document)

        self._mutate(self.variants_path, transform)
