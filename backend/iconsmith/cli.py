"""
iconsmith command line.

Usage:
  iconsmith build icons/src -o dist/icons.js          # module file from a folder of SVGs
  iconsmith build icons/src -o dist/sprite.svg --sprite
  iconsmith add arrow-right.svg                        # upsert into the configured output dir
  iconsmith add logo.svg --name brand-logo --sprite
  iconsmith remove arrow-right
  iconsmith list
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from iconsmith.config import Settings
from iconsmith.models.icon import to_identifier
from iconsmith.store import module_file, sprite_file
from iconsmith.store.files import IconOutputService, write_safe
from iconsmith.store.literal import MalformedContainerError
from iconsmith.store.module_file import IdentifierConflictError
from iconsmith.svg.transformer import icon_name_from_path, to_icon_record

logger = logging.getLogger(__name__)


def _target(args: argparse.Namespace) -> str:
    return "sprite" if args.sprite else "module"


def cmd_build(args: argparse.Namespace, settings: Settings) -> int:
    src = Path(args.src)
    if not src.is_dir():
        print(f"Not a folder: {src}", file=sys.stderr)
        return 1

    svg_files = sorted(src.glob("*.svg"))
    if not svg_files:
        print("No .svg files found in folder.", file=sys.stderr)
        return 1

    records = {}
    for path in svg_files:
        name = icon_name_from_path(path)
        # Module exports collide on the identifier, sprite symbols on the id
        key = name if args.sprite else to_identifier(name)
        if key in records:
            logger.warning("Duplicate icon name %s from %s, keeping the first", name, path.name)
            continue
        records[key] = to_icon_record(name, path.read_text(encoding="utf-8"), settings.default_view_box)

    if args.sprite:
        content = sprite_file.render_sprite(list(records.values()))
    else:
        content = module_file.render_module(list(records.values()), settings.manifest_name)

    out = Path(args.output)
    write_safe(out, content)
    print(f"Done: {len(records)} icons -> {out}")
    return 0


def cmd_add(args: argparse.Namespace, service: IconOutputService) -> int:
    path = Path(args.file)
    if not path.is_file():
        print(f"File not found: {path}", file=sys.stderr)
        return 1

    name = args.name or icon_name_from_path(path)
    record = to_icon_record(name, path.read_text(encoding="utf-8"), service.settings.default_view_box)
    status = service.add_icon(record.name, record.body, record.view_box, target=_target(args))
    print(f"{record.name}: {status.value}")
    return 0


def cmd_remove(args: argparse.Namespace, service: IconOutputService) -> int:
    if service.remove_icon(args.name, _target(args)):
        print(f"Removed {args.name}")
        return 0
    print(f"{args.name} not found", file=sys.stderr)
    return 1


def cmd_list(args: argparse.Namespace, service: IconOutputService) -> int:
    names = service.list_icons(_target(args))
    if names is None:
        print(f"File not found: {service.path_for(_target(args))}", file=sys.stderr)
        return 1
    for name in names:
        print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="iconsmith", description="Icon library output files")
    parser.add_argument("-d", "--dir", help="Output directory (defaults to OUTPUT_DIRECTORY)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build a container from a folder of SVG files")
    build.add_argument("src", help="Folder of .svg files")
    build.add_argument("-o", "--output", required=True, help="Output file")
    build.add_argument("--sprite", action="store_true", help="Write a sprite instead of a module")

    add = sub.add_parser("add", help="Add or update one icon")
    add.add_argument("file", help="SVG file")
    add.add_argument("-n", "--name", help="Icon name (defaults to the file name)")
    add.add_argument("--sprite", action="store_true")

    remove = sub.add_parser("remove", help="Remove one icon")
    remove.add_argument("name")
    remove.add_argument("--sprite", action="store_true")

    lst = sub.add_parser("list", help="List registered icons")
    lst.add_argument("--sprite", action="store_true")

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    settings = Settings()

    level = "debug" if args.verbose else settings.iconsmith_log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "build":
            return cmd_build(args, settings)
        service = IconOutputService(args.dir or settings.output_directory, settings)
        handler = {"add": cmd_add, "remove": cmd_remove, "list": cmd_list}[args.command]
        return handler(args, service)
    except MalformedContainerError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except (ValidationError, IdentifierConflictError) as e:
        print(f"Invalid icon: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
