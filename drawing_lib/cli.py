"""Command line front end for the drawing store.

    drawings put <id> [FILE]         store FILE (or stdin) as drawing <id>
    drawings get <id>                write the stored bytes to stdout
    drawings delete <id>
    drawings copy <source> <destination>
    drawings list [--json]           print "<id>\\t<title>" per drawing
    drawings config                  print the effective configuration as YAML

In text mode `list` escapes backslashes, tabs and newlines in ids and titles
so every drawing stays on one line; `--json` output needs no escaping.

Global options pick the configuration file and override its settings.
"""
from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from typing import BinaryIO, Iterable, Optional, TextIO

from drawing_lib.config import StoreConfig, dump_config, load_config
from drawing_lib.drawing_store import DrawingStore, open_drawing_store
from drawing_lib.errors import DrawingStoreError
from drawing_lib.logging_config import configure_logging

logger = logging.getLogger(__name__)

ACTOR_ENV = "DRAWINGS_ACTOR"

_LINE_ESCAPES = str.maketrans({"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r"})


def default_actor() -> str:
    return os.environ.get(ACTOR_ENV) or os.environ.get("USER") or "anonymous"


def escape_field(value: str) -> str:
    return value.translate(_LINE_ESCAPES)


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="drawings", description="Manage drawings in a versioned blob repository")
    p.add_argument("--config", help="Path to the YAML configuration file")
    p.add_argument("--location", help="Repository location (overrides the config file)")
    p.add_argument("--prefix", help="Namespace prefix for drawing keys; '/' stores ids verbatim")
    p.add_argument("--log-level", help="Logging level, e.g. DEBUG or INFO")

    sub = p.add_subparsers(dest="command", required=True)

    put = sub.add_parser("put", help="Store a drawing")
    put.add_argument("id")
    put.add_argument("file", nargs="?", default="-", help="File to read, '-' for stdin")
    put.add_argument("--actor", default=None)

    get = sub.add_parser("get", help="Print a drawing")
    get.add_argument("id")

    delete = sub.add_parser("delete", help="Delete a drawing")
    delete.add_argument("id")
    delete.add_argument("--actor", default=None)

    copy = sub.add_parser("copy", help="Copy a drawing to a new id")
    copy.add_argument("source")
    copy.add_argument("destination")
    copy.add_argument("--actor", default=None)

    lst = sub.add_parser("list", help="List drawing ids and titles")
    lst.add_argument("--json", action="store_true", help="Print a JSON object instead of lines")

    sub.add_parser("config", help="Print the effective configuration")
    return p


def build_config(args: argparse.Namespace) -> StoreConfig:
    cfg = load_config(args.config)
    return cfg.with_overrides(location=args.location, drawings_prefix=args.prefix, log_level=args.log_level)


def _put(store: DrawingStore, args: argparse.Namespace, stdin: BinaryIO) -> None:
    actor = args.actor or default_actor()
    if args.file == "-":
        store.put_drawing(args.id, stdin, actor)
        return
    try:
        f = open(args.file, "rb")
    except OSError as e:
        raise DrawingStoreError(f"cannot open {args.file}: {e}", operation="put") from e
    with f:
        store.put_drawing(args.id, f, actor)


def run(args: argparse.Namespace, store: DrawingStore, stdin: BinaryIO, stdout: BinaryIO) -> None:
    if args.command == "put":
        _put(store, args, stdin)
    elif args.command == "get":
        stdout.write(store.get_drawing(args.id))
        stdout.flush()
    elif args.command == "delete":
        store.delete_drawing(args.id, args.actor or default_actor())
    elif args.command == "copy":
        store.copy_drawing(args.source, args.destination, args.actor or default_actor())
    elif args.command == "list":
        drawings = store.list_drawings()
        if args.json:
            out = json.dumps(drawings, sort_keys=True, indent=2) + "\n"
        else:
            out = "".join(f"{escape_field(i)}\t{escape_field(drawings[i])}\n" for i in sorted(drawings))
        stdout.write(out.encode("utf-8"))
        stdout.flush()


def main(
    argv: Optional[Iterable[str]] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    args = get_parser().parse_args(list(argv) if argv is not None else None)
    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer
    stderr = stderr if stderr is not None else sys.stderr

    try:
        cfg = build_config(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=stderr)
        return 1
    configure_logging(cfg.log_level)

    if args.command == "config":
        stdout.write(dump_config(cfg))
        stdout.flush()
        return 0

    try:
        store = open_drawing_store(cfg.location, cfg.drawings_prefix, backend=cfg.backend)
        run(args, store, stdin, stdout)
    except DrawingStoreError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"drawings {args.command}: {e}", file=stderr)
        return 1
    return 0
