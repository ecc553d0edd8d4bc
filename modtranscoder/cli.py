# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/cli.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Transcoder CLI Commands.
Command-line access to the transcoding layer, working on canonical documents
stored as JSON files:
- render: canonical menu JSON to command text in a notation
- parse: command text back into a canonical menu JSON
- convert: command text from one notation to another
- properties: canonical material JSON to editable records, and back with --import

Usage:
    modtranscoder render body.menu.json --notation inline
    modtranscoder parse body.txt --menu body.menu.json --notation inline -o out.menu.json
    modtranscoder convert body.txt --from inline --to structured
    modtranscoder properties skin.mate.json -o skin.form.json
    modtranscoder properties skin.mate.json --import skin.form.json -o skin.mate.json
"""

# Standard
import argparse
import logging
from pathlib import Path
import sys
from typing import List, Optional

# Third-Party
import orjson

# First-Party
from modtranscoder import __version__
from modtranscoder.codecs import get_codec
from modtranscoder.codecs.structured import dumps_indented
from modtranscoder.config import get_settings, SessionConfig
from modtranscoder.errors import TranscoderError
from modtranscoder.facade import CommandTranscoder, PropertyTranscoder
from modtranscoder.models import Notation, PropertyView
from modtranscoder.persistence import InMemoryDocumentStore, JsonFileDocumentStore

logger = logging.getLogger(__name__)

NOTATION_CHOICES = [n.value for n in Notation]

# Handle under which stdout-bound documents are staged
_STDOUT_HANDLE = "-"


class CLIError(Exception):
    """Base class for CLI-related errors."""


def _read_text(path: str) -> str:
    """Read a UTF-8 input file.

    Args:
        path: File path.

    Returns:
        str: File content.

    Raises:
        CLIError: If the file does not exist.
    """
    input_path = Path(path)
    if not input_path.exists():
        raise CLIError(f"Input file not found: {path}")
    return input_path.read_text(encoding="utf-8")


def _emit(text: str, output: Optional[str]) -> None:
    """Write text to a file, or to stdout when no file is given.

    Args:
        text: Content to write.
        output: Output path or None.
    """
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s", output_path)
    else:
        print(text)


def _session_config(args: argparse.Namespace) -> SessionConfig:
    config = SessionConfig.from_settings(get_settings())
    if getattr(args, "notation", None):
        config.notation = args.notation
    if getattr(args, "allow_signature_edit", False):
        config.allow_signature_edit = True
    return config


def render_command(args: argparse.Namespace) -> None:
    """Render the commands of a canonical menu in a notation.

    Args:
        args: Parsed arguments (``input_file``, ``notation``, ``output``).
    """
    store = JsonFileDocumentStore()
    session = CommandTranscoder.open(args.input_file, store, _session_config(args))
    _emit(session.render(), args.output)


def parse_command(args: argparse.Namespace) -> None:
    """Parse command text into a menu and write the updated canonical JSON.

    Args:
        args: Parsed arguments (``input_file``, ``menu``, ``notation``, ``output``).
    """
    text = _read_text(args.input_file)
    session = CommandTranscoder.open(args.menu, JsonFileDocumentStore(), _session_config(args))
    if args.output:
        session.save(args.output, edited_text=text)
        logger.info("Wrote %d commands to %s", len(session.commands), args.output)
        return
    staging = InMemoryDocumentStore()
    session.store = staging
    session.save(_STDOUT_HANDLE, edited_text=text)
    print(dumps_indented(staging.documents[_STDOUT_HANDLE]))


def convert_command(args: argparse.Namespace) -> None:
    """Convert command text between notations.

    Args:
        args: Parsed arguments (``input_file``, ``from_notation``, ``to_notation``, ``output``).
    """
    commands = get_codec(args.from_notation).parse(_read_text(args.input_file))
    _emit(get_codec(args.to_notation).serialize(commands), args.output)


def properties_command(args: argparse.Namespace) -> None:
    """Export a material as editable records, or import edited records back.

    Args:
        args: Parsed arguments (``input_file``, ``import_file``, ``output``, ``allow_signature_edit``).
    """
    config = _session_config(args)
    config.property_view = PropertyView.FORM
    session = PropertyTranscoder.open(args.input_file, JsonFileDocumentStore(), config)

    if not args.import_file:
        form = session.render()
        _emit(dumps_indented(form.model_dump(by_alias=True, exclude_none=True)), args.output)
        return

    edited = orjson.loads(_read_text(args.import_file))
    if not isinstance(edited, dict):
        raise CLIError(f"Form file must contain a JSON object: {args.import_file}")
    batch = session.commit(edited)
    for entry in batch.omitted:
        print(f"⚠️  Dropped property #{entry.index}: {entry.reason}", file=sys.stderr)
    _emit(dumps_indented(session.document.model_dump(mode="json", by_alias=True, exclude_none=True)), args.output)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands.

    Returns:
        argparse.ArgumentParser: Configured parser.

    Examples:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["convert", "in.txt", "--from", "inline", "--to", "structured"])
        >>> args.from_notation, args.to_notation
        ('inline', 'structured')
    """
    parser = argparse.ArgumentParser(prog="modtranscoder", description="Transcode game asset documents between canonical JSON and editable notations")
    parser.add_argument("--version", "-V", action="version", version=f"modtranscoder {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render menu commands as text")
    render_parser.add_argument("input_file", help="Canonical menu JSON file")
    render_parser.add_argument("--notation", "-n", choices=NOTATION_CHOICES, help="Output notation (default: from settings)")
    render_parser.add_argument("--output", "--out", "-o", help="Output file path (default: stdout)")
    render_parser.set_defaults(func=render_command)

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse command text into a canonical menu")
    parse_parser.add_argument("input_file", help="Command text file")
    parse_parser.add_argument("--menu", "-m", required=True, help="Canonical menu JSON supplying the header fields")
    parse_parser.add_argument("--notation", "-n", choices=NOTATION_CHOICES, help="Input notation (default: from settings)")
    parse_parser.add_argument("--output", "--out", "-o", help="Output file path (default: stdout)")
    parse_parser.set_defaults(func=parse_command)

    # Convert command
    convert_parser = subparsers.add_parser("convert", help="Convert command text between notations")
    convert_parser.add_argument("input_file", help="Command text file")
    convert_parser.add_argument("--from", dest="from_notation", choices=NOTATION_CHOICES, required=True, help="Input notation")
    convert_parser.add_argument("--to", dest="to_notation", choices=NOTATION_CHOICES, required=True, help="Output notation")
    convert_parser.add_argument("--output", "--out", "-o", help="Output file path (default: stdout)")
    convert_parser.set_defaults(func=convert_command)

    # Properties command
    properties_parser = subparsers.add_parser("properties", help="Export or import material properties as editable records")
    properties_parser.add_argument("input_file", help="Canonical material JSON file")
    properties_parser.add_argument("--import", dest="import_file", help="Edited form JSON to rebuild the material from")
    properties_parser.add_argument("--allow-signature-edit", action="store_true", help="Take Signature and Version from the imported form")
    properties_parser.add_argument("--output", "--out", "-o", help="Output file path (default: stdout)")
    properties_parser.set_defaults(func=properties_command)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point.

    Args:
        argv: Arguments without the program name; ``sys.argv[1:]`` when omitted.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    settings = get_settings()
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

    try:
        args.func(args)
    except (CLIError, TranscoderError, OSError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"❌ {args.command.capitalize()} failed: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
