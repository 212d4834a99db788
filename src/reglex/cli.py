"""Command-line interface for reglex."""

from __future__ import annotations

import argparse
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from reglex.errors import ConfigError

FORMATS = ("tokens", "html", "folds")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    properties: dict[str, str | bool]
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="reglex",
        description="Highlight and fold Windows Registry (.reg) files",
    )
    p.add_argument("input", help="Input .reg file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default="tokens",
        help="Output format (default: tokens)",
    )
    p.add_argument(
        "-p",
        "--property",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set lexer property, e.g. fold=1 (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover reglex.toml)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-run")
    p.add_argument("--debug", action="store_true", help="Dump tokens and fold levels to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def parse_property_arg(s: str) -> tuple[str, str]:
    """Parse a NAME=VALUE string into (name, value)."""
    if "=" not in s:
        raise ConfigError(f"invalid property format (expected NAME=VALUE): {s}", "<command line>")
    name, _, value = s.partition("=")
    return name, value


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "reglex.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags. Property names are checked here so
    a typo fails before any input is read.
    """
    from reglex.options import build_option_set, options_from_dict

    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    config_source = str(config_path) if config_path else str(input_dir / "reglex.toml")

    # Properties: config < CLI
    properties: dict[str, str | bool] = {}
    cfg_props = config.get("properties")
    if isinstance(cfg_props, dict):
        options_from_dict(cfg_props, config_source)
        for k, v in cfg_props.items():
            properties[str(k)] = v if isinstance(v, (bool, str)) else str(v)
    known = build_option_set()
    for raw in args.property:
        name, value = parse_property_arg(raw)
        if name not in known:
            raise ConfigError(f"unknown property '{name}'", "<command line>")
        properties[name] = value

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=args.format,
        properties=properties,
        watch=args.watch,
        debug=args.debug,
    )


def highlight_file(options: CliOptions) -> str:
    """Read, lex, and fold a .reg file, then format it as requested."""
    from reglex.api import RegistryLexer
    from reglex.debug import dump_levels, dump_tokens
    from reglex.document import Document, read_reg_file
    from reglex.folder import fold_ranges
    from reglex.render import render_html

    lexer = RegistryLexer()
    for name, value in options.properties.items():
        lexer.property_set(name, value)
    if options.format == "folds":
        lexer.property_set("fold", "1")

    doc = Document(read_reg_file(options.input_file))
    lexer.colourise(doc)
    tokens = doc.tokens()

    if options.debug:
        dump_tokens(tokens, file=sys.stderr)
        dump_levels(doc, file=sys.stderr)

    if options.format == "html":
        return render_html(doc)
    if options.format == "folds":
        return "".join(f"{start + 1}-{end + 1}\n" for start, end in fold_ranges(doc))
    return "".join(
        f"{t.span.start.line}:{t.span.start.column}\t{t.style.name}\t{t.text!r}\n" for t in tokens
    )


def _write_result(options: CliOptions, text: str) -> None:
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-run on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write_result(options, highlight_file(options))
                    print(f"Processed {options.input_file}", file=sys.stderr)
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        result = highlight_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _write_result(options, result)
    return 0


def run() -> None:
    sys.exit(main())
