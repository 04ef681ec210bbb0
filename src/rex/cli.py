"""Command-line interface for Rex."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rex import __version__
from rex.errors import ScanError, SourceFileError
from rex.files import COMPILE_EXTENSION, RUN_EXTENSION
from rex.tokens import Token


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    command: str
    input_file: Path
    output_file: Path | None
    extension: str
    positions: bool
    strict: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-o", "--output", help="Output file (default: stdout)")
    common.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover rex.toml)",
    )
    common.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on the first illegal character",
    )
    common.add_argument(
        "--no-positions",
        dest="positions",
        action="store_false",
        default=None,
        help="Omit line:column from the token dump",
    )

    p = argparse.ArgumentParser(prog="rex", description="Rex language scanner")
    p.add_argument("--version", action="version", version=f"rex {__version__}")
    sub = p.add_subparsers(dest="command", required=True, metavar="COMMAND")
    compile_cmd = sub.add_parser(
        "compile", parents=[common], help=f"Compile the .{COMPILE_EXTENSION} file at path"
    )
    compile_cmd.add_argument("path", help="Relative path of the file to compile")
    run_cmd = sub.add_parser(
        "run", parents=[common], help=f"Interpret the .{RUN_EXTENSION} file at path"
    )
    run_cmd.add_argument("path", help="Relative path of the file to interpret")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "rex.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.path)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Extensions per command: defaults < config
    extensions = {"compile": COMPILE_EXTENSION, "run": RUN_EXTENSION}
    cfg_ext = config.get("extensions")
    if isinstance(cfg_ext, dict):
        for name in extensions:
            value = cfg_ext.get(name)
            if isinstance(value, str) and value:
                extensions[name] = value.removeprefix(".")

    # Positions in the dump: config < CLI
    positions = True
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_positions = cfg_output.get("positions")
        if isinstance(cfg_positions, bool):
            positions = cfg_positions
    if args.positions is not None:
        positions = args.positions

    # Strict mode: config < CLI
    strict = False
    cfg_scan = config.get("scan")
    if isinstance(cfg_scan, dict):
        cfg_strict = cfg_scan.get("strict")
        if isinstance(cfg_strict, bool):
            strict = cfg_strict
    if args.strict is not None:
        strict = args.strict

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        command=args.command,
        input_file=input_file,
        output_file=output_file,
        extension=extensions[args.command],
        positions=positions,
        strict=strict,
    )


def scan_file(options: CliOptions) -> list[Token]:
    """Read and scan the input file, rejecting illegal characters in strict mode."""
    from rex import check
    from rex.files import read_source
    from rex.scanner import tokenize

    source = read_source(options.input_file, options.extension)
    filename = options.input_file.name
    if options.strict:
        return check(source, filename)
    return tokenize(source, filename)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    from rex.debug import dump_tokens

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    try:
        tokens = scan_file(options)
    except SourceFileError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except ScanError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if options.output_file:
        with options.output_file.open("w", encoding="utf-8") as f:
            dump_tokens(tokens, file=f, positions=options.positions)
    else:
        dump_tokens(tokens, file=sys.stdout, positions=options.positions)

    return 0
