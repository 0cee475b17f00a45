"""Command-line interface for running compiled Mewlix projects.

A compiled project is a Python file defining `register(mewlix)`, which adds
the loaders of its yarn balls to the runtime namespace. The runner installs
terminal I/O as the host hooks and resolves the entry point yarn ball.

Usage:
    mewlix run project.py                   # Run the "main" yarn ball
    mewlix run project.py --entrypoint app  # Run another entry point
    mewlix run project.py --meta meta.json  # Read name and entry point
    mewlix json '{"cats": ["jake"]}'        # Decode and display JSON text
"""

import argparse
import asyncio
import importlib.util
import inspect
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.text import Text

import mewlix


log = logging.getLogger("mewlix.cli")

_stderr = Console(stderr=True)


def format_error(error: mewlix.MewlixError) -> Text:
    """Format an uncaught runtime error for the terminal."""
    text = Text()
    text.append(f"[{error.code.name}]", style="bold red")
    text.append(f" {error.message}")
    cause = error.__cause__
    while cause is not None:
        text.append(f"\n  Caused by: {type(cause).__name__}: {cause}", style="dim")
        cause = cause.__cause__
    return text


def load_project(path: Path):
    """Import a compiled project file as a Python module.

    Raises:
        MewlixError: ExternalError when the file can't be imported,
            InvalidImport when it has no `register` function
    """
    spec = importlib.util.spec_from_file_location(f"mewlix_project_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.ExternalError,
            f"Cannot import project file {path}",
        )
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except mewlix.MewlixError:
        raise
    except Exception as e:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.ExternalError,
            f"Cannot import project file {path}: {type(e).__name__}: {e}",
        ) from e

    register = getattr(module, "register", None)
    if not callable(register):
        raise mewlix.MewlixError(
            mewlix.ErrorCode.InvalidImport,
            f"Project file {path} doesn't define register(mewlix)",
        )
    return register


def _meow(text):
    print(text)
    return text


def _listen(question):
    try:
        return input("" if question is None else f"{question} ")
    except EOFError:
        return None


async def run_project(path: Path, entrypoint: str | None = None, meta_path: str | None = None):
    """Load a project, install terminal I/O and run its entry point.

    Returns:
        (YarnBall) The resolved entry point yarn ball
    """
    meta = mewlix.load_meta(meta_path)
    entrypoint = entrypoint or meta.entrypoint

    runtime = mewlix.Mewlix(mewlix.Namespace(meta.name))
    runtime.set_meow(_meow)
    runtime.set_listen(_listen)

    log.debug("Loading project %s (%s)", path, meta.name)
    register = load_project(path)
    try:
        result = register(runtime)
        if inspect.isawaitable(result):
            await result
    except mewlix.MewlixError:
        raise
    except Exception as e:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.ExternalError,
            f"Registering project {path} failed: {type(e).__name__}: {e}",
        ) from e

    log.debug("Running entry point %r", entrypoint)
    return await runtime.main(entrypoint)


def cmd_run(args) -> int:
    path = Path(args.project)
    if not path.is_file():
        _stderr.print(Text(f"Project file not found: {path}", style="bold red"))
        return 1
    try:
        asyncio.run(run_project(path, args.entrypoint, args.meta))
    except mewlix.MewlixError as e:
        _stderr.print(format_error(e))
        return 1
    return 0


def cmd_json(args) -> int:
    text = sys.stdin.read() if args.text == "-" else args.text
    try:
        value = mewlix.from_json(text)
    except mewlix.MewlixError as e:
        _stderr.print(format_error(e))
        return 1
    print(mewlix.purrify(value))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mewlix", description="Mewlix runtime")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run a compiled project file")
    run.add_argument("project", help="Python file defining register(mewlix)")
    run.add_argument("--entrypoint", default=None, help="Module key to start from")
    run.add_argument("--meta", default=None, help="Project meta JSON file")
    run.set_defaults(func=cmd_run)

    decode = subparsers.add_parser("json", help="Decode JSON text and display it")
    decode.add_argument("text", help="JSON text, or - to read standard input")
    decode.set_defaults(func=cmd_json)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
