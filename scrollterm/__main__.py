"""Scrollterm CLI entry point.

Allows running via `python -m scrollterm` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from pathlib import Path


def get_version_string() -> str:
    try:
        return importlib.metadata.version("scrollterm")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def run_keyboard_test() -> None:
    """Print the input events parsed from each key. Quit with ESC."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler

    print("Keyboard test mode: press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            key = term.get_key(timeout=None)
            if not key:
                continue
            if key == '<ESC>':
                print("Exiting keyboard test.")
                break
            ev = kb.parse_key(key)
            raw = str(key).encode('unicode_escape').decode('ascii')
            if ev is None:
                print(f"ignored raw='{raw}'")
                continue
            parts = [f"kind={ev.kind.value}", f"raw='{raw}'"]
            if ev.text:
                parts.append(f"text={ev.text!r}")
            if ev.delta:
                parts.append(f"delta={ev.delta}")
            print(' '.join(parts))
    finally:
        term.cleanup()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scrollterm", description="Scrollable line console")
    parser.add_argument("-V", "--version", action="store_true", help="print version and exit")
    parser.add_argument("--keytest", "--keyboard-test", action="store_true",
                        help="show parsed key events until ESC")
    parser.add_argument("--log-file", type=Path, help="write debug log to this file")
    parser.add_argument("--settings", type=Path, help="settings JSON file to use")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    if args.version:
        print(get_version_string())
        return
    if args.log_file:
        # The full-screen UI owns the terminal, so logs only go to a file
        logging.basicConfig(filename=str(args.log_file), level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")
    if args.keytest:
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .settings import load_settings
    from .shell import Shell
    shell = Shell(settings=load_settings(args.settings))
    shell.run()


if __name__ == "__main__":  # pragma: no cover
    main()
