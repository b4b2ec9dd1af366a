"""
docgen — generator dokumentacji z komentarzy w kodzie źródłowym.

Użycie:
  docgen <komenda> [opcje]

Komendy:
  build      Generuje dokumentację z szablonu .docgen do <katalog>/index.md.
  commands   Listuje komendy-rozszerzenia zbudowane przez NEW_COMMAND.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, wymuszamy UTF-8, żeby polskie znaki
# w komunikatach były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from docgen.commands import build as cmd_build
from docgen.commands import extensions as cmd_extensions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docgen",
        description="docgen — dokumentacja z komentarzy w kodzie.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="docgen 0.1.0"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_build.add_parser(subparsers)
    cmd_extensions.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
