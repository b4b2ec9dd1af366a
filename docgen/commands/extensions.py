"""Komenda: docgen commands — listowanie komend-rozszerzeń (NEW_COMMAND)."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich import box
from rich.text import Text

from docgen._config import get_settings
from engine import extensions

console = Console()


def _flag(present: bool) -> Text:
    return Text("tak", style="green") if present else Text("-", style="dim")


def run(args: argparse.Namespace) -> None:
    try:
        settings = get_settings(args.root, args.output_dir)
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    names = extensions.list_commands(settings.output_dir)

    if not names:
        console.print(
            f"[yellow]Brak komend-rozszerzeń w {extensions.commands_dir(settings.output_dir)}.[/yellow]"
        )
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("KOMENDA",    style="bold", no_wrap=True)
    table.add_column("ŹRÓDŁO",     justify="center", no_wrap=True)
    table.add_column("ZBUDOWANA",  justify="center", no_wrap=True)
    table.add_column("SYMBOL",     no_wrap=True, style="dim")

    for name in names:
        table.add_row(
            name,
            _flag(extensions.source_path(settings.output_dir, name).exists()),
            _flag(extensions.compiled_path(settings.output_dir, name).exists()),
            extensions.entry_symbol(name),
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(names)} komend[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "commands",
        help="Listuje komendy-rozszerzenia zbudowane przez NEW_COMMAND.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje komendy-rozszerzenia w <katalog_wyjściowy>/commands.

Kolumny:
  KOMENDA    – nazwa używana w komentarzach (@NAZWA)
  ŹRÓDŁO     – czy istnieje wygenerowany plik .py
  ZBUDOWANA  – czy istnieje skompilowany moduł .pyc (bez niego komenda
               zgłosi błąd przy pierwszym użyciu)
  SYMBOL     – nazwa funkcji-punktu wejścia w module
        """,
    )
    p.add_argument(
        "output_dir",
        metavar="KATALOG",
        nargs="?",
        default=None,
        help="Katalog wyjściowy względem projektu (domyślnie: docs).",
    )
    p.add_argument(
        "--root",
        metavar="KATALOG",
        default=None,
        help="Katalog projektu (domyślnie: bieżący).",
    )
    p.set_defaults(func=run)
