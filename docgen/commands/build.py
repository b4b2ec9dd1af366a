"""Komenda: docgen build — generuje dokumentację z szablonu .docgen."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich import box

from docgen._config import get_settings
from engine import DocumentContext, Reporter, build_docs

console = Console()


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_sections(ctx: DocumentContext) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("SEKCJA", no_wrap=True, style="bold cyan")
    table.add_column("LINIE",  justify="right", no_wrap=True)
    table.add_column("ZNAKI",  justify="right", no_wrap=True)

    rows = [("(główna)", ctx.main_text)]
    rows += [(name, ctx.section_text(name) or "") for name in sorted(ctx.sections)]
    for name, text in rows:
        table.add_row(name, str(text.count("\n") + 1 if text else 0), str(len(text)))

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(ctx.sections)} sekcji, {len(ctx.aliases)} aliasów[/dim]\n")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    try:
        settings = get_settings(args.root, args.output_dir, args.template)
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    ctx = DocumentContext(
        output_dir    = settings.output_dir,
        root_dir      = settings.root,
        reporter      = Reporter(console=console),
        python        = settings.python,
        build_timeout = settings.build_timeout,
    )

    out_path = build_docs(ctx, settings.template)
    if out_path is None:
        if args.strict and ctx.reporter.has_errors:
            raise SystemExit(1)
        return

    errors = len(ctx.reporter.diagnostics)
    if errors:
        console.print(f"[yellow]Zapisano z błędami ({errors}):[/yellow] {out_path}")
    else:
        console.print(f"[green]Zapisano:[/green] {out_path}")

    if args.show:
        _show_sections(ctx)

    if args.strict and errors:
        raise SystemExit(1)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "build",
        help="Generuje dokumentację z szablonu .docgen.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Czyta szablon .docgen z katalogu projektu, przetwarza komentarze plików
źródłowych i zapisuje dokument do <katalog_wyjściowy>/index.md.

Przykłady:
  docgen build
  docgen build out/docs --show
  docgen build --root ../projekt --strict
        """,
    )
    p.add_argument(
        "output_dir",
        metavar="KATALOG",
        nargs="?",
        default=None,
        help="Katalog wyjściowy względem projektu (domyślnie: docs lub $DOCGEN_OUTPUT_DIR).",
    )
    p.add_argument(
        "--root",
        metavar="KATALOG",
        default=None,
        help="Katalog projektu (domyślnie: bieżący lub $DOCGEN_ROOT).",
    )
    p.add_argument(
        "--template",
        metavar="PLIK",
        default=None,
        help="Plik szablonu w katalogu projektu (domyślnie: .docgen).",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę sekcji po zapisie.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Kod wyjścia 1, jeśli zgłoszono jakikolwiek błąd.",
    )
    p.set_defaults(func=run)
