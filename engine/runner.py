"""
engine/runner.py — pełny przebieg: szablon → dokument <output_dir>/index.md.

Brak pliku szablonu (.docgen) w katalogu projektu to czyste zakończenie
bez żadnego wyjścia (None). Szablon czytany jest jak pliki źródłowe:
niepoprawne bajty UTF-8 są zastępowane.
"""

from __future__ import annotations

from pathlib import Path

from .context import DocumentContext
from .orchestrator import render_document
from .types import ErrorCode

DEFAULT_TEMPLATE = ".docgen"
DEFAULT_OUTPUT_DIR = "docs"
OUTPUT_FILE = "index.md"


def build_docs(ctx: DocumentContext, template: str = DEFAULT_TEMPLATE) -> Path | None:
    """
    Generuje dokumentację dla projektu w ctx.root_dir.

    Zwraca ścieżkę zapisanego dokumentu albo None, gdy brak szablonu
    lub gdy nie da się odczytać szablonu albo zapisać dokumentu (zgłoszone
    jako E_SOURCE_READ / E_OUTPUT_WRITE).
    """
    template_path = ctx.root_dir / template
    if not template_path.is_file():
        ctx.reporter.info(f"Nie znaleziono pliku {template} w {ctx.root_dir}")
        return None

    ctx.reporter.info("Generowanie dokumentacji...")
    if not ctx.output_dir.exists():
        try:
            ctx.output_dir.mkdir(parents=True)
        except OSError as e:
            ctx.reporter.error(ErrorCode.OUTPUT_WRITE, f"nie można utworzyć katalogu: {e}", str(ctx.output_dir))
            return None
        ctx.reporter.info(f"Utworzono katalog {ctx.output_dir}")

    try:
        source = template_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        ctx.reporter.error(ErrorCode.SOURCE_READ, f"nie można odczytać szablonu: {e}", str(template_path))
        return None
    document = render_document(source, ctx)

    out_path = ctx.output_dir / OUTPUT_FILE
    try:
        out_path.write_text(document, encoding="utf-8")
    except OSError as e:
        ctx.reporter.error(ErrorCode.OUTPUT_WRITE, f"nie można zapisać dokumentu: {e}", str(out_path))
        return None
    return out_path
