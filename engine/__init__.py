"""
engine — silnik generatora: interpreter komentarzy, aliasy, rozszerzenia, szablon.

Interfejs publiczny:
    DocumentContext   — stan przebiegu (sekcje, aliasy, dokument końcowy)
    Reporter          — zgłaszanie błędów (rich, stderr) + lista Diagnostic
    process_source    — przetwarzanie jednego pliku źródłowego
    render_document   — przetwarzanie szablonu .docgen
    build_docs        — pełny przebieg z zapisem index.md

Typowe użycie:
    from engine import DocumentContext, build_docs

    ctx  = DocumentContext(output_dir=Path("docs"), root_dir=Path("."))
    path = build_docs(ctx)
    for d in ctx.reporter.diagnostics:
        print(d.code, d.message)
"""

from .types import ErrorCode, Diagnostic
from .reporting import Reporter
from .context import DocumentContext
from .interpreter import process_source
from .orchestrator import render_document, run_template_command
from .runner import build_docs

__all__ = [
    "ErrorCode",
    "Diagnostic",
    "Reporter",
    "DocumentContext",
    "process_source",
    "render_document",
    "run_template_command",
    "build_docs",
]
