"""
engine/orchestrator.py — komendy szablonu (.docgen) i składanie dokumentu.

Komendy (linie "@@...@@" szablonu):
  NEW_COMMAND(nazwa, [importy], ciało)  — generuje i buduje rozszerzenie
  PROCESS_SOURCES(wzorzec, ...)         — przetwarza pliki źródłowe
  INSERT_SECTION(nazwa)                 — wstawia sekcję do dokumentu
  NEW_ALIAS(nazwa, treść)               — rejestruje alias

Każdy błąd jest zgłaszany przez ctx.reporter i komenda jest pomijana;
przebieg trwa dalej.
"""

from __future__ import annotations

import glob
import subprocess
from pathlib import Path
from typing import Callable, TypeAlias

from data_model.sources import SourceUnit
from lexer.args import split_args
from lexer.text import collapse_blank_lines, strip_enclosing, unquote

from . import extensions
from .context import DocumentContext
from .interpreter import process_source
from .template import read_template
from .types import ErrorCode

TemplateHandler: TypeAlias = Callable[[list[str], DocumentContext, str | None], None]


# ---------------------------------------------------------------------------
# NEW_COMMAND
# ---------------------------------------------------------------------------

def _new_command(args: list[str], ctx: DocumentContext, where: str | None) -> None:
    if len(args) not in (2, 3):
        ctx.reporter.error(
            ErrorCode.BAD_ARG_COUNT,
            f"NEW_COMMAND wymaga 2 lub 3 argumentów, podano {len(args)}",
            where,
        )
        return

    name = unquote(args[0])
    if not name.isidentifier():
        ctx.reporter.error(
            ErrorCode.BAD_ARG_VALUE,
            f"NEW_COMMAND: '{name}' nie jest poprawną nazwą komendy",
            where,
        )
        return
    imports, body = (args[1], args[2]) if len(args) == 3 else ("", args[1])

    try:
        extensions.write_source(ctx.output_dir, name, body, imports)
    except OSError as e:
        ctx.reporter.error(
            ErrorCode.BUILD_FAILED,
            f"nie można zapisać źródła komendy {name}: {e}",
            where,
        )
        return
    ctx.extensions.pop(name, None)
    try:
        extensions.build_command(
            ctx.output_dir, name, python=ctx.python, timeout=ctx.build_timeout
        )
    except subprocess.TimeoutExpired:
        ctx.reporter.error(
            ErrorCode.BUILD_TIMEOUT,
            f"budowanie komendy {name} przekroczyło {ctx.build_timeout} s",
            where,
        )
    except OSError as e:
        ctx.reporter.error(
            ErrorCode.BUILD_FAILED,
            f"nie można uruchomić budowania komendy {name}: {e}",
            where,
        )


# ---------------------------------------------------------------------------
# PROCESS_SOURCES
# ---------------------------------------------------------------------------

def expand_patterns(patterns: list[str], root: Path) -> list[Path]:
    """Rekurencyjny glob względem `root`; tylko pliki, posortowane, bez duplikatów."""
    found: set[Path] = set()
    for pattern in patterns:
        pattern = unquote(pattern)
        if not pattern:
            continue
        for match in glob.glob(pattern, root_dir=root, recursive=True):
            path = root / match
            if path.is_file():
                found.add(path)
    return sorted(found)


def _process_sources(args: list[str], ctx: DocumentContext, where: str | None) -> None:
    sources = expand_patterns(args, ctx.root_dir)
    if not sources:
        ctx.reporter.error(
            ErrorCode.NO_SOURCES,
            "nie znaleziono plików źródłowych dla: " + ", ".join(args),
            where,
        )
        return

    for path in sources:
        ctx.reporter.info(f"Przetwarzanie {path}")
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            ctx.reporter.error(ErrorCode.SOURCE_READ, f"nie można odczytać pliku: {e}", str(path))
            continue
        process_source(SourceUnit(text=text, filename=str(path)), ctx)
        ctx.select_section("")


# ---------------------------------------------------------------------------
# INSERT_SECTION / NEW_ALIAS
# ---------------------------------------------------------------------------

def _insert_section(args: list[str], ctx: DocumentContext, where: str | None) -> None:
    if len(args) != 1:
        ctx.reporter.error(
            ErrorCode.BAD_ARG_COUNT,
            f"INSERT_SECTION wymaga 1 argumentu, podano {len(args)}",
            where,
        )
        return
    name = unquote(args[0])
    text = ctx.section_text(name)
    if text is None:
        ctx.reporter.error(ErrorCode.SECTION_NOT_FOUND, f"nie znaleziono sekcji {name}", where)
        return
    ctx.emit_output(collapse_blank_lines(text))
    ctx.emit_output("\n\n")


def _new_alias(args: list[str], ctx: DocumentContext, where: str | None) -> None:
    if len(args) != 2:
        ctx.reporter.error(
            ErrorCode.BAD_ARG_COUNT,
            f"NEW_ALIAS wymaga 2 argumentów, podano {len(args)}",
            where,
        )
        return
    ctx.aliases[unquote(args[0])] = strip_enclosing(args[1])


TEMPLATE_COMMANDS: dict[str, TemplateHandler] = {
    "NEW_COMMAND":     _new_command,
    "PROCESS_SOURCES": _process_sources,
    "INSERT_SECTION":  _insert_section,
    "NEW_ALIAS":       _new_alias,
}


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def run_template_command(command: str, ctx: DocumentContext, where: str | None = None) -> None:
    """Wykonuje jedną komendę szablonu (tekst bez znaczników "@@")."""
    command = command.strip()
    pos = command.find("(")
    if pos == -1:
        name, args = command, []
    else:
        name, args = command[:pos].strip(), split_args(command, pos).args

    handler = TEMPLATE_COMMANDS.get(name)
    if handler is None:
        ctx.reporter.error(
            ErrorCode.UNKNOWN_TEMPLATE_COMMAND,
            f"nieznana komenda szablonu {name}",
            where,
        )
        return
    handler(args, ctx, where)


def render_document(template: str, ctx: DocumentContext) -> str:
    """
    Przetwarza cały szablon i zwraca dokument końcowy.

    Kolejność: dosłowne linie szablonu i wstawione sekcje, na końcu bufor
    główny; całość bez nadmiarowych pustych linii i po strip().
    """
    for item in read_template(template):
        if item.kind == "TEXT":
            ctx.emit_output(item.text + "\n")
        else:
            run_template_command(item.text, ctx, item.location)

    ctx.emit_output(collapse_blank_lines(ctx.main_text))
    return collapse_blank_lines(ctx.output_text).strip()
