"""
engine/builtins.py — wbudowane komendy języka komentarzy.

Każda komenda dostaje CommandCall, miejsce wywołania (plik + komentarz)
i kontekst. Zwraca tekst do dopisania albo None (brak wyjścia: komenda
tylko zmienia stan lub zgłosiła błąd).

Wszystkie komendy wyciągające kod działają na tekście ZA komentarzem
(site.comment.end), nigdy na samym komentarzu:

  SECTION     — wybór bufora sekcji (bez argumentów → bufor główny)
  NEXT_LINE   — reszta bieżącej / następna linia kodu
  FUNC_NAME   — identyfikator przed najbliższym '('
  NEXT_DECL   — deklaracja do ';', '=' lub '{' (+ ';')
  FUNC_RET    — typ zwracany (tokeny przed nazwą funkcji)
  FUNC_ARGS   — cała lista argumentów funkcji
  FUNC_ARG(n) — n-ty argument funkcji (n < 0 liczy od końca)
  CLASS_NAME  — ostatni identyfikator przed '{', ':' lub ';'
  NEXT_MACRO  — od '#' do ')' włącznie
  FILE_NAME   — nazwa pliku bez katalogu
  SIMPLIFY, S — wywołuje inną komendę i upraszcza białe znaki w wyniku
"""

from __future__ import annotations

from typing import Callable, TypeAlias

from data_model.sources import CallSite, CommandCall
from lexer.args import split_args
from lexer.text import unquote

from .context import DocumentContext
from .types import ErrorCode

BuiltinHandler: TypeAlias = Callable[[CommandCall, CallSite, DocumentContext], str | None]

_OPERATOR_KEYWORD = "operator"


# ---------------------------------------------------------------------------
# Pomocnicze skanowanie tekstu
# ---------------------------------------------------------------------------

def _is_ident(c: str) -> bool:
    return c == "_" or (c.isascii() and c.isalnum())


def _scan_to(src: str, start: int, stops: str) -> int:
    """Indeks pierwszego znaku z `stops` od `start` (len(src) gdy brak)."""
    for i in range(max(start, 0), len(src)):
        if src[i] in stops:
            return i
    return len(src)


def _ident_before(src: str, end: int) -> int:
    """Cofa się po znakach identyfikatora; zwraca początek identyfikatora."""
    start = end
    while start > 0 and _is_ident(src[start - 1]):
        start -= 1
    return start


def _arg_list_bounds(src: str, start: int) -> tuple[int, int]:
    """
    Zwraca (open, close) najbliższej listy w nawiasach okrągłych od `start`.

    open == len(src) gdy nie ma '('; close == len(src) gdy lista niezamknięta.
    """
    open_ = _scan_to(src, start, "(")
    depth = 0
    close = open_
    while close < len(src):
        if src[close] == "(":
            depth += 1
        elif src[close] == ")":
            depth -= 1
        if depth == 0:
            break
        close += 1
    return open_, close


# ---------------------------------------------------------------------------
# Komendy
# ---------------------------------------------------------------------------

def _section(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    ctx.select_section(unquote(call.args[0]) if call.args else "")
    return None


def _next_line(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    src, end_at = site.unit.text, site.comment.end
    end = _scan_to(src, end_at + 1, "\n")
    return src[end_at:end].strip()


def _func_name(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    src = site.unit.text
    end = _scan_to(src, site.comment.end + 1, "(")
    while end > 0 and not _is_ident(src[end - 1]):
        end -= 1
    start = _ident_before(src, end)
    name = src[start:end].strip()
    if name == _OPERATOR_KEYWORD:
        # operator==, operator[] itd.: bierzemy wszystko do '('
        end = _scan_to(src, end, "(")
        name = src[start:end].strip()
    return name


def _next_decl(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    src, start = site.unit.text, site.comment.end + 1
    end = _scan_to(src, start, ";={")
    return src[start:end].strip() + ";"


def _func_ret(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    src, start = site.unit.text, site.comment.end + 1
    end = _scan_to(src, start, "(")
    while end > 0 and not src[end - 1].isspace():
        end -= 1
    return src[start:end].strip()


def _func_args(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    src = site.unit.text
    open_, close = _arg_list_bounds(src, site.comment.end + 1)
    return src[open_ + 1:close].strip()


def _func_arg(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    if len(call.args) != 1:
        ctx.reporter.error(
            ErrorCode.BAD_ARG_COUNT,
            f"FUNC_ARG wymaga 1 argumentu, podano {len(call.args)}",
            site.unit.filename,
        )
        return None
    try:
        num = int(call.args[0])
    except ValueError:
        ctx.reporter.error(
            ErrorCode.BAD_ARG_VALUE,
            f"FUNC_ARG: '{call.args[0]}' nie jest liczbą całkowitą",
            site.unit.filename,
        )
        return None

    src = site.unit.text
    open_, close = _arg_list_bounds(src, site.comment.end + 1)
    func_args = split_args(src[open_:close + 1], 0).args if open_ < len(src) else []

    index = num + len(func_args) if num < 0 else num
    if not 0 <= index < len(func_args):
        ctx.reporter.error(
            ErrorCode.ARG_OUT_OF_RANGE,
            f"argument {call.args[0]} nie istnieje (funkcja ma {len(func_args)})",
            site.unit.filename,
        )
        return None
    return func_args[index]


def _class_name(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    src = site.unit.text
    # ':' (lista bazowa) kończy nazwę tak samo jak '{' i ';', liczy się pierwszy
    end = _scan_to(src, site.comment.end + 1, "{:;")
    while end > 0 and src[end - 1].isspace():
        end -= 1
    start = _ident_before(src, end)
    return src[start:end].strip()


def _next_macro(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    # "#define ABC(a, b) ..." → "#define ABC(a, b)"
    src = site.unit.text
    start = _scan_to(src, site.comment.end + 1, "#")
    end = _scan_to(src, start, ")")
    return src[start:end].strip() + ")"


def _file_name(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    return site.unit.basename


def _simplify(call: CommandCall, site: CallSite, ctx: DocumentContext) -> str | None:
    from engine.resolvers import dispatch

    if not call.args:
        ctx.reporter.error(
            ErrorCode.BAD_ARG_COUNT,
            "SIMPLIFY wymaga co najmniej 1 argumentu (nazwy komendy)",
            site.unit.filename,
        )
        return None
    inner = CommandCall(name=call.args[0].strip(), args=list(call.args[1:]), simplify=True)
    dispatch(inner, site, ctx)
    return None


BUILTINS: dict[str, BuiltinHandler] = {
    "SECTION":    _section,
    "NEXT_LINE":  _next_line,
    "FUNC_NAME":  _func_name,
    "NEXT_DECL":  _next_decl,
    "FUNC_RET":   _func_ret,
    "FUNC_ARGS":  _func_args,
    "FUNC_ARG":   _func_arg,
    "CLASS_NAME": _class_name,
    "NEXT_MACRO": _next_macro,
    "FILE_NAME":  _file_name,
    "SIMPLIFY":   _simplify,
    "S":          _simplify,
}
