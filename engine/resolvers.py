"""
engine/resolvers.py — rozwiązywanie komend: wbudowane → aliasy → rozszerzenia.

Trzy warianty CommandResolver, sprawdzane w stałej kolejności:
  BuiltinResolver    — tabela BUILTINS (zawsze pierwsza)
  AliasResolver      — alias z NEW_ALIAS; tekst aliasu jest wstawiany jako
                       "/* @DOC <alias> @END */" przed resztą kodu i
                       przetwarzany rekurencyjnie jak nowe źródło
  ExtensionResolver  — skompilowany moduł <output_dir>/commands/<NAZWA>.pyc

Nieznana komenda → E_UNKNOWN_COMMAND, brak wyjścia.
"""

from __future__ import annotations

from typing import Protocol

from data_model.sources import CallSite, CommandCall, SourceUnit
from lexer.text import simplify_whitespace

from . import extensions
from .builtins import BUILTINS
from .context import DocumentContext
from .types import ErrorCode

# Limit zagnieżdżenia aliasów (poza wykrywaniem bezpośrednich cykli).
MAX_ALIAS_DEPTH = 32

# Prefiks skrótu SIMPLIFY: @S_NEXT_LINE == @S(NEXT_LINE)
_SIMPLIFY_PREFIX = "S_"


def _emit(call: CommandCall, text: str, ctx: DocumentContext) -> None:
    ctx.write(simplify_whitespace(text) if call.simplify else text)


class CommandResolver(Protocol):
    def can_resolve(self, name: str, ctx: DocumentContext) -> bool: ...

    def invoke(self, call: CommandCall, site: CallSite, ctx: DocumentContext) -> None: ...


# ---------------------------------------------------------------------------
# Komendy wbudowane
# ---------------------------------------------------------------------------

class BuiltinResolver:
    def can_resolve(self, name: str, ctx: DocumentContext) -> bool:
        return name in BUILTINS

    def invoke(self, call: CommandCall, site: CallSite, ctx: DocumentContext) -> None:
        text = BUILTINS[call.name](call, site, ctx)
        if text is not None:
            _emit(call, text, ctx)


# ---------------------------------------------------------------------------
# Aliasy
# ---------------------------------------------------------------------------

class AliasResolver:
    def can_resolve(self, name: str, ctx: DocumentContext) -> bool:
        return name in ctx.aliases

    def invoke(self, call: CommandCall, site: CallSite, ctx: DocumentContext) -> None:
        from engine.interpreter import process_source

        name = call.name
        if name in ctx.alias_stack or len(ctx.alias_stack) >= MAX_ALIAS_DEPTH:
            chain = " -> ".join([*ctx.alias_stack, name])
            ctx.reporter.error(
                ErrorCode.ALIAS_CYCLE,
                f"cykl aliasów: {chain}",
                site.unit.filename,
            )
            return

        pseudo = SourceUnit(
            text=expansion_source(ctx.aliases[name], site),
            filename=site.unit.filename,
        )
        ctx.alias_stack.append(name)
        try:
            process_source(pseudo, ctx)
        finally:
            ctx.alias_stack.pop()


def expansion_source(alias_text: str, site: CallSite) -> str:
    """
    Buduje pseudo-źródło dla rozwinięcia aliasu.

    Kod za komentarzem jest ucinany przed następnym komentarzem ("/*" lub "//"),
    żeby komendy w aliasie widziały ten sam kod co komenda, którą zastępują.
    """
    src = site.unit.text
    start = site.comment.end + 1
    stops = [i for i in (src.find("/*", start), src.find("//", start)) if i != -1]
    end = min(stops) if stops else len(src)
    return "/* @DOC\n" + alias_text + "\n@END\n*/\n" + src[start:end]


# ---------------------------------------------------------------------------
# Rozszerzenia (NEW_COMMAND)
# ---------------------------------------------------------------------------

class ExtensionResolver:
    def can_resolve(self, name: str, ctx: DocumentContext) -> bool:
        if not name.isidentifier():
            return False
        return name in ctx.extensions or extensions.compiled_path(ctx.output_dir, name).exists()

    def invoke(self, call: CommandCall, site: CallSite, ctx: DocumentContext) -> None:
        entry = ctx.extensions.get(call.name)
        if entry is None:
            try:
                entry = extensions.load_entry_point(ctx.output_dir, call.name)
            except extensions.ExtensionError as e:
                ctx.reporter.error(e.code, e.message, site.unit.filename)
                return
            ctx.extensions[call.name] = entry

        try:
            result = entry(site.trailing, list(call.args))
        except Exception as e:
            ctx.reporter.error(
                ErrorCode.EXTENSION_FAILED,
                f"komenda {call.name} zgłosiła wyjątek: {e!r}",
                site.unit.filename,
            )
            return

        if not isinstance(result, str):
            ctx.reporter.error(
                ErrorCode.EXTENSION_FAILED,
                f"komenda {call.name} zwróciła {type(result).__name__} zamiast str",
                site.unit.filename,
            )
            return
        _emit(call, result, ctx)


RESOLVERS: tuple[CommandResolver, ...] = (
    BuiltinResolver(),
    AliasResolver(),
    ExtensionResolver(),
)


def dispatch(call: CommandCall, site: CallSite, ctx: DocumentContext) -> None:
    """Wykonuje komendę z komentarza przez pierwszy pasujący resolver."""
    if call.name.startswith(_SIMPLIFY_PREFIX):
        call = CommandCall(name=call.name[len(_SIMPLIFY_PREFIX):], args=call.args, simplify=True)

    for resolver in RESOLVERS:
        if resolver.can_resolve(call.name, ctx):
            resolver.invoke(call, site, ctx)
            return

    ctx.reporter.error(
        ErrorCode.UNKNOWN_COMMAND,
        f"nieznana komenda {call.name}",
        site.unit.filename,
    )
