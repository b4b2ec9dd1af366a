"""
engine/reporting.py — zgłaszanie błędów i komunikatów postępu.

Komunikaty postępu idą na stdout, błędy na stderr (obie konsole rich).
Każdy błąd jest też zapamiętywany jako Diagnostic, żeby CLI (--strict)
i testy mogły sprawdzić, co zostało zgłoszone.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from .types import Diagnostic, ErrorCode


class Reporter:
    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self.console     = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.diagnostics: list[Diagnostic] = []

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def error(
        self,
        code: ErrorCode,
        message: str,
        location: str | None = None,
    ) -> Diagnostic:
        diag = Diagnostic(code=code, message=message, location=location)
        self.diagnostics.append(diag)
        where = f" [dim]({escape(location)})[/dim]" if location else ""
        self.err_console.print(f"[red]Błąd {code}:[/red] {escape(message)}{where}")
        return diag

    def codes(self) -> list[ErrorCode]:
        return [d.code for d in self.diagnostics]
