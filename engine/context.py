"""
engine/context.py — wspólny, mutowalny stan jednego przebiegu generatora.

DocumentContext jest tworzony raz na przebieg i przekazywany jawnie do
każdego wywołania interpretera (brak stanu globalnego).

Bufory:
  sections     — nazwane sekcje (SECTION("x")), tworzone leniwie
  main         — tekst pisany, gdy żadna sekcja nie jest wybrana
  output       — dokument końcowy; pisze do niego tylko orkiestrator
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, TypeAlias

from .reporting import Reporter

# Punkt wejścia komendy-rozszerzenia: (kod_po_komentarzu, argumenty) -> tekst
EntryPoint: TypeAlias = Callable[[str, list[str]], str]


@dataclass(slots=True)
class DocumentContext:
    output_dir: Path
    root_dir: Path = field(default_factory=Path.cwd)
    reporter: Reporter = field(default_factory=Reporter)

    # Interpreter używany do budowania rozszerzeń i limit czasu (None = brak).
    python: str = sys.executable
    build_timeout: float | None = None

    sections: dict[str, list[str]] = field(default_factory=dict)
    main: list[str] = field(default_factory=list)
    current_section: str = ""
    aliases: dict[str, str] = field(default_factory=dict)
    output: list[str] = field(default_factory=list)

    # Aliasy aktualnie rozwijane (od najbardziej zewnętrznego).
    alias_stack: list[str] = field(default_factory=list)
    # Załadowane punkty wejścia rozszerzeń; NEW_COMMAND unieważnia wpis.
    extensions: dict[str, EntryPoint] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Bufory sekcji
    # ------------------------------------------------------------------

    def select_section(self, name: str) -> None:
        """Pusta nazwa → bufor główny."""
        self.current_section = name
        if name:
            self.sections.setdefault(name, [])

    def write(self, text: str) -> None:
        if not text:
            return
        if self.current_section:
            self.sections.setdefault(self.current_section, []).append(text)
        else:
            self.main.append(text)

    def section_text(self, name: str) -> str | None:
        """Zwraca treść sekcji lub None, gdy sekcja nigdy nie powstała."""
        chunks = self.sections.get(name)
        if chunks is None:
            return None
        return "".join(chunks)

    @property
    def main_text(self) -> str:
        return "".join(self.main)

    # ------------------------------------------------------------------
    # Dokument końcowy
    # ------------------------------------------------------------------

    def emit_output(self, text: str) -> None:
        self.output.append(text)

    @property
    def output_text(self) -> str:
        return "".join(self.output)
