"""
engine/template.py — podział pliku szablonu (.docgen) na tekst i komendy.

Reguły:
  - linia zaczynająca się od "@@" to komenda
  - jeśli w tej samej linii jest drugie "@@", komenda to tekst pomiędzy
    (reszta linii za zamknięciem jest ignorowana)
  - w przeciwnym razie komenda ciągnie się przez kolejne linie aż do linii
    zaczynającej się od "@@"; reszta tej linii po "@@" należy do komendy
  - pozostałe linie to dosłowny Markdown
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal

COMMAND_MARK = "@@"

_ItemKind = Literal["TEXT", "COMMAND"]


@dataclass(slots=True)
class TemplateItem:
    kind: _ItemKind
    text: str
    line_start: int     # 1-based
    line_end: int

    @property
    def location(self) -> str:
        if self.line_start == self.line_end:
            return f"linia {self.line_start}"
        return f"linie {self.line_start}–{self.line_end}"


def _split_lines(source: str) -> list[str]:
    # Tylko "\n" (i "\r\n") kończy linię; \f, \u2028 itp. zostają w tekście.
    lines = [line.removesuffix("\r") for line in source.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def read_template(source: str) -> Iterator[TemplateItem]:
    lines = _split_lines(source)
    i = 0
    while i < len(lines):
        line = lines[i]
        start = i + 1

        if not line.startswith(COMMAND_MARK):
            yield TemplateItem("TEXT", line, start, start)
            i += 1
            continue

        close = line.find(COMMAND_MARK, len(COMMAND_MARK))
        if close != -1:
            yield TemplateItem("COMMAND", line[len(COMMAND_MARK):close], start, start)
            i += 1
            continue

        # komenda wieloliniowa
        parts = [line[len(COMMAND_MARK):]]
        i += 1
        while i < len(lines):
            if lines[i].startswith(COMMAND_MARK):
                parts.append(lines[i][len(COMMAND_MARK):])
                break
            parts.append(lines[i])
            i += 1
        end = min(i + 1, len(lines))
        yield TemplateItem("COMMAND", "\n".join(parts), start, end)
        i += 1
