"""
data_model/sources.py — model jednostek źródłowych i komentarzy.

SourceUnit odpowiada jednemu plikowi źródłowemu (tylko do odczytu);
CommentSpan to jeden rozpoznany komentarz (liniowy lub blokowy) w tym pliku.
CommandCall to pojedyncze wystąpienie komendy @NAZWA(...) w tekście komentarza.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class SourceUnit:
    text: str
    filename: str

    @property
    def basename(self) -> str:
        """Nazwa pliku bez katalogu, np. "src/foo.cpp" → "foo.cpp"."""
        return Path(self.filename).name


@dataclass(frozen=True, slots=True)
class CommentSpan:
    """
    Komentarz rozpoznany w SourceUnit.

    - start: offset pierwszego znaku otwarcia ("//" lub "/*")
    - end:   dla komentarzy blokowych — pierwsza pozycja za "*/";
             dla liniowych — pozycja znaku "\\n" (albo koniec tekstu)
    - text:  wnętrze komentarza bez znaczników, po strip()
    """
    start: int
    end: int
    text: str


@dataclass(slots=True)
class CommandCall:
    """
    Wywołanie komendy w komentarzu.

    - name:     nazwa bez '@', np. "FUNC_ARG"
    - args:     argumenty po podziale (już po strip())
    - simplify: czy wynik przechodzi przez simplify_whitespace()
    """
    name: str
    args: list[str] = field(default_factory=list)
    simplify: bool = False


# Komentarze jednego pliku w kolejności źródła.
CommentList: TypeAlias = list[CommentSpan]


@dataclass(frozen=True, slots=True)
class CallSite:
    """Miejsce wywołania komendy: plik + komentarz, w którym wystąpiła."""
    unit: SourceUnit
    comment: CommentSpan

    @property
    def trailing(self) -> str:
        """Kod źródłowy za komentarzem (pomija jeden znak za końcem komentarza)."""
        return self.unit.text[self.comment.end + 1:]
