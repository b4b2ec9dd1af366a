"""
engine/types.py — kody błędów i struktura pojedynczego zgłoszenia.

Diagnostic — pojedynczy błąd z kodem, komunikatem i (opcjonalnie) plikiem
    lub linią szablonu, w którym wystąpił.

Żaden z tych błędów nie przerywa przebiegu — silnik zgłasza i idzie dalej.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorCode(StrEnum):
    """Stałe kody błędów generatora."""

    # a — błędne argumenty komendy
    BAD_ARG_COUNT               = "E_BAD_ARG_COUNT"
    BAD_ARG_VALUE               = "E_BAD_ARG_VALUE"

    # b — nierozwiązane odwołania
    UNKNOWN_COMMAND             = "E_UNKNOWN_COMMAND"
    UNKNOWN_TEMPLATE_COMMAND    = "E_UNKNOWN_TEMPLATE_COMMAND"
    SECTION_NOT_FOUND           = "E_SECTION_NOT_FOUND"
    ARG_OUT_OF_RANGE            = "E_ARG_OUT_OF_RANGE"
    EXTENSION_SYMBOL            = "E_EXTENSION_SYMBOL"
    ALIAS_CYCLE                 = "E_ALIAS_CYCLE"

    # c — budowanie / ładowanie rozszerzeń
    BUILD_FAILED                = "E_BUILD_FAILED"
    BUILD_TIMEOUT               = "E_BUILD_TIMEOUT"
    EXTENSION_LOAD              = "E_EXTENSION_LOAD"
    EXTENSION_FAILED            = "E_EXTENSION_FAILED"

    # d — pliki źródłowe i wyjściowe
    NO_SOURCES                  = "E_NO_SOURCES"
    SOURCE_READ                 = "E_SOURCE_READ"
    OUTPUT_WRITE                = "E_OUTPUT_WRITE"


@dataclass(slots=True)
class Diagnostic:
    """
    Pojedynczy zgłoszony błąd.

    - code:     stały identyfikator klasy błędu (ErrorCode)
    - message:  czytelny opis
    - location: plik źródłowy lub "linia N" szablonu (None gdy nieznane)
    """

    code: ErrorCode
    message: str
    location: str | None = None

    def __str__(self) -> str:
        where = f" ({self.location})" if self.location else ""
        return f"{self.code}: {self.message}{where}"
