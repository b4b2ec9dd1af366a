"""Ustawienia przebiegu — konfiguracja przez zmienne środowiskowe."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Settings:
    root: Path
    template: str
    output_dir: Path
    python: str
    build_timeout: float | None


def _parse_timeout(raw: str) -> float | None:
    """Pusta wartość → brak limitu; inaczej liczba sekund > 0 (ValueError)."""
    raw = raw.strip()
    if not raw:
        return None
    try:
        seconds = float(raw)
    except ValueError:
        raise ValueError(f"DOCGEN_BUILD_TIMEOUT: '{raw}' nie jest liczbą sekund") from None
    if not seconds > 0:
        raise ValueError(f"DOCGEN_BUILD_TIMEOUT: limit musi być dodatni, podano {raw}")
    return seconds


def get_settings(
    root: str | None = None,
    output_dir: str | None = None,
    template: str | None = None,
) -> Settings:
    """
    Argumenty (z CLI) mają pierwszeństwo przed zmiennymi środowiskowymi.

    Podnosi ValueError przy niepoprawnym DOCGEN_BUILD_TIMEOUT.
    """
    root_path = Path(root or os.getenv("DOCGEN_ROOT", ".")).resolve()
    return Settings(
        root          = root_path,
        template      = template or os.getenv("DOCGEN_TEMPLATE", ".docgen"),
        output_dir    = root_path / (output_dir or os.getenv("DOCGEN_OUTPUT_DIR", "docs")),
        python        = os.getenv("DOCGEN_PYTHON", sys.executable),
        build_timeout = _parse_timeout(os.getenv("DOCGEN_BUILD_TIMEOUT", "")),
    )
