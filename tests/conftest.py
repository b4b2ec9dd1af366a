"""
Wspólne fixture'y testów generatora.

- reporter:  Reporter z konsolami rich piszącymi do pamięci (StringIO)
- ctx:       DocumentContext z katalogiem projektu w tmp_path
- interpret: przetwarza tekst źródła i zwraca zawartość bufora głównego
"""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from data_model import SourceUnit
from engine import DocumentContext, Reporter, process_source


@pytest.fixture
def reporter():
    return Reporter(
        console=Console(file=io.StringIO(), width=200),
        err_console=Console(file=io.StringIO(), width=200),
    )


@pytest.fixture
def ctx(tmp_path, reporter):
    return DocumentContext(
        output_dir=tmp_path / "docs",
        root_dir=tmp_path,
        reporter=reporter,
    )


@pytest.fixture
def interpret(ctx):
    def _run(text: str, filename: str = "src/sample.cpp") -> str:
        process_source(SourceUnit(text=text, filename=filename), ctx)
        return ctx.main_text

    return _run
