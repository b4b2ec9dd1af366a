"""
engine/extensions.py — komendy-rozszerzenia budowane z szablonu (NEW_COMMAND).

Cykl życia:
  NEW_COMMAND(NAZWA, [importy], {ciało})
  → render_source()  → <output_dir>/commands/NAZWA.py
  → build_command()  → podproces Pythona kompiluje do commands/NAZWA.pyc
  → load_entry_point() przy pierwszym użyciu @NAZWA w komentarzu

Kontrakt modułu: funkcja o nazwie entry_symbol(NAZWA) z sygnaturą
    (code: str, args: list[str]) -> str
gdzie `code` to kod źródłowy za komentarzem, a `args` to argumenty komendy.

Budowanie nie jest weryfikowane — błąd kompilacji wychodzi dopiero przy
ładowaniu (brak .pyc albo wyjątek importu).
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import subprocess
import sys
import textwrap
from pathlib import Path

from lexer.text import strip_enclosing

from .context import EntryPoint
from .types import ErrorCode

COMMANDS_DIR = "commands"

# Kompilacja do wskazanej ścieżki .pyc (py_compile -m pisze do __pycache__).
_BUILD_SCRIPT = (
    "import py_compile, sys; "
    "py_compile.compile(sys.argv[1], cfile=sys.argv[2], doraise=True)"
)

_FUNCTION_TEMPLATE = '''\
# Wygenerowane przez docgen z NEW_COMMAND({name}) — nie edytować ręcznie.
{imports}

def {symbol}(code: str, args: list[str]) -> str:
{body}
'''


class ExtensionError(Exception):
    """Błąd ładowania rozszerzenia; niefatalny, zgłaszany przy użyciu komendy."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


# ---------------------------------------------------------------------------
# Ścieżki i nazwy
# ---------------------------------------------------------------------------

def commands_dir(output_dir: Path) -> Path:
    return Path(output_dir) / COMMANDS_DIR


def source_path(output_dir: Path, name: str) -> Path:
    return commands_dir(output_dir) / f"{name}.py"


def compiled_path(output_dir: Path, name: str) -> Path:
    return commands_dir(output_dir) / f"{name}.pyc"


def entry_symbol(name: str) -> str:
    """Nazwa eksportowanej funkcji dla komendy — to po prostu nazwa komendy."""
    return name


def list_commands(output_dir: Path) -> list[str]:
    """Nazwy komend, dla których istnieje źródło lub skompilowany moduł."""
    folder = commands_dir(output_dir)
    if not folder.is_dir():
        return []
    names = {p.stem for p in folder.iterdir() if p.suffix in (".py", ".pyc")}
    return sorted(names)


# ---------------------------------------------------------------------------
# Generowanie i budowanie
# ---------------------------------------------------------------------------

def render_source(name: str, body: str, imports: str = "") -> str:
    """
    Składa plik modułu rozszerzenia.

    - imports: dowolny kod przed funkcją (np. "import re"); zdejmowana jest
               jedna zewnętrzna warstwa (), [], {} lub ""
    - body:    ciało funkcji; zewnętrzne {} są zdejmowane, wcięcie
               normalizowane — ciało najlepiej zaczynać od nowej linii
    """
    imports = strip_enclosing(imports) if imports.strip() else ""

    body = body.strip()
    if body.startswith("{") and body.endswith("}"):
        body = body[1:-1]
    body = textwrap.dedent(body.strip("\n")).rstrip()
    if not body.strip():
        body = 'return ""'

    return _FUNCTION_TEMPLATE.format(
        name=name,
        imports=textwrap.dedent(imports).strip() + "\n" if imports else "",
        symbol=entry_symbol(name),
        body=textwrap.indent(body, "    "),
    )


def write_source(output_dir: Path, name: str, body: str, imports: str = "") -> Path:
    path = source_path(output_dir, name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_source(name, body, imports), encoding="utf-8")
    return path


def build_command(
    output_dir: Path,
    name: str,
    *,
    python: str | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[bytes]:
    """
    Kompiluje commands/<name>.py do commands/<name>.pyc w osobnym procesie.

    Stary .pyc jest usuwany przed budowaniem, żeby nieudana kompilacja nie
    zostawiła poprzedniej wersji komendy. Kod wyjścia nie jest sprawdzany.
    Może podnieść subprocess.TimeoutExpired lub OSError (brak interpretera).
    """
    src = source_path(output_dir, name)
    pyc = compiled_path(output_dir, name)
    pyc.unlink(missing_ok=True)
    cmd = [python or sys.executable, "-c", _BUILD_SCRIPT, str(src), str(pyc)]
    return subprocess.run(cmd, timeout=timeout, check=False)


# ---------------------------------------------------------------------------
# Ładowanie
# ---------------------------------------------------------------------------

def load_entry_point(output_dir: Path, name: str) -> EntryPoint:
    """Ładuje commands/<name>.pyc i zwraca funkcję-punkt wejścia."""
    path = compiled_path(output_dir, name)
    if not path.exists():
        raise ExtensionError(ErrorCode.EXTENSION_LOAD, f"brak modułu komendy {name}: {path}")

    module_name = f"docgen_commands_{name}"
    loader = importlib.machinery.SourcelessFileLoader(module_name, str(path))
    spec = importlib.util.spec_from_loader(module_name, loader)
    if spec is None:
        raise ExtensionError(ErrorCode.EXTENSION_LOAD, f"nie można załadować komendy {name}")
    module = importlib.util.module_from_spec(spec)
    try:
        loader.exec_module(module)
    except Exception as e:
        raise ExtensionError(
            ErrorCode.EXTENSION_LOAD,
            f"nie można załadować komendy {name}: {e!r}",
        ) from e

    func = getattr(module, entry_symbol(name), None)
    if not callable(func):
        raise ExtensionError(
            ErrorCode.EXTENSION_SYMBOL,
            f"moduł komendy {name} nie eksportuje funkcji {entry_symbol(name)}",
        )
    return func
