"""
lexer/args.py — podział listy argumentów z uwzględnieniem nawiasów i cudzysłowów.

Reguły:
  - przecinek i zamykający ')' liczą się tylko na głębokości 0 we wszystkich
    trzech rodzinach nawiasów: (), [], {}
  - '"' przełącza flagę "w cudzysłowie" (bez zagnieżdżania) — wewnątrz
    cudzysłowu żaden ogranicznik nie działa
  - każdy argument jest po strip()

Tryb łagodny: gdy głębokość dowolnej rodziny spadnie poniżej zera, szukamy
najbliższego ')' od tej pozycji i wszystko do niego to ostatni argument.
Dla zwykłego zamknięcia listy tym ')' jest sam znak zamykający.
"""

from __future__ import annotations

from dataclasses import dataclass, field

_OPENERS = {"(": 0, "[": 1, "{": 2}
_CLOSERS = {")": 0, "]": 1, "}": 2}


@dataclass(slots=True)
class ArgSplit:
    """
    Wynik split_args().

    - args: argumenty w kolejności, po strip()
    - end:  indeks zamykającego ')' (len(text) gdy lista niezamknięta)
    """
    args: list[str] = field(default_factory=list)
    end: int = 0


def split_args(text: str, index: int) -> ArgSplit:
    """
    Dzieli argumenty listy zaczynającej się nawiasem text[index] == "(".

    Przykład:
        split_args('(a, (b,c), "d,e")', 0).args == ["a", "(b,c)", '"d,e"']

    Lista "()" daje pustą listę argumentów.
    """
    depth = [0, 0, 0]
    in_quote = False
    last = index
    args: list[str] = []

    for i in range(index + 1, len(text)):
        c = text[i]
        if c == '"':
            in_quote = not in_quote
        if in_quote:
            continue

        if c in _OPENERS:
            depth[_OPENERS[c]] += 1
        elif c in _CLOSERS:
            depth[_CLOSERS[c]] -= 1
        elif c == "," and depth == [0, 0, 0]:
            args.append(text[last + 1:i].strip())
            last = i

        if min(depth) < 0:
            end = text.find(")", i)
            if end == -1:
                end = len(text)
            args.append(text[last + 1:end].strip())
            return ArgSplit(args=_drop_empty_list(args), end=end)

    # Brak zamknięcia: reszta tekstu to ostatni argument
    args.append(text[last + 1:].strip())
    return ArgSplit(args=_drop_empty_list(args), end=len(text))


def _drop_empty_list(args: list[str]) -> list[str]:
    if args == [""]:
        return []
    return args
