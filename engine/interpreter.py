"""
engine/interpreter.py — interpreter komend w komentarzach źródła.

Architektura:
  SourceUnit → extract_comments() → dla każdego CommentSpan:
    tekst komentarza skanowany od lewej; "@DOC" otwiera span dokumentacji,
    "@END" go zamyka. Tylko wewnątrz spanu:
      - zwykłe znaki trafiają do aktywnego bufora (ctx.write)
      - pozostałe komendy idą do dispatch() (wbudowane → aliasy → rozszerzenia)

Token komendy: '@' + wielka litera ASCII + [A-Za-z0-9_]*, opcjonalnie
bezpośrednio po nim '(' z listą argumentów (split_args).
"\\(" tuż za komendą: backslash jest pomijany, '(' trafia do tekstu.
"""

from __future__ import annotations

import re

from data_model.sources import CallSite, CommandCall, CommentSpan, SourceUnit
from lexer.args import split_args
from lexer.comments import extract_comments

from .context import DocumentContext
from .resolvers import dispatch

_COMMAND_RE = re.compile(r"@([A-Z][A-Za-z0-9_]*)")

DOC_START = "DOC"
DOC_END = "END"


def process_source(unit: SourceUnit, ctx: DocumentContext) -> None:
    """
    Przetwarza wszystkie komentarze jednego źródła w kolejności.

    Nie resetuje ctx.current_section — robi to orkiestrator po każdym
    pliku; rozwinięcia aliasów wołają tę funkcję bez resetu.
    """
    for comment in extract_comments(unit.text):
        process_comment(comment, unit, ctx)


def process_comment(comment: CommentSpan, unit: SourceUnit, ctx: DocumentContext) -> None:
    text = comment.text
    site = CallSite(unit=unit, comment=comment)
    in_doc = False
    index = 0

    while index < len(text):
        at = text.find("@", index)
        if at == -1:
            at = len(text)
        if at > index:
            if in_doc:
                ctx.write(text[index:at])
            index = at
            continue

        m = _COMMAND_RE.match(text, index)
        if m is None:
            # samotne '@' (np. adres e-mail) to zwykły znak
            if in_doc:
                ctx.write("@")
            index += 1
            continue

        name = m.group(1)
        index = m.end()
        args: list[str] = []
        if index < len(text) and text[index] == "(":
            split = split_args(text, index)
            args = split.args
            index = split.end + 1

        if name == DOC_START:
            in_doc = True
        elif name == DOC_END:
            in_doc = False
        elif in_doc:
            dispatch(CommandCall(name=name, args=args), site, ctx)

        if text.startswith("\\(", index):
            index += 1
