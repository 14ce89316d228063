"""
  Expression lexer

- Streaming: `lex` is a generator over the source text
- Classifies every token as one of:

    - number  -> decimal int/float (optional exponent), 0x / 0o / 0b integers
    - string  -> '...', "..." (backslash escapes) or `...` (raw); quotes are stripped
    - ident   -> [A-Za-z_][A-Za-z0-9_]*  (function names, variable names after `$`)
    - symbol  -> any other single non-space character (operators, brackets, `$`)

The lexer does not know which identifiers or symbols are meaningful; the
evaluator rejects the ones it cannot use.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from calc.errors import CalcSyntaxError

NUMBER = "number"
STRING = "string"
IDENT = "ident"
SYMBOL = "symbol"


TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<number>0[xX][0-9A-Fa-f]+|0[oO][0-7]+|0[bB][01]+"  # radix integers
    r"|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"  # decimal ints and floats
    r"|(?P<quote>[\"'`])"  # string start, body read by _read_string
    r"|(?P<ident>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<symbol>\S)"  # fallback: any other single character
    r")",
)

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int

    def __repr__(self):
        return f"Token({self.kind}, {self.text!r}, pos={self.pos})"


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token(kind, text, pos)."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None or m.lastgroup is None:
            # only trailing whitespace left
            return
        start = m.start(m.lastgroup)
        kind = m.lastgroup
        if kind == "quote":
            text, pos = _read_string(source, start)
            yield Token(STRING, text, start)
            continue
        yield Token(kind, m.group(kind), start)
        pos = m.end()


def _read_string(source: str, start: int) -> tuple[str, int]:
    quote = source[start]
    i = start + 1
    n = len(source)
    chars: list[str] = []
    while i < n:
        c = source[i]
        if c == "\\" and quote != "`":
            if i + 1 >= n:
                raise CalcSyntaxError("unterminated escape sequence", i)
            nxt = source[i + 1]
            chars.append(ESCAPES.get(nxt, nxt))
            i += 2
            continue
        if c == quote:
            return "".join(chars), i + 1
        chars.append(c)
        i += 1
    raise CalcSyntaxError("unterminated string literal", start)


def number_value(text: str) -> float:
    """Every integer literal form is normalised to float."""
    if len(text) > 1 and text[0] == "0" and text[1] in "xXoObB":
        return float(int(text, 0))
    return float(text)
