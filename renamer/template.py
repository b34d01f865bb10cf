"""
Dollar-style replacement templates.

Python's `re.sub` expects `\\1` / `\\g<1>`; this tool takes `$1`, `${1}`,
`$name`, `${name}` and `$$` instead, so templates are parsed once and expanded
against each `re.Match` by hand.
"""

import string
from dataclasses import dataclass
from typing import Tuple, Union

from renamer.validator import NAME_CHARS


@dataclass(frozen=True)
class GroupRef:
    group: Union[int, str]


Piece = Union[str, GroupRef]


def _to_group(name):
    return int(name) if all(c in string.digits for c in name) else name


def parse_template(text) -> Tuple[Piece, ...]:
    pieces = []
    literal = []
    i = 0
    n = len(text)

    def flush():
        if literal:
            pieces.append("".join(literal))
            literal.clear()

    while i < n:
        char = text[i]
        if char != "$":
            literal.append(char)
            i += 1
            continue

        nxt = text[i + 1] if i + 1 < n else ""

        if nxt == "$":
            literal.append("$")
            i += 2
            continue

        if nxt == "{":
            close = text.find("}", i + 2)
            name = text[i + 2:close] if close != -1 else ""
            if name:
                flush()
                pieces.append(GroupRef(_to_group(name)))
                i = close + 1
            else:
                literal.append("$")
                i += 1
            continue

        end = i + 1
        while end < n and text[end] in NAME_CHARS:
            end += 1

        if end == i + 1:
            literal.append("$")
            i += 1
            continue

        flush()
        pieces.append(GroupRef(_to_group(text[i + 1:end])))
        i = end

    flush()
    return tuple(pieces)


class ReplacementTemplate:
    """A parsed replacement string. Immutable once built."""

    def __init__(self, text):
        self._text = text
        self._pieces = parse_template(text)

    @property
    def text(self):
        return self._text

    @property
    def pieces(self):
        return self._pieces

    def expand(self, match):
        """Substitutes capture groups of `match`; missing or unmatched groups become ''."""
        out = []
        for piece in self._pieces:
            if isinstance(piece, str):
                out.append(piece)
                continue
            try:
                value = match.group(piece.group)
            except IndexError:
                value = None
            out.append(value or "")
        return "".join(out)

    def substitute(self, match):
        """Returns the searched string with just this match replaced, like a count=1 sub."""
        text = match.string
        return text[:match.start()] + self.expand(match) + text[match.end():]

    def __repr__(self):
        return f"ReplacementTemplate({self._text!r})"
