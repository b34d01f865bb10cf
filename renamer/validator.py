import logging
import re
import string
from dataclasses import dataclass

log = logging.getLogger(__name__)

# Characters that, directly after a bare `$N`, get read as part of the reference
# or are easy to misread as such.
AMBIGUOUS_FOLLOWERS = frozenset(string.digits + string.ascii_letters + "_$")

NAME_CHARS = frozenset(string.digits + string.ascii_letters + "_")

BARE_NUMERIC_REF = re.compile(r"\$([0-9]+)")


@dataclass(frozen=True)
class AmbiguousReference:
    offset: int  # UTF-8 byte offset of the `$`
    reference: str  # the bare reference as written, e.g. `$1`
    read_as: str  # what the substitution engine reads, e.g. `$1abc`
    context: str  # the stretch of template involved, e.g. `$1abc` or `$1$2`
    suggestion: str  # `context` with bare references braced, e.g. `${1}abc`

    def message(self):
        if self.read_as == self.reference:
            # Followed by `$`: read correctly, but the boundary is easy to miss
            return (
                f"capture reference `{self.reference}` at byte {self.offset} "
                f"runs straight into the next `$` in `{self.context}`. "
                f"Use `{self.suggestion}` to make the boundary explicit."
            )
        return (
            f"capture reference `{self.reference}` at byte {self.offset} "
            f"is being read as `{self.read_as}`. "
            f"If this is not intended use `{self.suggestion}` instead."
        )


def _read_name(text, start):
    """Returns the end index of the longest group-name run starting at `start`."""
    end = start
    while end < len(text) and text[end] in NAME_CHARS:
        end += 1
    return end


def check_replacement(template):
    """
    Scans a replacement template for bare `$N` references that are ambiguous.

    Warnings are advisory: the substitution itself is well defined (it reads the
    longest run of name characters after `$`), this only catches templates
    like `$1abc` or `$1$2` where a human probably meant `${1}abc` / `${1}${2}`.
    Braced references, `$$` escapes and a `$N` at the end of the template
    never warn.
    """
    warnings = []
    i = 0
    n = len(template)

    while i < n:
        if template[i] != "$":
            i += 1
            continue

        nxt = template[i + 1] if i + 1 < n else ""

        if nxt == "$":
            i += 2
            continue

        if nxt == "{":
            close = template.find("}", i + 2)
            if close != -1:
                i = close + 1
            else:
                i += 1
            continue

        j = i + 1
        while j < n and template[j] in string.digits:
            j += 1

        if j == i + 1:
            # Literal `$` or a named reference
            i += 1
            continue

        if j < n and template[j] in AMBIGUOUS_FOLLOWERS:
            name_end = _read_name(template, i + 1)
            if template[j] == "$":
                context_end = _read_name(template, j + 1)
            else:
                context_end = name_end
            context = template[i:context_end]
            offset = len(template[:i].encode("utf-8"))
            warnings.append(AmbiguousReference(
                offset=offset,
                reference=template[i:j],
                read_as=template[i:name_end],
                context=context,
                suggestion=suggest_braced(context),
            ))
            log.debug("Ambiguous reference at byte %d in %r", offset, template)

        i = j

    return warnings


def suggest_braced(template):
    """Rewrites every bare numeric reference as `${N}`, leaving `$$` and braces alone."""
    out = []
    i = 0
    n = len(template)

    while i < n:
        if template.startswith("$$", i):
            out.append("$$")
            i += 2
            continue

        match = BARE_NUMERIC_REF.match(template, i)
        if match:
            out.append(f"${{{match.group(1)}}}")
            i = match.end()
            continue

        out.append(template[i])
        i += 1

    return "".join(out)
