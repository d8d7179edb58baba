"""
Kataifier - Turn annotated source files into kata exercises

A kata line is any line whose content, after optional leading whitespace,
starts with the marker ``////``. The text after the marker becomes the line
of the exercise, and the code it annotates is removed:

    ////const answer = undefined;
    const answer = 42;

becomes

    const answer = undefined;

Everything here is pure: strings in, strings out.

Author: Kataify maintainers | 2026-10-18
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

KATA_MARKER = "////"

# Leading whitespace, the marker, the whitespace run after it (a CR is kept), then the code.
_KATA_LINE_RE = re.compile(r"^(\s*)" + re.escape(KATA_MARKER) + r"[^\S\r]*(.*)$", re.DOTALL)


class KataMode(str, Enum):
    """Which lines a kata line replaces."""

    NEXT_LINE = "next_line"  # the single line right after the marker
    UNTIL_NEXT_MARKER = "until_next_marker"  # everything up to the next marker


@dataclass(frozen=True)
class KataLine:
    """A parsed kata line."""

    indent: str
    code: str

    def render(self) -> str:
        """The line as it appears in the kata."""
        return self.indent + self.code


def parse_kata_line(line: str) -> Optional[KataLine]:
    """
    Parse a single line as a kata line.

    Args:
        line: One line, without its line break

    Returns:
        KataLine, or None if the line carries no marker
    """
    match = _KATA_LINE_RE.match(line)
    if match is None:
        return None
    return KataLine(indent=match.group(1), code=match.group(2))


def is_kata_line(line: str) -> bool:
    """Check if a line starts (after indentation) with the kata marker."""
    return _KATA_LINE_RE.match(line) is not None


def contains_kata_markers(content: str) -> bool:
    """Check if any line of content is a kata line."""
    return any(is_kata_line(line) for line in content.split("\n"))


def kataify_lines(lines: Iterable[str], mode: KataMode = KataMode.NEXT_LINE) -> Iterator[str]:
    """
    Rewrite a sequence of lines into kata lines.

    Args:
        lines: Source lines, without line breaks
        mode: Which lines each kata line replaces

    Yields:
        Lines of the kata
    """
    mode = KataMode(mode)
    suppressing = False

    for line in lines:
        kata_line = parse_kata_line(line)
        if kata_line is not None:
            yield kata_line.render()
            suppressing = True
        elif suppressing:
            if mode == KataMode.NEXT_LINE:
                suppressing = False
        else:
            yield line


def kataify_file(content: str, mode: KataMode = KataMode.NEXT_LINE) -> str:
    """
    Kataify the whole content of a file.

    Content without kata lines is returned unchanged, and a trailing line
    break survives the round trip.

    Args:
        content: File content
        mode: Which lines each kata line replaces

    Returns:
        The kataified content
    """
    return "\n".join(kataify_lines(content.split("\n"), mode))
