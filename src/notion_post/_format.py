"""Deterministic Markdown normaliser applied to every assembled post.

The normaliser only touches whitespace, so it never changes what the
document renders to:

* line endings become ``\\n`` and trailing whitespace is removed;
* runs of blank lines collapse to one;
* ATX headings get a blank line before and after;
* the document ends with exactly one newline.

Fenced code blocks and a leading frontmatter section are copied verbatim.
Running it on its own output returns the same string.
"""

from __future__ import annotations

import re

_FENCE = re.compile(r"^[ \t>]*(`{3,}|~{3,})")
_HEADING = re.compile(r"^#{1,6}(?:[ \t]|$)")
_FRONTMATTER_DELIMITER = "---"


def normalize_markdown(text: str) -> str:
    """Return *text* with whitespace normalised.

    Parameters
    ----------
    text:
        A Markdown document, optionally starting with a ``---`` delimited
        frontmatter section.

    Returns
    -------
    str
        The normalised document, ending in a single newline (or empty).
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    header, body = _split_frontmatter(lines)

    out: list[str] = []
    fence = ""
    blank_after = False

    for raw in body:
        if fence:
            line = raw.rstrip() if _closes(raw, fence) else raw
            out.append(line)
            if _closes(raw, fence):
                fence = ""
            continue

        line = raw.rstrip()
        if not line:
            if out and out[-1]:
                out.append("")
            continue

        is_heading = bool(_HEADING.match(line))
        if out and out[-1] and (is_heading or blank_after):
            out.append("")
        out.append(line)
        blank_after = is_heading

        match = _FENCE.match(line)
        if match:
            fence = match.group(1)

    while out and not out[-1]:
        out.pop()

    if header:
        return "\n".join([*header, "", *out] if out else header) + "\n"
    return "\n".join(out) + "\n" if out else ""


def _split_frontmatter(lines: list[str]) -> tuple[list[str], list[str]]:
    """Split off a leading ``---`` delimited block, delimiters included."""
    if not lines or lines[0].rstrip() != _FRONTMATTER_DELIMITER:
        return [], lines
    for i in range(1, len(lines)):
        if lines[i].rstrip() == _FRONTMATTER_DELIMITER:
            header = [_FRONTMATTER_DELIMITER, *lines[1:i], _FRONTMATTER_DELIMITER]
            return header, lines[i + 1 :]
    return [], lines


def _closes(line: str, fence: str) -> bool:
    """True when *line* closes a block opened with *fence*."""
    match = _FENCE.match(line)
    if match is None:
        return False
    marker = match.group(1)
    rest = line[match.end() :].strip()
    return marker[0] == fence[0] and len(marker) >= len(fence) and not rest
