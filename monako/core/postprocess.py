"""
Postprocessing of Markdown and Asciidoc pages before they reach Hugo.

Hugo publishes `page.md` as `page/index.html` when pretty URLs are on, so
every relative link or image in a page is resolved one directory too deep.
The functions here prepend one `../` to each relative reference while
leaving absolute URLs, anchors and code untouched.
"""

import re
from typing import Match

from ..models import ContentFormat


PARENT_SEGMENT = "../"

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

# Markdown
_FENCE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})")
_MARKDOWN_INLINE = re.compile(
    r"(?P<code>`+).+?(?P=code)"
    r"|(?<!\])\]\((?P<space>[ \t]*)(?P<open><?)(?P<target>[^)\s>]*)"
)
_MARKDOWN_REFERENCE = re.compile(
    r"^(?P<lead> {0,3}\[(?!\^)[^\]]+\]:[ \t]*)(?P<open><?)(?P<target>[^\s>]+)"
    r"(?=>?[ \t]*(?:\"[^\"]*\"|'[^']*'|\([^)]*\))?[ \t]*\r?$)"
)
_BLANK = re.compile(r"^\s*$")
_ATX_HEADING = re.compile(r"^ {0,3}#{1,6}(?:\s|$)")

# Asciidoc
_ASCIIDOC_DELIMITER = re.compile(r"^(?P<delimiter>-{4,}|\.{4,}|/{4,})\s*$")
_ASCIIDOC_COMMENT = re.compile(r"^//(?!/)")
_ASCIIDOC_IMAGE = re.compile(r"(?<![\w\\])(?P<macro>image::?)(?P<target>[^\s\[\]]+)\[")


def is_relative_reference(target: str) -> bool:
    """
    Check whether a link target is resolved relative to the page.

    Scheme URLs (http, https, mailto, data ...), root-absolute paths,
    in-page anchors and Asciidoc attribute references are not.
    """
    if not target:
        return False
    if target.startswith(("/", "#", "{")):
        return False
    return not _SCHEME.match(target)


def _rewrite_inline(match: Match) -> str:
    if match.group("code"):
        return match.group(0)

    target = match.group("target")
    if not is_relative_reference(target):
        return match.group(0)

    return f"]({match.group('space')}{match.group('open')}{PARENT_SEGMENT}{target}"


def _rewrite_reference(match: Match) -> str:
    target = match.group("target")
    if not is_relative_reference(target):
        return match.group(0)
    return f"{match.group('lead')}{match.group('open')}{PARENT_SEGMENT}{target}"


def markdown_postprocessing(text: str) -> str:
    """
    Add one directory level to relative links and images in Markdown.

    `![img](img/a.png)` becomes `![img](../img/a.png)`. Links whose label
    ends with `]` (`[[page]](...)`), fenced code blocks and inline code
    spans are left as they are.

    Reference definitions (`[logo]: img/logo.png`) are rewritten only where
    one can start: at the top, after a blank line, a heading, a closed
    fence or another definition. Elsewhere the line continues a paragraph.
    """
    lines = []
    fence = None
    # Whether the current line may open a reference definition
    block_start = True

    for line in text.splitlines(keepends=True):
        fence_match = _FENCE.match(line)

        if fence is not None:
            if fence_match and fence_match.group("fence")[0] == fence[0] \
                    and len(fence_match.group("fence")) >= len(fence):
                fence = None
                block_start = True
            lines.append(line)
            continue

        if fence_match:
            fence = fence_match.group("fence")
            lines.append(line)
            continue

        if block_start and _MARKDOWN_REFERENCE.match(line):
            line = _MARKDOWN_REFERENCE.sub(_rewrite_reference, line)
            block_start = True
        else:
            block_start = bool(_BLANK.match(line) or _ATX_HEADING.match(line))

        lines.append(_MARKDOWN_INLINE.sub(_rewrite_inline, line))

    return "".join(lines)


def _rewrite_image(match: Match) -> str:
    target = match.group("target")
    if not is_relative_reference(target):
        return match.group(0)
    return f"{match.group('macro')}{PARENT_SEGMENT}{target}["


def asciidoc_postprocessing(text: str) -> str:
    """
    Add one directory level to relative image macros in Asciidoc.

    Both block (`image::a.png[]`) and inline (`image:a.png[]`) macros are
    rewritten. Listing, literal and comment blocks are skipped.
    """
    lines = []
    delimiter = None

    for line in text.splitlines(keepends=True):
        delimiter_match = _ASCIIDOC_DELIMITER.match(line)

        if delimiter is not None:
            if delimiter_match and delimiter_match.group("delimiter") == delimiter:
                delimiter = None
            lines.append(line)
            continue

        if delimiter_match:
            delimiter = delimiter_match.group("delimiter")
            lines.append(line)
            continue

        if _ASCIIDOC_COMMENT.match(line):
            lines.append(line)
            continue

        lines.append(_ASCIIDOC_IMAGE.sub(_rewrite_image, line))

    return "".join(lines)


def postprocess(content: str, content_format: ContentFormat) -> str:
    """Apply the postprocessing matching the content format."""

    if content_format == ContentFormat.MARKDOWN:
        return markdown_postprocessing(content)
    if content_format == ContentFormat.ASCIIDOC:
        return asciidoc_postprocessing(content)
    return content


__all__ = [
    "PARENT_SEGMENT",
    "is_relative_reference",
    "markdown_postprocessing",
    "asciidoc_postprocessing",
    "postprocess",
]
