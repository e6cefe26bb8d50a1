"""
Markdown → Neorg transforms — stateless text processors.

The conversion runs three passes, strictly in order:
  1. Inline spans (images, links, wiki links, reference definitions,
     autolinks), rewritten across the whole text
  2. Line classification (headings, tasks, list items), one line at a time
  3. Fenced code blocks, rewritten over the output of pass 2

This is a pattern-based rewrite, not a Markdown parser. Anything the
patterns do not match is passed through untouched, and nothing here
raises on odd input.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


# ── Inline Spans ────────────────────────────────────────────────────

# Order matters: image forms are supersets of plain link forms and must
# be rewritten first, or ``![alt](src)`` would come out as ``!{src}[alt]``.
# Each rule sees the full output of the rule before it.


def _reference_definition(m: re.Match) -> str:
    ref_id, destination, title = m.group(1), m.group(2), m.group(3)
    if title is None:
        return f"@{ref_id} {destination}"
    return f"@{ref_id} {destination} {title}"


Replacement = str | Callable[[re.Match], str]

INLINE_RULES: tuple[tuple[str, re.Pattern, Replacement], ...] = (
    (
        "image_with_title",
        re.compile(r'!\[([^\]\n]*)\]\(([^)\s]+)[ \t]+"([^"\n]*)"\)'),
        r"{image:\2}[\1]",
    ),
    (
        "image",
        re.compile(r"!\[([^\]\n]*)\]\(([^)\n]+)\)"),
        r"{image:\2}[\1]",
    ),
    (
        "image_reference",
        re.compile(r"!\[([^\]\n]*)\]\[([^\]\n]*)\]"),
        r"{image:\2}[\1]",
    ),
    (
        "link",
        re.compile(r"\[([^\]\n]*)\]\(([^)\n]+)\)"),
        r"{\2}[\1]",
    ),
    (
        "link_reference",
        re.compile(r"\[([^\]\n]*)\]\[([^\]\n]*)\]"),
        r"{\2}[\1]",
    ),
    (
        "wiki_link",
        re.compile(r"\[\[([^\]\n]+)\]\]"),
        r"{:\1.norg:}",
    ),
    (
        "reference_definition",
        re.compile(r'^\[([^\]\n]+)\]:[ \t]*(\S+)(?:[ \t]+"([^"\n]*)")?[ \t]*\r?$', re.MULTILINE),
        _reference_definition,
    ),
    (
        "autolink",
        re.compile(r"<(https?://[^>\s]+)>"),
        r"{\1}[\1]",
    ),
)


def rewrite_inline(content: str) -> str:
    """Rewrite link- and image-like spans to Neorg link syntax.

    ![alt](img.png "Title")  →  {image:img.png}[alt]
    [text](https://x.com)    →  {https://x.com}[text]
    [text][ref]              →  {ref}[text]
    [[My Page]]              →  {:My Page.norg:}
    [ref]: https://x.com "T" →  @ref https://x.com T
    <https://x.com>          →  {https://x.com}[https://x.com]
    """
    for name, pattern, replacement in INLINE_RULES:
        content, hits = pattern.subn(replacement, content)
        if hits:
            logger.debug("inline rule %s: %d replacement(s)", name, hits)
    return content


# ── Line Classification ─────────────────────────────────────────────


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class UncheckedTask:
    indent: str
    text: str


@dataclass(frozen=True)
class CheckedTask:
    indent: str
    text: str


@dataclass(frozen=True)
class ListItem:
    indent: str
    text: str


@dataclass(frozen=True)
class Plain:
    text: str


LineKind = Heading | UncheckedTask | CheckedTask | ListItem | Plain

_HEADING_RE = re.compile(r"(#+)\s+(.*)")
_UNCHECKED_TASK_RE = re.compile(r"(\s*)- \[ \] (.*)")
_CHECKED_TASK_RE = re.compile(r"(\s*)- \[x\] (.*)")
# Task syntax is a subset of this one, so it is tried last.
_LIST_ITEM_RE = re.compile(r"(\s*)[-*+]\s+(.*)")


def classify_line(line: str) -> LineKind:
    """Classify a single line (no terminator). First match wins."""
    m = _HEADING_RE.fullmatch(line)
    if m:
        return Heading(level=len(m.group(1)), text=m.group(2))

    m = _UNCHECKED_TASK_RE.fullmatch(line)
    if m:
        return UncheckedTask(indent=m.group(1), text=m.group(2))

    m = _CHECKED_TASK_RE.fullmatch(line)
    if m:
        return CheckedTask(indent=m.group(1), text=m.group(2))

    m = _LIST_ITEM_RE.fullmatch(line)
    if m:
        return ListItem(indent=m.group(1), text=m.group(2))

    return Plain(text=line)


def render_line(kind: LineKind) -> str:
    """Render a classified line as Neorg, without the terminator."""
    if isinstance(kind, Heading):
        return f"{'*' * kind.level} {kind.text}"
    if isinstance(kind, UncheckedTask):
        return f"{kind.indent}-- ( ) {kind.text}"
    if isinstance(kind, CheckedTask):
        return f"{kind.indent}-- (x) {kind.text}"
    if isinstance(kind, ListItem):
        return f"{kind.indent}-- {kind.text}"
    return kind.text


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` and ``\\r\\n``.

    A terminator at the very end does not open another line, so
    ``"a\\n"`` and ``"a"`` both give ``["a"]`` and ``""`` gives ``[]``.
    A lone ``\\r`` is not a terminator: ``"a\\r"`` gives ``["a\\r"]``.
    """
    lines = content.split("\n")
    last = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if last:
        lines.append(last)
    return lines


def rewrite_lines(content: str) -> str:
    """Rewrite headings, tasks and list items line by line.

    # Title         →  * Title
      - [ ] todo    →    -- ( ) todo
    - [x] done      →  -- (x) done
    + item          →  -- item

    Every output line ends with ``\\n``, including the last one.
    """
    return "".join(f"{render_line(classify_line(line))}\n" for line in split_lines(content))


# ── Code Blocks ─────────────────────────────────────────────────────

_CODE_BLOCK_RE = re.compile(r"```(\w*)\n([\s\S]*?)```")

# Unicode White_Space. str.rstrip() would also take the \x1c-\x1f
# separators, which are not whitespace here.
_TRAILING_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def rewrite_code_blocks(content: str) -> str:
    """Convert fenced code blocks to Neorg ranged tags.

    ```python
    print("hi")

    ```

    becomes:

    @code python
    print("hi")
    @end

    Trailing whitespace in the payload is stripped. A fence with no
    language still gets the space after ``@code``.
    """
    def _replace(m: re.Match) -> str:
        language = m.group(1)
        code = m.group(2).rstrip(_TRAILING_WHITESPACE)
        return f"@code {language}\n{code}\n@end"

    content, hits = _CODE_BLOCK_RE.subn(_replace, content)
    if hits:
        logger.debug("code blocks: %d replacement(s)", hits)
    return content


# ── Full Conversion ─────────────────────────────────────────────────


def transform(content: str) -> str:
    """Convert a Markdown document to Neorg."""
    content = rewrite_inline(content)
    content = rewrite_lines(content)
    return rewrite_code_blocks(content)
