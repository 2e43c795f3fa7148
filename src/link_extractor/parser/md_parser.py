"""Markdown file parser for extracting hyperlinks."""

import html
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import frontmatter
import yaml

from ..models import Link

logger = logging.getLogger(__name__)

# Characters that may be backslash-escaped in Markdown
_PUNCTUATION = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# Block-level patterns
_FENCE_OPEN = re.compile(r'^ {0,3}(`{3,}|~{3,})(.*)$')
_INDENTED = re.compile(r'^(?: {4}|\t)')
_BLOCKQUOTE = re.compile(r'^ {0,3}(?:> ?)+')
_LIST_ITEM = re.compile(r'^ {0,3}(?:[-+*]|\d{1,9}[.)])(?:[ \t]|$)')
_REFERENCE_DEF = re.compile(
    r'^ {0,3}\[((?:[^\[\]\\]|\\.){1,999})\]:'
    r'[ \t]*(?:<((?:[^<>\n\\]|\\.)*)>|(\S+))'
    r'(?:[ \t]+(?:"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'|\((?:[^()\\]|\\.)*\)))?'
    r'[ \t]*$'
)

# Inline patterns
_BACKTICKS = re.compile(r'`+')
_INLINE_TAG = re.compile(
    r'<(?:'
    r'[A-Za-z][A-Za-z0-9+.-]{1,31}:[^<>\s]*'               # autolink
    r'|[A-Za-z0-9.!#$%&\'*+/=?^_`{|}~-]+@[A-Za-z0-9.-]+'    # email autolink
    r'|/?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>]*)?/?'             # html tag
    r'|!--.*?--'                                           # html comment
    r')>',
    re.DOTALL,
)
_ANGLE_DESTINATION = re.compile(r'<((?:[^<>\n\\]|\\.)*)>')
_TITLE = re.compile(
    r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'|\((?:[^()\\]|\\.)*\)',
    re.DOTALL,
)
_LABEL = re.compile(r'\[((?:[^\[\]\\]|\\.){0,999})\]')
_ESCAPED = re.compile(r'\\([!-/:-@\[-`{-~])')


@dataclass
class _Bracket:
    """An opening ``[`` or ``![`` waiting for its ``]``."""

    start: int
    image: bool
    active: bool = True


def _unescape(value: str) -> str:
    """Decode backslash escapes and HTML entities."""
    return html.unescape(_ESCAPED.sub(r'\1', value))


def _normalize_label(label: str) -> str:
    """Reference labels match case-insensitively, ignoring inner whitespace."""
    return ' '.join(label.split()).casefold()


def _skip_whitespace(text: str, pos: int) -> int:
    """Skip spaces and tabs plus at most one line ending."""
    seen_newline = False
    while pos < len(text) and text[pos] in ' \t\n':
        if text[pos] == '\n':
            if seen_newline:
                break
            seen_newline = True
        pos += 1
    return pos


def _code_span(text: str, pos: int) -> Optional[tuple[str, int]]:
    """Return (content, end) of the code span opening at ``pos``, if closed."""
    opening = _BACKTICKS.match(text, pos)
    closing = re.compile(r'(?<!`)' + opening.group(0) + r'(?!`)').search(text, opening.end())
    if closing is None:
        return None

    content = text[opening.end():closing.start()].replace('\n', ' ')
    if len(content) >= 2 and content[0] == ' ' and content[-1] == ' ' and content.strip():
        content = content[1:-1]
    return content, closing.end()


def _skip_code(text: str, pos: int) -> int:
    """Position after the code span (or bare backtick run) at ``pos``."""
    span = _code_span(text, pos)
    if span is not None:
        return span[1]
    return _BACKTICKS.match(text, pos).end()


def _raw_destination(text: str, pos: int) -> tuple[str, int]:
    """Parse a bare link destination; parentheses must balance."""
    start = pos
    depth = 0
    while pos < len(text):
        ch = text[pos]
        if ch == '\\' and pos + 1 < len(text) and text[pos + 1] in _PUNCTUATION:
            pos += 2
            continue
        if ch.isspace() or ord(ch) < 0x20 or ch == '\x7f':
            break
        if ch == '(':
            depth += 1
        elif ch == ')':
            if depth == 0:
                break
            depth -= 1
        pos += 1

    if depth:
        return '', start
    return text[start:pos], pos


def _inline_destination(text: str, pos: int) -> Optional[tuple[str, int]]:
    """Parse ``destination "title")`` starting just after the ``(``."""
    pos = _skip_whitespace(text, pos)
    if pos < len(text) and text[pos] == ')':
        return '', pos + 1

    if pos < len(text) and text[pos] == '<':
        match = _ANGLE_DESTINATION.match(text, pos)
        if match is None:
            return None
        destination, pos = match.group(1), match.end()
    else:
        destination, pos = _raw_destination(text, pos)
        if not destination:
            return None

    after = _skip_whitespace(text, pos)
    if after > pos and after < len(text) and text[after] in '"\'(':
        title = _TITLE.match(text, after)
        if title is None:
            return None
        after = _skip_whitespace(text, title.end())

    if after < len(text) and text[after] == ')':
        return _unescape(destination), after + 1
    return None


def _link_tail(
    text: str,
    pos: int,
    label_text: str,
    references: dict[str, str],
) -> Optional[tuple[str, int]]:
    """
    Match what follows a closing ``]``.

    Tries an inline destination, then a full or collapsed reference, then a
    shortcut reference.

    Returns:
        (destination, end) or None if the brackets are not a link
    """
    if pos < len(text) and text[pos] == '(':
        inline = _inline_destination(text, pos + 1)
        if inline is not None:
            return inline

    if pos < len(text) and text[pos] == '[':
        label = _LABEL.match(text, pos)
        if label is not None:
            key = _normalize_label(label.group(1) or label_text)
            if key in references:
                return references[key], label.end()
            return None

    key = _normalize_label(label_text)
    if key and key in references:
        return references[key], pos
    return None


def _closing_bracket(text: str, pos: int) -> Optional[int]:
    """Index of the ``]`` matching the ``[`` at ``pos``."""
    depth = 0
    while pos < len(text):
        ch = text[pos]
        if ch == '\\':
            pos += 2
            continue
        if ch == '`':
            pos = _skip_code(text, pos)
            continue
        if ch == '[':
            depth += 1
        elif ch == ']':
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return None


def _is_emphasis(text: str, start: int, end: int) -> bool:
    """Whether the ``*``/``_`` run at text[start:end] acts as a delimiter."""
    before = text[start - 1] if start > 0 else ' '
    after = text[end] if end < len(text) else ' '
    if before.isspace() and after.isspace():
        return False
    # snake_case words keep their underscores
    if text[start] == '_' and before.isalnum() and after.isalnum():
        return False
    return True


def _link_text(raw: str, references: dict[str, str]) -> str:
    """
    Extract the visible text of a link span.

    Text between formatting markers, line breaks and inline HTML is trimmed
    and the pieces are concatenated.
    """
    segments: list[str] = []
    buffer: list[str] = []

    def flush() -> None:
        piece = html.unescape(''.join(buffer)).strip()
        if piece:
            segments.append(piece)
        buffer.clear()

    pos = 0
    while pos < len(raw):
        ch = raw[pos]

        if ch == '\\' and pos + 1 < len(raw) and raw[pos + 1] in _PUNCTUATION:
            buffer.append(raw[pos + 1])
            pos += 2
        elif ch == '\n':
            flush()
            pos += 1
        elif ch == '`':
            span = _code_span(raw, pos)
            if span is None:
                end = _BACKTICKS.match(raw, pos).end()
                buffer.append(raw[pos:end])
                pos = end
            else:
                # Code spans are not text
                flush()
                pos = span[1]
        elif ch == '<':
            tag = _INLINE_TAG.match(raw, pos)
            if tag is None:
                buffer.append(ch)
                pos += 1
            else:
                flush()
                pos = tag.end()
        elif ch in '*_':
            end = pos
            while end < len(raw) and raw[end] == ch:
                end += 1
            if _is_emphasis(raw, pos, end):
                flush()
            else:
                buffer.append(raw[pos:end])
            pos = end
        elif ch == '!' and raw.startswith('[', pos + 1):
            # Nested image: keep its alt text, drop its destination
            close = _closing_bracket(raw, pos + 1)
            tail = None
            if close is not None:
                tail = _link_tail(raw, close + 1, raw[pos + 2:close], references)
            if tail is None:
                buffer.append(ch)
                pos += 1
            else:
                flush()
                alt = _link_text(raw[pos + 2:close], references)
                if alt:
                    segments.append(alt)
                pos = tail[1]
        else:
            buffer.append(ch)
            pos += 1

    flush()
    return ''.join(segments)


def _scan_inline(block: str, references: dict[str, str]) -> list[tuple[str, str]]:
    """
    Find the links in one block of inline Markdown.

    Returns:
        (destination, raw link text) pairs in document order
    """
    found: list[tuple[str, str]] = []
    brackets: list[_Bracket] = []

    pos = 0
    while pos < len(block):
        ch = block[pos]

        if ch == '\\' and pos + 1 < len(block) and block[pos + 1] in _PUNCTUATION:
            pos += 2
        elif ch == '`':
            pos = _skip_code(block, pos)
        elif ch == '<':
            tag = _INLINE_TAG.match(block, pos)
            pos = tag.end() if tag else pos + 1
        elif ch == '!' and block.startswith('[', pos + 1):
            brackets.append(_Bracket(start=pos + 2, image=True))
            pos += 2
        elif ch == '[':
            brackets.append(_Bracket(start=pos + 1, image=False))
            pos += 1
        elif ch == ']' and brackets:
            bracket = brackets.pop()
            tail = None
            if bracket.active:
                tail = _link_tail(block, pos + 1, block[bracket.start:pos], references)
            if tail is None:
                pos += 1
                continue

            if not bracket.image:
                found.append((tail[0], block[bracket.start:pos]))
                # Links may not contain other links
                for outer in brackets:
                    if not outer.image:
                        outer.active = False
            pos = tail[1]
        else:
            pos += 1

    return found


def _closes_fence(line: str, fence: str) -> bool:
    stripped = line.strip()
    indent = len(line) - len(line.lstrip(' '))
    return (
        indent <= 3
        and len(stripped) >= len(fence)
        and set(stripped) == {fence[0]}
    )


def _split_blocks(text: str) -> tuple[list[str], dict[str, str]]:
    """
    Split a document into blocks of inline text and collect reference definitions.

    Code blocks are dropped and blockquote markers stripped.

    Returns:
        (blocks, references) with references keyed by normalized label
    """
    blocks: list[str] = []
    current: list[str] = []
    references: dict[str, str] = {}
    fence: Optional[str] = None
    previous_blank = True
    in_list = False

    def flush() -> None:
        if current:
            blocks.append('\n'.join(current))
            current.clear()

    for line in text.splitlines():
        if fence is not None:
            if _closes_fence(line, fence):
                fence = None
            continue

        opening = _FENCE_OPEN.match(line)
        if opening and not (opening.group(1)[0] == '`' and '`' in opening.group(2)):
            flush()
            fence = opening.group(1)
            previous_blank = True
            continue

        if not line.strip():
            flush()
            previous_blank = True
            continue

        # Indented code block (list continuations are not code)
        if previous_blank and not in_list and _INDENTED.match(line):
            continue

        content = _BLOCKQUOTE.sub('', line)

        definition = _REFERENCE_DEF.match(content)
        if definition and not current and definition.group(1).strip():
            destination = definition.group(2)
            if destination is None:
                destination = definition.group(3)
            references.setdefault(_normalize_label(definition.group(1)), _unescape(destination))
            previous_blank = False
            continue

        if _LIST_ITEM.match(content):
            in_list = True
        elif previous_blank and not _INDENTED.match(line):
            in_list = False

        current.append(content)
        previous_blank = False

    flush()
    return blocks, references


def _strip_front_matter(text: str, source_file: Path) -> str:
    """Remove a leading YAML front matter block, if present and well-formed."""
    if not frontmatter.checks(text):
        return text

    try:
        _, content = frontmatter.parse(text)
    except (yaml.YAMLError, ValueError) as e:
        logger.debug("Scanning front matter of %s as Markdown: %s", source_file, e)
        return text
    return content


def scan_markdown(text: str, source_file: Path, skip_front_matter: bool = True) -> list[Link]:
    """
    Extract every hyperlink from a Markdown document.

    Inline links, full/collapsed/shortcut reference links are recognized.
    Images, autolinks and anything inside code are ignored. Malformed
    constructs are skipped; this never raises on bad Markdown.

    Args:
        text: Full text of the document
        source_file: Path recorded on every Link for provenance
        skip_front_matter: Ignore a leading YAML front matter block

    Returns:
        Links in document order, destinations as written
    """
    if skip_front_matter:
        text = _strip_front_matter(text, source_file)

    blocks, references = _split_blocks(text)

    links = []
    for block in blocks:
        for destination, raw_text in _scan_inline(block, references):
            if not destination:
                continue
            links.append(Link(
                url=destination,
                source_file=source_file,
                link_text=_link_text(raw_text, references),
            ))

    return links


def parse_md_file(path: Path, skip_front_matter: bool = True) -> list[Link]:
    """
    Parse a single Markdown file and extract all of its links.

    Args:
        path: Path to the Markdown file
        skip_front_matter: Ignore a leading YAML front matter block

    Returns:
        List of Link objects found in the file
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    return scan_markdown(content, path, skip_front_matter=skip_front_matter)


def find_markdown_files(path: Path, pattern: str = "*.md", recursive: bool = True) -> list[Path]:
    """
    Find Markdown files under a directory.

    Args:
        path: Directory path to scan
        pattern: Glob pattern for files (default: *.md)
        recursive: Whether to scan subdirectories

    Returns:
        Sorted list of matching file paths
    """
    path = Path(path)
    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {path}")

    if recursive:
        files = path.rglob(pattern)
    else:
        files = path.glob(pattern)

    return sorted(f for f in files if f.is_file())
