"""
Document tokenizer built on markdown-it-py.

markdown-it produces a flat stream of open/close tokens. This module folds
that stream into one :class:`DocumentNode` per block-level element, in
document order, so the converter can dispatch on ``node.kind`` alone.
"""
import logging
import re
from dataclasses import dataclass, field
from html import unescape
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt
from markdown_it.token import Token

from .errors import ConversionError

logger = logging.getLogger(__name__)

HEADING = "heading"
PARAGRAPH = "paragraph"
LIST_ITEM = "list_item"
TABLE = "table"
IMAGE = "image"
CODE = "code"
BLOCKQUOTE = "blockquote"
HR = "hr"
HTML = "html"

NODE_KINDS = (HEADING, PARAGRAPH, LIST_ITEM, TABLE, IMAGE, CODE, BLOCKQUOTE, HR, HTML)

_HTML_COMMENT_RE = re.compile(r'<!--.*?-->', re.DOTALL)
_WHITESPACE_RE = re.compile(r'\s+')


@dataclass
class DocumentNode:
    """
    One block-level element of the document.

    ``text`` is the cleaned, human-readable content; ``raw`` is the source
    markdown, which directive and chart-data detection look at.
    """
    kind: str
    text: str = ""
    raw: str = ""
    level: int = 0  # heading level, or list indent level
    language: Optional[str] = None
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    src: Optional[str] = None
    alt: str = ""
    title: Optional[str] = None
    line: Optional[int] = None


def clean_text(html: str) -> str:
    """Strip HTML tags and comments, decode entities and collapse whitespace."""
    html = _HTML_COMMENT_RE.sub(" ", html or "")
    if "<" in html:
        text = BeautifulSoup(html, "html.parser").get_text()
    else:
        text = unescape(html)
    return _WHITESPACE_RE.sub(" ", text).strip()


def _line_of(token: Token) -> Optional[int]:
    return token.map[0] + 1 if token.map else None


def _source_of(children: List[Token]) -> str:
    """Approximate markdown source of inline tokens (link targets are not kept)."""
    parts = []
    for child in children:
        if child.type in ("softbreak", "hardbreak"):
            parts.append("\n")
        elif child.type in ("text", "text_special", "html_inline"):
            parts.append(child.content)
        elif child.type == "code_inline":
            parts.append(f"{child.markup}{child.content}{child.markup}")
        elif child.nesting and child.type not in ("link_open", "link_close"):
            parts.append(child.markup)
    return "".join(parts)


def _find_close(tokens: List[Token], start: int, close_type: str) -> int:
    """Index of the close token matching ``tokens[start]``."""
    level = tokens[start].level
    for j in range(start + 1, len(tokens)):
        if tokens[j].type == close_type and tokens[j].level == level:
            return j
    return len(tokens) - 1


class DocumentTokenizer:
    """
    Turn a Markdown body into an ordered list of :class:`DocumentNode`.
    """

    def __init__(self):
        self.markdown_processor = MarkdownIt('commonmark', {'html': True})
        self.markdown_processor.enable(['table', 'strikethrough'])

    def _render_inline(self, children: List[Token]) -> str:
        return self.markdown_processor.renderer.renderInline(children, self.markdown_processor.options, {})

    def _text_segment(self, children: List[Token], raw: str, line: Optional[int]) -> DocumentNode:
        return DocumentNode(kind=PARAGRAPH, text=clean_text(self._render_inline(children)), raw=raw, line=line)

    def _segments(self, inline: Token) -> List[DocumentNode]:
        """
        Split an inline token at its images.

        Returns text (``PARAGRAPH``) and ``IMAGE`` nodes in document order.
        Text segments may be empty; callers drop those.
        """
        children = inline.children or []
        line = _line_of(inline)
        if not any(child.type == "image" for child in children):
            return [self._text_segment(children, inline.content, line)]

        segments: List[DocumentNode] = []
        run: List[Token] = []
        for child in children:
            if child.type != "image":
                run.append(child)
                continue
            segments.append(self._text_segment(run, _source_of(run), line))
            run = []
            segments.append(DocumentNode(
                kind=IMAGE,
                src=child.attrGet("src") or "",
                alt=child.content or "",
                title=child.attrGet("title") or None,
                raw=inline.content,
                line=line,
            ))
        segments.append(self._text_segment(run, _source_of(run), line))
        return segments

    def tokenize(self, body: str) -> List[DocumentNode]:
        """
        Tokenize *body* into document nodes.

        Raises:
            ConversionError: If the document cannot be tokenized at all
        """
        if not isinstance(body, str):
            raise ConversionError(f"Document must be text, got {type(body).__name__}")

        try:
            tokens = self.markdown_processor.parse(body)
        except Exception as e:
            raise ConversionError(f"Failed to tokenize document: {e}") from e

        lines = body.splitlines()
        nodes: List[DocumentNode] = []
        # one entry per open list item: [indent level, node or None until text arrives]
        open_items: List[list] = []

        i = 0
        while i < len(tokens):
            token = tokens[i]
            kind = token.type

            if kind == "heading_open":
                inline = tokens[i + 1]
                nodes.append(DocumentNode(
                    kind=HEADING,
                    level=int(token.tag[1:]),
                    text=clean_text(self._render_inline(inline.children or [])),
                    raw=inline.content,
                    line=_line_of(token),
                ))
                i = _find_close(tokens, i, "heading_close") + 1
                continue

            if kind == "list_item_open":
                open_items.append([self._indent_level(token, lines), None])

            elif kind == "list_item_close":
                if open_items:
                    open_items.pop()

            elif kind == "paragraph_open":
                item = open_items[-1] if open_items else None
                for segment in self._segments(tokens[i + 1]):
                    if segment.kind == IMAGE:
                        nodes.append(segment)
                    elif not (segment.text or segment.raw.strip()):
                        continue
                    elif item is None:
                        nodes.append(segment)
                    elif item[1] is None:
                        item[1] = DocumentNode(kind=LIST_ITEM, text=segment.text, raw=segment.raw,
                                               level=item[0], line=_line_of(token))
                        nodes.append(item[1])
                    else:
                        # later paragraphs of a loose item extend the same bullet
                        item[1].text = f"{item[1].text} {segment.text}".strip()
                        item[1].raw = f"{item[1].raw}\n{segment.raw}"

                i = _find_close(tokens, i, "paragraph_close") + 1
                continue

            elif kind == "blockquote_open":
                close = _find_close(tokens, i, "blockquote_close")
                parts = []
                for inner in tokens[i + 1:close]:
                    if inner.type == "inline":
                        parts.append(clean_text(self._render_inline(inner.children or [])))
                    elif inner.type in ("fence", "code_block"):
                        parts.append(inner.content.strip())
                text = " ".join(part for part in parts if part)
                nodes.append(DocumentNode(kind=BLOCKQUOTE, text=text, raw=text, line=_line_of(token)))
                i = close + 1
                continue

            elif kind in ("fence", "code_block"):
                info = (token.info or "").strip()
                code = token.content[:-1] if token.content.endswith("\n") else token.content
                nodes.append(DocumentNode(
                    kind=CODE,
                    language=info.split()[0] if info else None,
                    text=code,
                    raw=code,
                    line=_line_of(token),
                ))

            elif kind == "table_open":
                close = _find_close(tokens, i, "table_close")
                headers, rows = self._collect_table(tokens[i + 1:close])
                nodes.append(DocumentNode(kind=TABLE, headers=headers, rows=rows, line=_line_of(token)))
                i = close + 1
                continue

            elif kind == "hr":
                nodes.append(DocumentNode(kind=HR, raw=token.markup, line=_line_of(token)))

            elif kind == "html_block":
                nodes.append(DocumentNode(kind=HTML, raw=token.content, line=_line_of(token)))

            i += 1

        return nodes

    @staticmethod
    def _indent_level(token: Token, lines: List[str]) -> int:
        """Indent level of a list item: leading spaces of its source line // 2."""
        if not token.map or token.map[0] >= len(lines):
            return 0
        line = lines[token.map[0]].expandtabs(4)
        return (len(line) - len(line.lstrip(" "))) // 2

    def _collect_table(self, tokens: List[Token]) -> Tuple[List[str], List[List[str]]]:
        headers: List[str] = []
        rows: List[List[str]] = []
        row: Optional[List[str]] = None
        in_head = False

        for token in tokens:
            if token.type == "thead_open":
                in_head = True
            elif token.type == "thead_close":
                in_head = False
            elif token.type == "tr_open":
                row = []
            elif token.type == "tr_close" and row is not None:
                if in_head:
                    headers = row
                elif row:
                    rows.append(row)
                row = None
            elif token.type == "inline" and row is not None:
                row.append(clean_text(self._render_inline(token.children or [])))

        return headers, rows


_default_tokenizer = DocumentTokenizer()


def tokenize(body: str) -> List[DocumentNode]:
    """Convenience wrapper around a shared :class:`DocumentTokenizer`."""
    return _default_tokenizer.tokenize(body)
