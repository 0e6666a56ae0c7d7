"""
Block handlers: one per document node kind.

Each handler receives the node, the parsing context and the options, and
either extends the slide in progress, flushes and starts a new one, or emits
a standalone slide. :func:`dispatch` picks the handler from ``node.kind``.
"""
import logging
from typing import Callable, Dict, Optional

from .assembler import DEFAULT_TEXT_TITLE, claim_pending, flush
from .classifiers import (
    CHART_LANGUAGES,
    chart_data_from_table,
    is_chart_data,
    is_chart_table,
    parse_chart_data,
)
from .config import ConverterOptions
from .context import ParsingContext
from .directives import is_directive, process_directives
from .models import (
    ChartData,
    ChartSlide,
    ImageSlide,
    NotesSlide,
    Slide,
    TableSlide,
    TableStyling,
    TextSlide,
    TitleSlide,
)
from .tokenizer import (
    BLOCKQUOTE,
    CODE,
    HEADING,
    HR,
    HTML,
    IMAGE,
    LIST_ITEM,
    PARAGRAPH,
    TABLE,
    DocumentNode,
)

logger = logging.getLogger(__name__)

SECTION_BACKGROUND = "#2C3E50"
TABLE_HEADER_BACKGROUND = "#2C3E50"
TABLE_HEADER_TEXT_COLOR = "#FFFFFF"


def _default_table_styling() -> TableStyling:
    return TableStyling(
        header_background=TABLE_HEADER_BACKGROUND,
        header_text_color=TABLE_HEADER_TEXT_COLOR,
        alternate_rows=True,
    )


# ---------------------------------------------------------------------------
# Bullet accumulation
# ---------------------------------------------------------------------------

def _ensure_text_slide(ctx: ParsingContext) -> None:
    if isinstance(ctx.current_slide, TextSlide):
        return
    if ctx.current_slide is not None:
        # a chart skeleton still waiting for data loses its chance here
        flush(ctx)
    ctx.current_slide = TextSlide(title=DEFAULT_TEXT_TITLE)


def _append_bullet(ctx: ParsingContext, text: str, level: int, options: ConverterOptions) -> None:
    """Add one bullet and close the slide once it is full."""
    _ensure_text_slide(ctx)
    ctx.add_bullet(text, level)

    if options.auto_split and len(ctx.current_bullets) >= options.slides_per_page:
        flush(ctx)
    elif options.max_chars_per_slide and ctx.pending_chars() >= options.max_chars_per_slide:
        flush(ctx)


def _chart_slide(data: ChartData, pending: Optional[Slide], default_title: str,
                 chart_type: Optional[str] = None, title: Optional[str] = None) -> ChartSlide:
    """Build a chart slide, inheriting title/notes/type from a claimed skeleton."""
    seeded_type = pending.chart_type if isinstance(pending, ChartSlide) else None
    return ChartSlide(
        title=title or (pending.title if pending and pending.title else default_title),
        chart_type=chart_type or seeded_type or "bar",
        data=data,
        notes=pending.notes if pending else None,
    )


def _emit_chart_from_text(text: str, ctx: ParsingContext) -> None:
    parsed = parse_chart_data(text)
    if parsed is None:
        return

    pending = claim_pending(ctx)
    ctx.push(_chart_slide(parsed.data, pending, "Chart", chart_type=parsed.chart_type, title=parsed.title))


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def handle_heading(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    """
    H1 opens the deck, H2 is a section divider, H3 starts a content slide
    (or becomes an emphasized bullet when content is already flowing).
    Deeper headings carry no structure and are treated as paragraphs.
    """
    if node.level == 1:
        flush(ctx)
        if node.text:
            ctx.push(TitleSlide(
                title=node.text,
                subtitle=ctx.metadata.get("subtitle"),
                author=ctx.metadata.get("author"),
                date=ctx.metadata.get("date"),
            ))
        ctx.section_depth = 0

    elif node.level == 2:
        flush(ctx)
        if node.text:
            ctx.push(TitleSlide(title=node.text, background_color=SECTION_BACKGROUND))
        ctx.section_depth = 2

    elif node.level == 3:
        if ctx.has_pending_bullets():
            _append_bullet(ctx, f"**{node.text}**", 0, options)
        else:
            flush(ctx)
            ctx.current_slide = TextSlide(title=node.text or DEFAULT_TEXT_TITLE)

    else:
        handle_paragraph(node, ctx, options)


def _handle_text(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions, level: int) -> None:
    # directives and chart data take precedence over plain bullets
    if is_directive(node.raw):
        process_directives(node.raw, ctx)
    elif is_chart_data(node.raw):
        _emit_chart_from_text(node.raw, ctx)
    elif node.text:
        _append_bullet(ctx, node.text, level, options)


def handle_paragraph(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    _handle_text(node, ctx, options, 0)


def handle_list_item(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    _handle_text(node, ctx, options, node.level)


def handle_table(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    """Tables always end the current slide and become a table or chart slide."""
    headers, rows = node.headers, node.rows
    pending = claim_pending(ctx)

    if is_chart_table(headers, rows):
        ctx.push(_chart_slide(chart_data_from_table(headers, rows), pending, "Data Chart"))
        return

    if isinstance(pending, ChartSlide):
        logger.info("Table after chart directive is not numeric enough; keeping it as a table")

    ctx.push(TableSlide(
        title=pending.title if pending and pending.title else "Data Table",
        headers=headers or None,
        table_data=rows,
        styling=_default_table_styling(),
        notes=pending.notes if pending else None,
    ))


def handle_image(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    flush(ctx)

    src = (node.src or "").strip()
    if not src:
        logger.warning(f"⚠️ Image without a target ignored (line {node.line})")
        return

    is_remote = src.startswith(("http://", "https://"))
    ctx.push(ImageSlide(
        title=node.title or node.alt or "Image",
        image_url=src if is_remote else None,
        image_path=None if is_remote else src,
        image_alt=node.alt or None,
        caption=node.alt or None,
        sizing="contain",
    ))


def handle_code(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    language = (node.language or "").lower()

    if language in CHART_LANGUAGES or is_chart_data(node.text):
        _emit_chart_from_text(node.text, ctx)
        return

    flush(ctx)
    ctx.push(NotesSlide(title=f"Code: {node.language or 'snippet'}", content=node.text))


def handle_blockquote(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    flush(ctx)
    if node.text:
        ctx.push(NotesSlide(title="Note", content=node.text))


def handle_hr(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    """Horizontal rules only mark a slide boundary."""
    flush(ctx)


def handle_html(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    if is_directive(node.raw):
        process_directives(node.raw, ctx)
    elif ctx.debug:
        logger.debug(f"Ignoring raw HTML block at line {node.line}")


HANDLERS: Dict[str, Callable[[DocumentNode, ParsingContext, ConverterOptions], None]] = {
    HEADING: handle_heading,
    PARAGRAPH: handle_paragraph,
    LIST_ITEM: handle_list_item,
    TABLE: handle_table,
    IMAGE: handle_image,
    CODE: handle_code,
    BLOCKQUOTE: handle_blockquote,
    HR: handle_hr,
    HTML: handle_html,
}


def dispatch(node: DocumentNode, ctx: ParsingContext, options: ConverterOptions) -> None:
    """Route *node* to the handler for its kind."""
    handler = HANDLERS.get(node.kind)
    if handler is None:
        logger.debug(f"No handler for node kind '{node.kind}'")
        return
    handler(node, ctx, options)
