"""
Slide assembler: turns the in-flight context into finished slides.

Empty slides are never emitted. Every path that creates
``ctx.current_slide`` relies on :func:`flush` to enforce that.
"""
import logging
from typing import Optional

from .context import ParsingContext
from .models import ChartSlide, Slide, TextSlide

logger = logging.getLogger(__name__)

DEFAULT_TEXT_TITLE = "Content"


def flush(ctx: ParsingContext) -> None:
    """
    Finalize whatever is being accumulated.

    * Pending bullets become a text slide (title and notes come from the
      skeleton, if any).
    * A skeleton that already carries content is pushed as-is.
    * Anything else is discarded.
    """
    skeleton = ctx.current_slide

    if ctx.current_bullets:
        slide = TextSlide(
            title=(skeleton.title if skeleton and skeleton.title else DEFAULT_TEXT_TITLE),
            bullets=list(ctx.current_bullets),
            level=list(ctx.current_level),
            notes=skeleton.notes if skeleton else None,
            background_color=skeleton.background_color if skeleton else None,
        )
        ctx.push(slide)
    elif skeleton is not None:
        if not skeleton.is_empty():
            ctx.push(skeleton)
        elif isinstance(skeleton, ChartSlide):
            logger.warning(f"⚠️ Chart directive ({skeleton.chart_type}) was not followed by chart data; dropping it")
        elif ctx.debug:
            logger.debug(f"Discarding empty {skeleton.layout} slide '{skeleton.title}'")

    ctx.current_bullets = []
    ctx.current_level = []
    ctx.current_slide = None


def claim_pending(ctx: ParsingContext) -> Optional[Slide]:
    """
    Hand the in-flight skeleton over to a standalone slide.

    When no bullets are pending the skeleton is detached and returned so the
    caller can reuse its title, notes or chart type. Otherwise the pending
    content is flushed normally and None is returned.
    """
    if ctx.current_slide is not None and not ctx.current_bullets:
        skeleton = ctx.current_slide
        ctx.current_slide = None
        return skeleton

    flush(ctx)
    return None
