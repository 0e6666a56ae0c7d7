"""
Post-processors that run over a finished deck.
"""
import logging

from .models import Presentation, TextSlide, TitleSlide

logger = logging.getLogger(__name__)

TOC_TITLE = "Table of Contents"


def _is_divider(slide) -> bool:
    return isinstance(slide, TitleSlide) and slide.is_section_divider()


def insert_table_of_contents(presentation: Presentation) -> None:
    """
    Insert a contents slide listing every section divider.

    The slide goes right after the first opener (a title slide without a
    forced background), or at position 1 when the deck has none. Decks
    without sections are left untouched.
    """
    sections = [slide.title for slide in presentation.slides if _is_divider(slide) and slide.title]
    if not sections:
        return

    insert_at = 1
    for index, slide in enumerate(presentation.slides):
        if isinstance(slide, TitleSlide) and not slide.is_section_divider():
            insert_at = index + 1
            break
    insert_at = min(insert_at, len(presentation.slides))

    presentation.slides.insert(insert_at, TextSlide(title=TOC_TITLE, bullets=sections, level=[0] * len(sections)))
    logger.debug(f"Inserted table of contents with {len(sections)} sections at position {insert_at}")


def add_slide_numbers(presentation: Presentation) -> None:
    """Annotate every non-title slide with ``"<n> / <total>"``."""
    total = len(presentation.slides)
    for index, slide in enumerate(presentation.slides, 1):
        if slide.layout != "title":
            slide.slide_number = f"{index} / {total}"
