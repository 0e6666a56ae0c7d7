"""
Conversion options.
"""
from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_BULLETS_PER_SLIDE = 6


@dataclass
class ConverterOptions:
    """
    Knobs for a :class:`~md2deck.converter.MarkdownConverter`.

    Attributes:
        slides_per_page: Bullet count at which a text slide is closed when
            ``auto_split`` is on.
        auto_split: Close text slides automatically once they are full.
        theme: Preset name, theme dict or ``PresentationTheme``; a ``theme``
            key in the frontmatter takes precedence.
        include_table_of_contents: Insert a contents slide listing the
            section dividers.
        slide_numbers: Annotate non-title slides with ``"n / total"``.
        max_chars_per_slide: Optional cap on the accumulated bullet text of
            one slide; ``None`` disables it.
        debug: Log every emitted and discarded slide.
    """
    slides_per_page: int = DEFAULT_BULLETS_PER_SLIDE
    auto_split: bool = True
    theme: Any = "professional"
    include_table_of_contents: bool = False
    slide_numbers: bool = False
    max_chars_per_slide: Optional[int] = None
    debug: bool = False

    def __post_init__(self):
        if self.slides_per_page < 1:
            raise ValueError(f"slides_per_page must be at least 1, got {self.slides_per_page}")
        if self.max_chars_per_slide is not None and self.max_chars_per_slide < 1:
            raise ValueError(f"max_chars_per_slide must be positive, got {self.max_chars_per_slide}")
