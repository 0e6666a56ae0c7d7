"""
Mutable accumulator for a single conversion call.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import Slide

logger = logging.getLogger(__name__)


@dataclass
class ParsingContext:
    """
    The in-flight state every block handler reads and writes.

    One instance per conversion; it is passed explicitly to each handler and
    dropped once the document has been drained.

    ``current_bullets`` and ``current_level`` are parallel lists and always
    have the same length.
    """
    slides: List[Slide] = field(default_factory=list)
    current_slide: Optional[Slide] = None
    current_bullets: List[str] = field(default_factory=list)
    current_level: List[int] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)
    section_depth: int = 0
    slide_count: int = 0
    debug: bool = False

    def push(self, slide: Slide) -> None:
        """Append a finished slide to the output."""
        self.slides.append(slide)
        self.slide_count += 1
        if self.debug:
            logger.debug(f"Slide {self.slide_count}: {slide.layout} '{slide.title}'")

    def add_bullet(self, text: str, level: int = 0) -> None:
        self.current_bullets.append(text)
        self.current_level.append(level)

    def has_pending_bullets(self) -> bool:
        return bool(self.current_bullets)

    def pending_chars(self) -> int:
        return sum(len(bullet) for bullet in self.current_bullets)

    def last_slide(self) -> Optional[Slide]:
        return self.slides[-1] if self.slides else None
