"""
Interfaces of the collaborators that consume the slide-deck model.

The converter only produces a :class:`~md2deck.models.Presentation`; turning
it into a file is the job of a renderer (fresh deck) or a template processor
(placeholders of an existing deck). A validator may sit in between and
certify the structural invariants the converter does not check itself
(chart dataset lengths, table row lengths, colour formats).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol

from .errors import ValidationFailed
from .models import Presentation

logger = logging.getLogger(__name__)


@dataclass
class ValidationIssue:
    field: str
    message: str
    value: Any = None


@dataclass
class ValidationResult:
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)


class Renderer(Protocol):
    def render(self, presentation: Presentation) -> bytes:
        """Serialize *presentation* into presentation-file bytes."""
        ...


class TemplateProcessor(Protocol):
    def apply_template(self, presentation: Presentation, template_bytes: bytes) -> bytes:
        """Map slides onto the placeholders of an existing file."""
        ...


class Validator(Protocol):
    def validate(self, presentation: Presentation) -> ValidationResult:
        ...


def generate_output(
    presentation: Presentation,
    *,
    renderer: Optional[Renderer] = None,
    template_processor: Optional[TemplateProcessor] = None,
    template_bytes: Optional[bytes] = None,
    validator: Optional[Validator] = None,
) -> bytes:
    """
    Hand a finished presentation to the output collaborators.

    The validator (if any) runs first. With *template_bytes* the template
    processor is used, otherwise the renderer.

    Raises:
        ValidationFailed: If the validator rejects the presentation
        ValueError: If no suitable collaborator was supplied
    """
    if validator is not None:
        result = validator.validate(presentation)
        if not result.valid:
            raise ValidationFailed(result.errors)

    if template_bytes is not None:
        if template_processor is None:
            raise ValueError("template_bytes given but no template_processor")
        logger.info(f"Applying template to '{presentation.title}' ({len(presentation.slides)} slides)")
        return template_processor.apply_template(presentation, template_bytes)

    if renderer is None:
        raise ValueError("No renderer supplied")
    logger.info(f"Rendering '{presentation.title}' ({len(presentation.slides)} slides)")
    return renderer.render(presentation)
