"""
Markdown to slide-deck conversion.

``MarkdownConverter.convert`` runs the whole pipeline for one document:

1. split off the YAML frontmatter,
2. tokenize the body into document nodes,
3. dispatch every node to its block handler, in document order,
4. flush whatever is still pending,
5. run the optional post-processors.

Each call builds its own :class:`ParsingContext`, so a converter instance
can be shared between threads.
"""
import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .assembler import flush
from .config import ConverterOptions
from .context import ParsingContext
from .errors import ConversionError
from .frontmatter import extract_frontmatter
from .handlers import dispatch
from .models import Presentation
from .postprocess import add_slide_numbers, insert_table_of_contents
from .theme_loader import resolve_theme
from .tokenizer import DocumentTokenizer

logger = logging.getLogger(__name__)


class MarkdownConverter:
    """
    Convert Markdown documents into :class:`Presentation` models.
    """

    def __init__(self, options: Optional[ConverterOptions] = None, **overrides: Any):
        """
        Create a converter.

        Args:
            options: Conversion options; defaults are used when omitted.
            **overrides: Individual option fields, applied on top of *options*
                (e.g. ``MarkdownConverter(slides_per_page=4)``).
        """
        base = options or ConverterOptions()
        self.options = dataclasses.replace(base, **overrides) if overrides else base
        self.tokenizer = DocumentTokenizer()

    def convert(self, markdown_text: str) -> Presentation:
        """
        Convert markdown text to a presentation model.

        Args:
            markdown_text: Markdown, optionally preceded by YAML frontmatter

        Returns:
            The finished :class:`Presentation`

        Raises:
            ConversionError: If the document cannot be tokenized
        """
        if not isinstance(markdown_text, str):
            raise ConversionError(f"Document must be text, got {type(markdown_text).__name__}")

        metadata, body = extract_frontmatter(markdown_text)
        ctx = ParsingContext(metadata=metadata, debug=self.options.debug)

        for node in self.tokenizer.tokenize(body):
            dispatch(node, ctx, self.options)
        flush(ctx)

        presentation = Presentation(
            title=metadata.get("title") or "Presentation",
            author=metadata.get("author"),
            company=metadata.get("company"),
            subject=metadata.get("subject"),
            theme=resolve_theme(metadata.get("theme") or self.options.theme),
            slides=ctx.slides,
        )

        if self.options.include_table_of_contents:
            insert_table_of_contents(presentation)

        if self.options.slide_numbers:
            add_slide_numbers(presentation)

        if self.options.debug:
            logger.info(f"Converted '{presentation.title}': {len(presentation.slides)} slides")

        return presentation

    def convert_file(self, path: Union[str, Path]) -> Presentation:
        """Read a UTF-8 markdown file and convert it."""
        md_path = Path(path)
        if not md_path.exists():
            raise FileNotFoundError(f"Markdown file '{md_path}' not found")
        return self.convert(md_path.read_text(encoding="utf-8"))


def markdown_to_presentation(markdown_text: str, options: Optional[ConverterOptions] = None) -> Presentation:
    """
    Convenience function to convert markdown text in one call.

    Args:
        markdown_text: Raw markdown content
        options: Conversion options

    Returns:
        Presentation model
    """
    return MarkdownConverter(options).convert(markdown_text)


def load_presentation(source: Union[str, Path, Dict[str, Any]]) -> Presentation:
    """
    Load a presentation that is already written as JSON.

    Args:
        source: A parsed dict, JSON text, or the path of a ``.json`` file

    Raises:
        ConversionError: On invalid JSON or a document without slides
    """
    if isinstance(source, dict):
        data = source
    else:
        if isinstance(source, Path) or not str(source).lstrip().startswith(("{", "[")):
            text = Path(source).read_text(encoding="utf-8")
        else:
            text = str(source)
        try:
            data = json.loads(text)
        except ValueError as e:
            raise ConversionError(f"Invalid JSON presentation document: {e}") from e

    if not isinstance(data, dict):
        raise ConversionError("Presentation document must be a JSON object")
    return Presentation.from_dict(data)


def convert_document(text: str, options: Optional[ConverterOptions] = None) -> Presentation:
    """
    Convert either kind of input document.

    Text that parses as a JSON object with a ``slides`` key is loaded as a
    ready-made presentation; everything else goes through the markdown
    converter.
    """
    if isinstance(text, str) and text.lstrip().startswith("{"):
        try:
            data = json.loads(text)
        except ValueError:
            data = None
        if isinstance(data, dict) and "slides" in data:
            return load_presentation(data)
    return markdown_to_presentation(text, options)
