"""
md2deck

Convert Markdown (with YAML frontmatter) or JSON documents into a typed
slide-deck model ready for a rendering backend.
"""

from .config import ConverterOptions
from .converter import MarkdownConverter, convert_document, load_presentation, markdown_to_presentation
from .errors import ConversionError, ValidationFailed
from .models import (
    ChartData,
    ChartDataset,
    ChartSlide,
    CustomSlide,
    ImageSlide,
    NotesSlide,
    Presentation,
    PresentationTheme,
    Slide,
    SlideElement,
    TableSlide,
    TextSlide,
    TitleSlide,
)

__all__ = [
    'ConverterOptions', 'MarkdownConverter', 'convert_document', 'load_presentation',
    'markdown_to_presentation', 'ConversionError', 'ValidationFailed', 'ChartData',
    'ChartDataset', 'ChartSlide', 'CustomSlide', 'ImageSlide', 'NotesSlide', 'Presentation',
    'PresentationTheme', 'Slide', 'SlideElement', 'TableSlide', 'TextSlide', 'TitleSlide',
]
