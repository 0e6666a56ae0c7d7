"""
Data models for the slide-deck model.

Slides are plain dataclasses discriminated by ``layout``.  ``to_dict()``
produces the wire format handed to renderers (camelCase keys, unset fields
omitted) and ``from_dict()`` reads that format back.
"""
import json
import logging
import re
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional

from .errors import ConversionError

logger = logging.getLogger(__name__)

SLIDE_LAYOUTS = ['title', 'text', 'image', 'chart', 'table', 'notes', 'custom']
CHART_TYPES = ['bar', 'line', 'pie', 'area', 'scatter', 'doughnut', 'radar']
ELEMENT_TYPES = ['text', 'image', 'shape', 'chart', 'table']


def _camel(name: str) -> str:
    """``image_path`` → ``imagePath``"""
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def _snake(name: str) -> str:
    """``imagePath`` → ``image_path``"""
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


def _to_wire(value: Any) -> Any:
    if is_dataclass(value):
        return {
            _camel(f.name): _to_wire(getattr(value, f.name))
            for f in fields(value)
            if getattr(value, f.name) is not None
        }
    if isinstance(value, list):
        return [_to_wire(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_wire(item) for key, item in value.items()}
    return value


def _known_kwargs(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Map wire keys onto the init fields of *cls*, dropping anything unknown."""
    if not isinstance(data, dict):
        raise ConversionError(f"{cls.__name__} must be an object, got {type(data).__name__}")
    names = {f.name for f in fields(cls) if f.init}
    kwargs = {}
    for key, value in data.items():
        name = _snake(key)
        if name in names:
            kwargs[name] = value
        elif key != 'layout':
            logger.debug(f"Ignoring unknown field '{key}' on {cls.__name__}")
    return kwargs


class _WireMixin:
    """Shared ``to_dict`` / ``from_dict`` for the small value types."""

    def to_dict(self) -> Dict[str, Any]:
        return _to_wire(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        return cls(**_known_kwargs(cls, data))


@dataclass
class ChartDataset(_WireMixin):
    label: str = ""
    data: List[float] = field(default_factory=list)
    background_color: Optional[Any] = None
    border_color: Optional[Any] = None
    border_width: Optional[float] = None


@dataclass
class ChartData(_WireMixin):
    """Normalized ``{labels, datasets}`` structure shared by every chart source."""
    labels: List[str] = field(default_factory=list)
    datasets: List[ChartDataset] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChartData":
        if not isinstance(data, dict):
            raise ConversionError(f"Chart data must be an object, got {type(data).__name__}")
        labels = data.get('labels') or []
        datasets = data.get('datasets') or []
        if not isinstance(labels, list) or not isinstance(datasets, list):
            raise ConversionError("Chart data needs 'labels' and 'datasets' lists")
        return cls(
            labels=[str(label) for label in labels],
            datasets=[ds if isinstance(ds, ChartDataset) else ChartDataset.from_dict(ds) for ds in datasets],
        )


@dataclass
class ChartOptions(_WireMixin):
    show_legend: Optional[bool] = None
    show_title: Optional[bool] = None
    show_data_labels: Optional[bool] = None
    legend_position: Optional[str] = None
    colors: Optional[List[str]] = None


@dataclass
class TableStyling(_WireMixin):
    header_background: Optional[str] = None
    header_text_color: Optional[str] = None
    border_color: Optional[str] = None
    border_width: Optional[float] = None
    alternate_rows: Optional[bool] = None
    font_size: Optional[float] = None


@dataclass
class SlideElement(_WireMixin):
    """A positioned element on a custom slide (percent or pixel units)."""
    type: str = "text"
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    content: Any = None
    styling: Optional[Dict[str, Any]] = None


@dataclass
class PresentationTheme(_WireMixin):
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    background_color: Optional[str] = None
    accent_color: Optional[str] = None


@dataclass
class Slide:
    """
    Base slide. Subclasses pin ``layout`` and add their variant fields.
    """
    layout: str = field(default="", init=False)
    title: Optional[str] = None
    notes: Optional[str] = None
    background_color: Optional[str] = None
    transition: Optional[str] = None
    slide_number: Optional[str] = None

    # field name -> loader used by from_dict for nested values
    _nested: ClassVar[Dict[str, Callable]] = {}

    def is_empty(self) -> bool:
        """True when the slide carries nothing worth rendering."""
        return False

    def add_notes(self, text: str) -> None:
        self.notes = f"{self.notes}\n{text}" if self.notes else text

    def to_dict(self) -> Dict[str, Any]:
        return _to_wire(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Slide":
        kwargs = _known_kwargs(cls, data)
        for name, loader in cls._nested.items():
            if kwargs.get(name) is not None:
                kwargs[name] = loader(kwargs[name])
        return cls(**kwargs)


@dataclass
class TitleSlide(Slide):
    layout: str = field(default="title", init=False)
    subtitle: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None

    def is_section_divider(self) -> bool:
        return bool(self.background_color)


@dataclass
class TextSlide(Slide):
    layout: str = field(default="text", init=False)
    bullets: List[str] = field(default_factory=list)
    level: Optional[List[int]] = None

    def is_empty(self) -> bool:
        return not self.bullets


@dataclass
class ImageSlide(Slide):
    layout: str = field(default="image", init=False)
    image_path: Optional[str] = None
    image_url: Optional[str] = None
    image_alt: Optional[str] = None
    caption: Optional[str] = None
    sizing: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.image_path or self.image_url)


@dataclass
class ChartSlide(Slide):
    layout: str = field(default="chart", init=False)
    chart_type: str = "bar"
    data: Optional[ChartData] = None
    options: Optional[ChartOptions] = None

    _nested: ClassVar[Dict[str, Callable]] = {
        'data': ChartData.from_dict,
        'options': ChartOptions.from_dict,
    }

    def is_empty(self) -> bool:
        # A chart directive seeds a skeleton without data
        return self.data is None


@dataclass
class TableSlide(Slide):
    layout: str = field(default="table", init=False)
    headers: Optional[List[str]] = None
    table_data: List[List[str]] = field(default_factory=list)
    styling: Optional[TableStyling] = None

    _nested: ClassVar[Dict[str, Callable]] = {
        'styling': TableStyling.from_dict,
    }


@dataclass
class NotesSlide(Slide):
    layout: str = field(default="notes", init=False)
    content: str = ""


def _load_elements(raw: List[Any]) -> List[SlideElement]:
    if not isinstance(raw, list):
        raise ConversionError(f"Custom slide elements must be a list, got {type(raw).__name__}")
    return [el if isinstance(el, SlideElement) else SlideElement.from_dict(el) for el in raw]


@dataclass
class CustomSlide(Slide):
    layout: str = field(default="custom", init=False)
    elements: List[SlideElement] = field(default_factory=list)

    _nested: ClassVar[Dict[str, Callable]] = {
        'elements': _load_elements,
    }


SLIDE_TYPES = {
    'title': TitleSlide,
    'text': TextSlide,
    'image': ImageSlide,
    'chart': ChartSlide,
    'table': TableSlide,
    'notes': NotesSlide,
    'custom': CustomSlide,
}


def slide_from_dict(data: Dict[str, Any]) -> Slide:
    """Build the right :class:`Slide` subclass from a wire-format dict."""
    if not isinstance(data, dict):
        raise ConversionError(f"Slide must be an object, got {type(data).__name__}")
    layout = data.get('layout')
    slide_cls = SLIDE_TYPES.get(layout)
    if slide_cls is None:
        raise ConversionError(f"Unknown slide layout: {layout!r}. Expected one of {SLIDE_LAYOUTS}")
    try:
        return slide_cls.from_dict(data)
    except (AttributeError, TypeError) as e:
        raise ConversionError(f"Malformed {layout} slide: {e}") from e


@dataclass
class Presentation:
    """
    The finished slide-deck model handed to a renderer or template processor.
    """
    title: str = "Presentation"
    author: Optional[str] = None
    company: Optional[str] = None
    subject: Optional[str] = None
    theme: Optional[PresentationTheme] = None
    slides: List[Slide] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _to_wire(self)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Presentation":
        slides = data.get('slides')
        if not isinstance(slides, list):
            raise ConversionError("Presentation document must contain a 'slides' list")

        theme = data.get('theme')
        return cls(
            title=data.get('title') or "Presentation",
            author=data.get('author'),
            company=data.get('company'),
            subject=data.get('subject'),
            theme=PresentationTheme.from_dict(theme) if isinstance(theme, dict) else None,
            slides=[slide_from_dict(slide) for slide in slides],
        )
