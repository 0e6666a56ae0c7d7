"""
Directive processing.

Directives are instructions embedded in the document rather than content:

    <!-- slide: type="custom" title="Layout" elements='[...]' -->
    <!-- notes: remember to mention the Q3 numbers -->
    <!-- chart: type="line" title="Revenue" -->

The same three kinds may be written as fenced paragraphs
(``:::notes remember this``, optionally closed by a ``:::`` line).

Directive errors never abort a conversion; they are logged and skipped.
"""
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List

from .assembler import claim_pending, flush
from .context import ParsingContext
from .models import CHART_TYPES, ChartSlide, CustomSlide, SlideElement

logger = logging.getLogger(__name__)

DIRECTIVE_KINDS = ("slide", "notes", "chart")

_COMMENT_RE = re.compile(r'<!--\s*(slide|notes|chart)\s*:\s*(.*?)\s*-->', re.DOTALL | re.IGNORECASE)
_FENCED_RE = re.compile(r':::\s*(slide|notes|chart)\b\s*:?', re.IGNORECASE)

# key="value", key='value' or key=value; no whitespace around "="
_ATTR_RE = re.compile(r'''([\w-]+)=(?:"([^"]*)"|'([^']*)'|([^\s"'=]+))''')


@dataclass
class Directive:
    kind: str
    body: str = ""
    params: Dict[str, str] = field(default_factory=dict)


def parse_attributes(text: str) -> Dict[str, str]:
    """
    Scan ``key="value"`` pairs out of *text*.

    Single quotes and bare values are accepted too. Duplicate keys: the last
    one wins. ``key=""`` yields an empty string; a key with nothing after the
    ``=`` and words without ``=`` are ignored. Unknown keys are kept for the
    caller to ignore.
    """
    params: Dict[str, str] = {}
    for match in _ATTR_RE.finditer(text or ""):
        key, double, single, bare = match.groups()
        if double is not None:
            params[key] = double
        elif single is not None:
            params[key] = single
        else:
            params[key] = bare
    return params


def _make_directive(kind: str, body: str) -> Directive:
    kind = kind.lower()
    body = body.strip()
    params = parse_attributes(body) if kind in ("slide", "chart") else {}
    return Directive(kind=kind, body=body, params=params)


def find_directives(text: str) -> List[Directive]:
    """All directives in *text*, in order of appearance."""
    if not text:
        return []

    found = [_make_directive(m.group(1), m.group(2)) for m in _COMMENT_RE.finditer(text)]
    if found:
        return found

    stripped = text.strip()
    fenced = _FENCED_RE.match(stripped)
    if not fenced:
        return []

    body = stripped[fenced.end():].rstrip()
    if body.endswith(":::"):
        body = body[:-3]
    return [_make_directive(fenced.group(1), body)]


def is_directive(text: str) -> bool:
    """True if *text* holds a comment directive or starts with a fenced one."""
    if not text:
        return False
    return bool(_COMMENT_RE.search(text) or _FENCED_RE.match(text.strip()))


def _apply_slide(directive: Directive, ctx: ParsingContext) -> None:
    params = directive.params
    slide_type = params.get("type", "").lower()
    if slide_type != "custom":
        logger.debug(f"Ignoring slide directive with type '{slide_type}'")
        return

    elements: List[SlideElement] = []
    raw_elements = params.get("elements")
    if raw_elements:
        try:
            payload = json.loads(raw_elements)
        except ValueError as e:
            logger.warning(f"⚠️ Failed to parse custom slide elements: {e}")
            return
        if isinstance(payload, dict):
            payload = [payload]
        if not isinstance(payload, list) or not all(isinstance(el, dict) for el in payload):
            logger.warning("⚠️ Custom slide elements must be a JSON array of objects")
            return
        elements = [SlideElement.from_dict(el) for el in payload]

    flush(ctx)
    ctx.push(CustomSlide(
        title=params.get("title") or "Custom Slide",
        elements=elements,
        background_color=params.get("background") or None,
    ))


def _attach_notes(directive: Directive, ctx: ParsingContext) -> None:
    text = directive.body
    if not text:
        logger.warning("⚠️ Empty notes directive ignored")
        return

    # Notes belong to the slide in progress, else the one just emitted
    target = ctx.current_slide or ctx.last_slide()
    if target is None:
        logger.warning(f"⚠️ Notes directive before any slide ignored: {text[:40]}")
        return
    target.add_notes(text)


def _seed_chart(directive: Directive, ctx: ParsingContext) -> None:
    params = directive.params
    chart_type = params.get("type") or "bar"
    if chart_type not in CHART_TYPES:
        logger.warning(f"⚠️ Unknown chart type '{chart_type}' in chart directive")

    pending = claim_pending(ctx)
    ctx.current_slide = ChartSlide(
        chart_type=chart_type,
        title=params.get("title") or (pending.title if pending else None),
        notes=pending.notes if pending else None,
    )


_APPLIERS = {
    "slide": _apply_slide,
    "notes": _attach_notes,
    "chart": _seed_chart,
}


def apply_directive(directive: Directive, ctx: ParsingContext) -> None:
    """Mutate *ctx* according to a single directive."""
    applier = _APPLIERS.get(directive.kind)
    if applier is None:
        logger.warning(f"⚠️ Unknown directive '{directive.kind}'")
        return
    applier(directive, ctx)


def process_directives(text: str, ctx: ParsingContext) -> bool:
    """
    Apply every directive found in *text*.

    Returns:
        True if at least one directive was found (the block is consumed)
    """
    directives = find_directives(text)
    for directive in directives:
        try:
            apply_directive(directive, ctx)
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(f"⚠️ Failed to apply {directive.kind} directive: {e}")
    return bool(directives)
