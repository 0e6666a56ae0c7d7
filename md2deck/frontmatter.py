"""
Split leading YAML frontmatter from a Markdown document.

The ``---`` block is located with markdown-it's front-matter plugin (the same
plugin the parser has always registered) and parsed with PyYAML.  Metadata is
advisory: anything that fails to parse yields an empty mapping.
"""
import logging
from typing import Dict, Tuple

import yaml
from markdown_it import MarkdownIt
from mdit_py_plugins.front_matter import front_matter_plugin

logger = logging.getLogger(__name__)

_frontmatter_md = MarkdownIt("commonmark").use(front_matter_plugin)


def extract_frontmatter(text: str) -> Tuple[Dict[str, str], str]:
    """
    Separate metadata from the document body.

    Args:
        text: Raw document text

    Returns:
        ``(metadata, body)``. Metadata values are strings; ``None`` values are
        dropped. Without a (closed) frontmatter block the body is *text*
        unchanged.
    """
    if not text or not text.startswith("---"):
        return {}, text or ""

    tokens = _frontmatter_md.parse(text)
    if not tokens or tokens[0].type != "front_matter":
        return {}, text

    # An unclosed block would otherwise swallow the whole document
    lines = text.splitlines(keepends=True)
    closing = next((n for n in range(1, len(lines)) if lines[n].rstrip() == "---"), None)
    if closing is None:
        return {}, text

    body = "".join(lines[closing + 1:])

    try:
        parsed = yaml.safe_load(tokens[0].content)
    except yaml.YAMLError as e:
        logger.warning(f"⚠️ Ignoring malformed frontmatter: {e}")
        return {}, body

    if not isinstance(parsed, dict):
        if parsed is not None:
            logger.warning("⚠️ Ignoring frontmatter that is not a mapping")
        return {}, body

    metadata = {str(key): str(value) for key, value in parsed.items() if value is not None}
    return metadata, body
