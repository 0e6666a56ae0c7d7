"""Theme presets for generated presentations."""
import logging
from typing import Any, Dict, List, Optional, Union

from .models import PresentationTheme

logger = logging.getLogger(__name__)

DEFAULT_THEME = "professional"

THEMES: Dict[str, Dict[str, str]] = {
    "professional": {
        "primary_color": "#2C3E50",
        "secondary_color": "#34495E",
        "font_family": "Arial",
    },
    "dark": {
        "primary_color": "#1A1A1A",
        "secondary_color": "#2C2C2C",
        "font_family": "Helvetica",
    },
    "light": {
        "primary_color": "#FFFFFF",
        "secondary_color": "#F5F5F5",
        "font_family": "Calibri",
    },
    "academic": {
        "primary_color": "#003366",
        "secondary_color": "#005599",
        "font_family": "Times New Roman",
    },
}


def get_theme(theme: str = DEFAULT_THEME) -> PresentationTheme:
    """
    Load the preset for the specified theme.

    Args:
        theme: Theme name (professional, dark, light, academic)

    Returns:
        A fresh :class:`PresentationTheme`

    Raises:
        ValueError: If the theme name is malformed
        KeyError: If no preset exists under that name
    """
    name = theme.strip().lower()
    if not name.replace("_", "").replace("-", "").isalnum():
        raise ValueError(f"Invalid theme name: {theme}")

    if name not in THEMES:
        raise KeyError(f"Theme '{theme}' not found. Available themes: {list_available_themes()}")

    return PresentationTheme(**THEMES[name])


def resolve_theme(theme: Union[str, Dict[str, Any], PresentationTheme, None]) -> Optional[PresentationTheme]:
    """
    Turn whatever the caller or the frontmatter supplied into a theme.

    Unknown or malformed names fall back to the default preset; theme
    settings are advisory and never abort a conversion.
    """
    if theme is None or theme == "":
        return None
    if isinstance(theme, PresentationTheme):
        return theme
    if isinstance(theme, dict):
        return PresentationTheme.from_dict(theme)

    try:
        return get_theme(str(theme))
    except (KeyError, ValueError) as e:
        logger.warning(f"⚠️ {e}; using '{DEFAULT_THEME}' theme")
        return get_theme(DEFAULT_THEME)


def list_available_themes() -> List[str]:
    """
    List all available themes.

    Returns:
        List of theme names
    """
    return list(THEMES)


def validate_theme(theme: str) -> bool:
    """
    Check if a theme exists.

    Args:
        theme: Theme name to validate

    Returns:
        True if theme exists, False otherwise
    """
    try:
        get_theme(theme)
        return True
    except (KeyError, ValueError):
        return False
