import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import md2deck` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from md2deck.context import ParsingContext  # noqa: E402
from md2deck.config import ConverterOptions  # noqa: E402


@pytest.fixture
def ctx():
    return ParsingContext()


@pytest.fixture
def options():
    return ConverterOptions()
