"""
Exception types raised by the conversion engine.
"""
from typing import List, Optional


class ConversionError(ValueError):
    """Raised when a document cannot be tokenized or loaded at all."""


class ValidationFailed(ValueError):
    """
    Raised by :func:`md2deck.backends.generate_output` when the validator
    rejects a presentation.
    """

    def __init__(self, issues: Optional[List] = None):
        self.issues = list(issues or [])
        lines = [f"{issue.field}: {issue.message}" for issue in self.issues]
        super().__init__("Validation failed:\n" + "\n".join(lines))
