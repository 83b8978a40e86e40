"""Backend validation of completed statements."""

from sqlscope.errors import ValidationError

from .validator import Validator

__all__ = ["ValidationError", "Validator"]
