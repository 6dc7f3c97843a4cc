"""Receipt text extraction for the expense tracker."""
from .extraction import ExtractionResult, extract

__all__ = ["ExtractionResult", "extract"]
