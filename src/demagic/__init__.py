"""demagic: turn magic numbers into named constants."""

from demagic.engine import ExtractionResult, extract_magic_numbers

__version__ = "0.1.0"

__all__ = ["ExtractionResult", "__version__", "extract_magic_numbers"]
