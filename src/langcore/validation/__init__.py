"""Translation dictionary validation.

Python 3.11+.
"""

from .translations import validate_translations

__all__ = ["validate_translations"]
