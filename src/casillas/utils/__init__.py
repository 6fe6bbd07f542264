"""Utility modules for casillas.

- logger: get_logger for namespaced logging
- text: slugify for heading ids
"""

from casillas.utils.logger import get_logger
from casillas.utils.text import slugify

__all__ = ["get_logger", "slugify"]
