"""Text helpers.

Example:
    >>> from casillas.utils.text import slugify
    >>> slugify("Project Alpha!")
    'project-alpha'
"""

from __future__ import annotations

import html as html_module
import re


def slugify(text: str, separator: str = "-") -> str:
    """Convert heading text to a URL-safe slug.

    Keeps Unicode word characters so non-English headings still get
    readable ids.

    Examples:
        >>> slugify("Groceries & Errands")
        'groceries-errands'
        >>> slugify("Café")
        'café'
    """
    if not text:
        return ""

    text = html_module.unescape(text).lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[-\s]+", separator, text)
    return text.strip(separator)
