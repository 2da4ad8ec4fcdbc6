"""Free text as submitted by clients, with markup removed."""
import html
from typing import Optional

import bleach


def strip_tags(text: Optional[str]) -> str:
    """Drop HTML tags and keep the text itself.

    ``bleach.clean`` escapes ``&``, ``<`` and ``>`` in what it keeps; the
    result is unescaped so that ``BP < 120`` is stored as typed.
    """
    return html.unescape(bleach.clean(text or '', tags=[], strip=True))
