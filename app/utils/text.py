# app/utils/text.py
import re
from typing import Optional

from app.config import settings

NON_DIGIT_RE = re.compile(r"[^0-9]")
DIGIT_RE = re.compile(r"[0-9]")

# tab, soft hyphen, atypical spaces (thin, hair, narrow no-break, ...),
# zero-width characters, directional marks, bidi embeddings/isolates, BOM
INVISIBLE_CHARS_RE = re.compile(
    "[\t\u00ad\u2000-\u200f\u202a-\u202f\u205f-\u2064\u2066-\u2069\ufeff]"
)


def normalize(text: Optional[str]) -> str:
    """Digits only, in their original order."""
    if not text:
        return ""
    return NON_DIGIT_RE.sub("", text)


def has_digit(text: Optional[str]) -> bool:
    return bool(text) and DIGIT_RE.search(text) is not None


def is_digit(char: str) -> bool:
    return len(char) == 1 and "0" <= char <= "9"


def replace_invisible_chars(text: Optional[str]) -> str:
    """
    Replace characters that take no visible space (zero-width joiners, bidi
    marks, odd space variants, tabs) with a placeholder glyph, one for one,
    so a reviewer can see that something was there before it got cleaned.
    """
    if not text:
        return ""
    return INVISIBLE_CHARS_RE.sub(settings.invisible_placeholder, text)
