from typing import List, Optional

from app.config import settings
from app.models.schema import Segment, SegmentKind
from app.packs.loader import SeparatorProfile, load_pack
from app.utils.text import has_digit


def consolidate_plus_signs(parts: List[str]) -> List[str]:
    """
    Merge a lone '+' into the following part, so an international number is
    never split from its prefix. Whitespace-only parts are dropped.
    """
    consolidated: List[str] = []
    i = 0
    while i < len(parts):
        part = parts[i]
        if part.strip() == "+" and i + 1 < len(parts):
            consolidated.append("+" + parts[i + 1].strip())
            i += 2
            continue
        consolidated.append(part)
        i += 1
    return [p for p in consolidated if p and p.strip()]


class SegmenterService:
    """Splits a multi-value phone field into number and separator segments."""

    def __init__(self, profile: Optional[str] = None):
        self.profile: SeparatorProfile = load_pack(profile or settings.default_separator_profile)

    @staticmethod
    def profile_for(suggested: Optional[str]) -> str:
        """Separator profile matching the country of the suggested value."""
        for prefix, profile in settings.profile_prefixes.items():
            if suggested and suggested.startswith(prefix):
                return profile
        return settings.default_separator_profile

    def split(self, text: str) -> List[str]:
        """Raw parts, separators included, with runs like '//' merged into one."""
        parts = self.profile.split_regex.split(text or "")
        parts = [p for p in parts if p and p.strip()]
        return self._merge_consecutive_separators(parts)

    def _merge_consecutive_separators(self, parts: List[str]) -> List[str]:
        merged: List[str] = []
        i = 0
        while i < len(parts):
            current = parts[i]
            if self.profile.is_separator(current):
                j = i + 1
                while j < len(parts) and self.profile.is_separator(parts[j]):
                    current += parts[j]
                    j += 1
                i = j
            else:
                i += 1
            merged.append(current)
        return merged

    def segment(self, text: str) -> List[Segment]:
        parts = consolidate_plus_signs(self.split(text))
        return [
            Segment(
                text=p,
                kind=SegmentKind.NUMBER if has_digit(p) else SegmentKind.SEPARATOR,
            )
            for p in parts
        ]
