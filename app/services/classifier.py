# app/services/classifier.py
"""
Character classification for a single pair of phone numbers.

A plain character diff marks digits as removed and re-added whenever the
formatting around them moves (0123 456 -> 012 34 56 would show the 3 as
deleted and inserted). Instead, the digits common to both numbers are found
first, and each side is then walked on its own, keeping loosely in step with
the other side, so only formatting and genuinely new/dropped digits are flagged.
"""
from typing import List, Optional, Tuple

from app.models.schema import DiffRun
from app.utils.diff import common_digits
from app.utils.text import is_digit, normalize

UNCHANGED = {"added": False, "removed": False}


class _Cursor:
    """
    Walk state for one pass: a pointer into the common digits and a
    read position in the other string. Both only ever move forward.
    """

    def __init__(self, common: List[str], other: str):
        self.common = common
        self.common_pos = 0
        self.other = other
        self.other_pos = 0

    def next_common(self) -> Optional[str]:
        if self.common_pos < len(self.common):
            return self.common[self.common_pos]
        return None

    def take_common(self):
        self.common_pos += 1

    def take_common_zero(self):
        # a trunk '0' dropped in favour of a prefix may also be a common digit
        if self.next_common() == "0":
            self.common_pos += 1

    def peek(self, offset: int = 0) -> str:
        pos = self.other_pos + offset
        return self.other[pos] if pos < len(self.other) else ""

    def advance(self, n: int = 1):
        self.other_pos = min(self.other_pos + n, len(self.other))

    def ahead(self, char: str) -> bool:
        """Whether `char` occurs at or after the read position."""
        return self.other.find(char, self.other_pos) >= 0

    def sync_to(self, char: str):
        """Skip other-side characters until `char` or the next common digit."""
        target = self.next_common()
        while self.other_pos < len(self.other):
            head = self.other[self.other_pos]
            if head == char or head == target:
                break
            self.other_pos += 1


class _PairFacts:
    """Facts about the suggested number used by the prefix rules."""

    def __init__(self, original: str, suggested: str):
        self.normalized_original = normalize(original)
        self.normalized_suggested = normalize(suggested)

        parts = suggested.split(" ")
        self.actual_number_starts_with_zero = len(parts) > 1 and parts[1].startswith("0")
        self.only_adding_plus = self.normalized_original == self.normalized_suggested
        self.numerical_prefix = parts[0][1:]
        self.numerically_only_adding_prefix = (
            self.normalized_suggested == self.numerical_prefix + self.normalized_original
        )


def _classify_original(original: str, suggested: str, common: List[str], facts: _PairFacts) -> List[DiffRun]:
    out: List[DiffRun] = []
    cursor = _Cursor(common, suggested)
    space_position = suggested.find(" ")

    for i, char in enumerate(original):
        if cursor.peek(i) == "+" and char == "0" and not facts.actual_number_starts_with_zero:
            # trunk '0' replaced by a '+country' prefix
            out.append(DiffRun(value=char, removed=True))
            cursor.take_common_zero()
            cursor.advance(space_position + 1)
        elif is_digit(char):
            if char == cursor.next_common():
                out.append(DiffRun(value=char, **UNCHANGED))
                cursor.sync_to(char)
                cursor.advance()
                cursor.take_common()
            else:
                out.append(DiffRun(value=char, removed=True))
        elif char == cursor.peek():
            # same formatting character on both sides (+, space, dash)
            out.append(DiffRun(value=char, **UNCHANGED))
            cursor.advance()
        else:
            out.append(DiffRun(value=char, removed=True))
    return out


def _inserts_prefix(char: str, cursor: _Cursor, facts: _PairFacts) -> bool:
    if char != "+":
        return False
    # '+' may exist but not lead, e.g. 'tel:+...'
    if cursor.ahead("+"):
        return False
    # 00 -> + is handled by the ordinary matching
    if facts.normalized_original[:2] == "00":
        return False
    if facts.only_adding_plus:
        return False
    prefix = facts.numerical_prefix
    already_present = facts.normalized_original[:len(prefix)] == prefix
    return not already_present or facts.numerically_only_adding_prefix


def _classify_suggested(original: str, suggested: str, common: List[str], facts: _PairFacts) -> List[DiffRun]:
    out: List[DiffRun] = []
    cursor = _Cursor(common, original)
    delimiter = "-" if suggested.startswith("+1-") else " "

    i = 0
    while i < len(suggested):
        char = suggested[i]

        if _inserts_prefix(char, cursor, facts):
            end = suggested.find(delimiter, i)
            end = len(suggested) - 1 if end < 0 else end
            for c in suggested[i:end + 1]:
                out.append(DiffRun(value=c, added=True))
            i = end

            if cursor.peek() == "0" and not facts.actual_number_starts_with_zero:
                cursor.advance()
                cursor.take_common_zero()
        elif is_digit(char):
            if char == cursor.next_common():
                out.append(DiffRun(value=char, **UNCHANGED))
                cursor.sync_to(char)
                cursor.advance()
                cursor.take_common()
            else:
                # new digit, e.g. a country code
                out.append(DiffRun(value=char, added=True))
        elif char == cursor.peek():
            out.append(DiffRun(value=char, **UNCHANGED))
            cursor.advance()
        elif cursor.ahead(char) and not (is_digit(cursor.peek()) or cursor.peek() in ("+", " ", "-")):
            # characters were dropped from the original before this one
            cursor.sync_to(char)
            if char == cursor.peek():
                out.append(DiffRun(value=char, **UNCHANGED))
                cursor.advance()
            else:
                out.append(DiffRun(value=char, added=True))
        else:
            out.append(DiffRun(value=char, added=True))
        i += 1
    return out


def diff_phone_numbers(original: Optional[str], suggested: Optional[str]) -> Tuple[List[DiffRun], List[DiffRun]]:
    """
    Classify every character of a single original number (unchanged/removed)
    and of its suggested replacement (unchanged/added).

    Returns one DiffRun per character on each side; use merge_diffs to
    collapse them into runs.
    """
    if not original and not suggested:
        return [], []
    if original == suggested:
        return [DiffRun(value=original, **UNCHANGED)], [DiffRun(value=suggested, **UNCHANGED)]
    if not original:
        return [], [DiffRun(value=suggested, added=True)]
    if not suggested:
        return [DiffRun(value=original, removed=True)], []

    common = common_digits(original, suggested)
    facts = _PairFacts(original, suggested)
    return (
        _classify_original(original, suggested, common, facts),
        _classify_suggested(original, suggested, common, facts),
    )
