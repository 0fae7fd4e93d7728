from typing import List, Optional, Tuple

from app.models.schema import DiffRun, Segment, SegmentKind
from app.services.classifier import diff_phone_numbers
from app.services.segmenter import SegmenterService
from app.utils.diff import char_diff, digit_similarity, merge_diffs
from app.utils.logger import logger
from app.utils.text import replace_invisible_chars

Runs = List[DiffRun]


class FieldDiff:
    """Merged runs for both sides of one field, plus the separator profile used."""

    def __init__(self, original_diff: Runs, suggested_diff: Runs, profile: Optional[str] = None):
        self.original_diff = original_diff
        self.suggested_diff = suggested_diff
        self.profile = profile


class DiffComposer:
    """Diffs whole field values, which may hold several numbers and separators."""

    def compose(self, original: Optional[str], suggested: Optional[str]) -> FieldDiff:
        if not original and not suggested:
            return FieldDiff([], [])
        if not original:
            return FieldDiff([], [DiffRun(value=suggested, added=True)])
        if not suggested:
            return FieldDiff([DiffRun(value=original, removed=True)], [])

        original_clean = replace_invisible_chars(original)
        suggested_clean = replace_invisible_chars(suggested)

        profile = SegmenterService.profile_for(suggested)
        segmenter = SegmenterService(profile)
        old_segments = segmenter.segment(original_clean)
        new_segments = segmenter.segment(suggested_clean)

        if self._is_single_number_removal(old_segments, new_segments):
            original_diff, suggested_diff = self._align_single_number_removal(old_segments, new_segments[0])
        else:
            original_diff, suggested_diff = self._align_positionally(old_segments, new_segments)

        logger.debug(
            f"Composed diff | profile={profile} segments={len(old_segments)}->{len(new_segments)}"
        )
        return FieldDiff(merge_diffs(original_diff), merge_diffs(suggested_diff), profile)

    # ---- pairing ----

    def _align_positionally(self, old_segments: List[Segment], new_segments: List[Segment]) -> Tuple[Runs, Runs]:
        original_diff: Runs = []
        suggested_diff: Runs = []
        paired = min(len(old_segments), len(new_segments))

        for old, new in zip(old_segments[:paired], new_segments[:paired]):
            if old.kind == SegmentKind.NUMBER:
                old_runs, new_runs = diff_phone_numbers(old.text, new.text)
            else:
                old_runs, new_runs = char_diff(old.text, new.text)
            original_diff.extend(old_runs)
            suggested_diff.extend(new_runs)

        trailing_original = "".join(s.text for s in old_segments[paired:])
        trailing_suggested = "".join(s.text for s in new_segments[paired:])
        if trailing_original:
            original_diff.append(DiffRun(value=trailing_original, removed=True))
        if trailing_suggested:
            suggested_diff.append(DiffRun(value=trailing_suggested, added=True))
        return original_diff, suggested_diff

    @staticmethod
    def _is_single_number_removal(old_segments: List[Segment], new_segments: List[Segment]) -> bool:
        return (
            len(old_segments) == 3
            and len(new_segments) == 1
            and old_segments[0].kind == SegmentKind.NUMBER
            and old_segments[2].kind == SegmentKind.NUMBER
        )

    def _align_single_number_removal(self, old_segments: List[Segment], new: Segment) -> Tuple[Runs, Runs]:
        """
        Two numbers became one, typically a duplicate dropped. Align the
        suggestion with the closer original number and remove the other.
        """
        first, separator, second = old_segments
        if digit_similarity(first.text, new.text) > digit_similarity(second.text, new.text):
            original_diff, suggested_diff = diff_phone_numbers(first.text, new.text)
            original_diff = original_diff + [
                DiffRun(value=separator.text, removed=True),
                DiffRun(value=second.text, removed=True),
            ]
        else:
            kept_original, suggested_diff = diff_phone_numbers(second.text, new.text)
            original_diff = [
                DiffRun(value=first.text, removed=True),
                DiffRun(value=separator.text, removed=True),
            ] + kept_original
        return original_diff, suggested_diff
