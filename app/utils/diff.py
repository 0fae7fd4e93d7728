# app/utils/diff.py
import difflib
from typing import List, Tuple
from diff_match_patch import diff_match_patch

from app.models.schema import DiffRun
from app.utils.text import normalize


def common_digits(original: str, suggested: str) -> List[str]:
    """
    Digits kept, in order, by a minimal-edit diff of the two digit streams.
    Formatting is ignored, so this is the backbone of digits that merely moved.
    """
    dmp = diff_match_patch()
    dmp.Diff_Timeout = 0  # exact result, inputs are short
    diffs = dmp.diff_main(normalize(original), normalize(suggested), False)
    common: List[str] = []
    for op, text in diffs:
        if op == diff_match_patch.DIFF_EQUAL:
            common.extend(text)
    return common


def char_diff(original: str, suggested: str) -> Tuple[List[DiffRun], List[DiffRun]]:
    """Plain character diff, for separators where nothing needs realigning."""
    original_diff: List[DiffRun] = []
    suggested_diff: List[DiffRun] = []
    sm = difflib.SequenceMatcher(a=original, b=suggested, autojunk=False)
    for tag, i1, i2, j1, j2 in sm.get_opcodes():
        if tag == "equal":
            original_diff.append(DiffRun(value=original[i1:i2]))
            suggested_diff.append(DiffRun(value=suggested[j1:j2]))
            continue
        if i2 > i1:
            original_diff.append(DiffRun(value=original[i1:i2], removed=True))
        if j2 > j1:
            suggested_diff.append(DiffRun(value=suggested[j1:j2], added=True))
    return original_diff, suggested_diff


def digit_similarity(a: str, b: str) -> float:
    return difflib.SequenceMatcher(a=normalize(a), b=normalize(b), autojunk=False).ratio()


def merge_diffs(runs: List[DiffRun]) -> List[DiffRun]:
    """
    Merge neighbouring runs with the same added/removed status, e.g.
    ['1' removed, '2' removed] -> ['12' removed]. Input runs are left untouched.
    """
    merged: List[DiffRun] = []
    for run in runs:
        if not run.value:
            continue
        if merged and merged[-1].same_status(run):
            last = merged[-1]
            merged[-1] = last.model_copy(update={"value": last.value + run.value})
        else:
            merged.append(run.model_copy())
    return merged
