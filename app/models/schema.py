from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


# ---- diff engine ----

class SegmentKind(str, Enum):
    NUMBER = "number"
    SEPARATOR = "separator"


class Segment(BaseModel):
    """A piece of a multi-value field: a number, or the separator between two."""
    text: str
    kind: SegmentKind


class DiffRun(BaseModel):
    """A run of characters sharing one status. Single-character runs before merging."""
    value: str
    added: bool = False
    removed: bool = False

    def same_status(self, other: "DiffRun") -> bool:
        return self.added == other.added and self.removed == other.removed


class SeparatorProfileInfo(BaseModel):
    name: str
    optional_space: List[str]
    need_space: List[str]


# ---- API ----

class NumberDiffRequest(BaseModel):
    original: str = Field(..., description="A single raw number as stored in the source data")
    suggested: str = Field(..., description="The normalised replacement number")


class NumberDiffResponse(BaseModel):
    original_diff: List[DiffRun]
    suggested_diff: List[DiffRun]


class FieldDiffRequest(BaseModel):
    original: Optional[str] = None
    suggested: Optional[str] = None


class FieldDiffResponse(BaseModel):
    profile: Optional[str] = None
    original_diff: List[DiffRun] = []
    suggested_diff: List[DiffRun] = []
    old_diff: Optional[str] = None
    new_diff: Optional[str] = None


class TagDiffRequest(BaseModel):
    old_key: str
    new_key: str


class TagDiffResponse(BaseModel):
    old_tag_diff: str
    new_tag_diff: str
