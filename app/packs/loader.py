import re
from functools import lru_cache
from pathlib import Path
from typing import List
import yaml

from app.models.schema import SeparatorProfileInfo
from app.utils.logger import logger


def _optional_space_group(sep: str) -> str:
    escaped = re.escape(sep)
    if sep == ";":
        # "\;" delimits an escaped extension, e.g. "...4567\;ext=123"
        return rf"(\s*(?<!\\)(?:{escaped})\s*)"
    if sep == ",":
        # "..., ext 123" is one number with an extension
        return rf"(\s*(?:{escaped})(?!\s*ext)\s*)"
    return rf"(\s*{escaped}\s*)"


def _need_space_group(sep: str) -> str:
    return rf"(\s+{re.escape(sep)}\s+)"


class SeparatorProfile:
    """A named set of separators used to split a multi-value field."""

    def __init__(self, root: Path):
        self.name = root.name

        data = yaml.safe_load((root / "separators.yaml").read_text(encoding="utf-8")) or {}
        self.optional_space: List[str] = [str(s) for s in data.get("optional_space", []) or []]
        self.need_space: List[str] = [str(s) for s in data.get("need_space", []) or []]

        # capturing groups so that re.split keeps the separators
        groups = [_optional_space_group(s) for s in self.optional_space]
        groups += [_need_space_group(s) for s in self.need_space]
        self.split_regex = re.compile("|".join(groups), re.IGNORECASE)

    @property
    def separators(self) -> List[str]:
        return self.optional_space + self.need_space

    def is_separator(self, token: str) -> bool:
        return token.lower().strip() in self.separators

    def info(self) -> SeparatorProfileInfo:
        return SeparatorProfileInfo(
            name=self.name,
            optional_space=self.optional_space,
            need_space=self.need_space,
        )


def load_pack(profile: str) -> SeparatorProfile:
    return _load_pack(profile.lower())


@lru_cache(maxsize=None)
def _load_pack(profile: str) -> SeparatorProfile:
    path = Path(__file__).resolve().parent / profile
    if not profile.isidentifier() or not (path / "separators.yaml").exists():
        raise FileNotFoundError(f"Separator profile not found: {profile} (expected at {path})")
    pack = SeparatorProfile(path)
    logger.info(f"Loaded separator profile: {pack.name}, separators={pack.separators}")
    return pack
