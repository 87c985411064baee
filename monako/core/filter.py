"""
Whitelist filtering of origin files.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from ..models import FilterCriteria


@dataclass
class FilterResult:
    """Outcome of filtering a list of paths."""

    included_files: List[str] = field(default_factory=list)
    excluded_files: List[str] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.included_files) + len(self.excluded_files)

    @property
    def filtered_files(self) -> int:
        return len(self.included_files)


class FilterEngine:
    """Applies a suffix whitelist to file paths."""

    def __init__(self, criteria: FilterCriteria):
        self.criteria = criteria

    def should_include(self, path: str) -> bool:
        return self.criteria.matches_path(path)

    def filter_files(self, paths: Iterable[str]) -> FilterResult:
        result = FilterResult()
        for path in paths:
            if self.should_include(path):
                result.included_files.append(path)
            else:
                result.excluded_files.append(path)
        return result


__all__ = ["FilterResult", "FilterEngine"]
