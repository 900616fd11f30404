from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


def match_key(identifier: str) -> str:
    """Key under which requested identifiers and directory usernames are compared (exact, case-sensitive)."""
    return identifier


@dataclass(frozen=True)
class DirectoryRecord:
    """One directory user returned by the search API"""
    matched_identifier: str
    record_id: str
    emails: tuple = ()


@dataclass
class ResolutionResult:
    """Partition of the requested identifiers into found records and not-found identifiers"""
    requested: List[str]
    found: List[DirectoryRecord] = field(default_factory=list)
    not_found: List[str] = field(default_factory=list)

    @property
    def found_identifiers(self) -> List[str]:
        return [record.matched_identifier for record in self.found]


class DeletionStatus(Enum):
    DELETED = "deleted"
    FAILED = "failed"


@dataclass(frozen=True)
class DeletionOutcome:
    """Terminal result of one delete attempt"""
    record: DirectoryRecord
    status: DeletionStatus
    status_code: Optional[int] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status is DeletionStatus.DELETED


@dataclass
class DeletionReport:
    outcomes: List[DeletionOutcome] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def error_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.ok)

    @property
    def failed(self) -> List[DeletionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


@dataclass(frozen=True)
class Counters:
    """Summary counts shown after lookup and again after deletion"""
    total_requested: int
    found_count: int
    not_found_count: int
    deleted_count: Optional[int] = None
    error_count: Optional[int] = None

    def __post_init__(self):
        if self.found_count + self.not_found_count != self.total_requested:
            raise ValueError(
                f"found ({self.found_count}) + not found ({self.not_found_count}) "
                f"!= total ({self.total_requested})"
            )
        if (self.deleted_count is None) != (self.error_count is None):
            raise ValueError("deleted_count and error_count must be given together")
        if self.has_deletions and self.deleted_count + self.error_count != self.found_count:
            raise ValueError(
                f"deleted ({self.deleted_count}) + errors ({self.error_count}) "
                f"!= found ({self.found_count})"
            )

    @property
    def has_deletions(self) -> bool:
        return self.deleted_count is not None

    @classmethod
    def from_results(cls, resolution: ResolutionResult,
                     report: Optional[DeletionReport] = None) -> "Counters":
        if report is None:
            return cls(len(resolution.requested), len(resolution.found), len(resolution.not_found))
        return cls(
            len(resolution.requested),
            len(resolution.found),
            len(resolution.not_found),
            report.deleted_count,
            report.error_count,
        )
