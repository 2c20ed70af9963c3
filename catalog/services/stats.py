"""
Run statistics and the service result contract.

Every top-level alternative URL operation reports:
    {status, message, num_processed, num_updated, num_skipped, num_error}

status is "success" when no entity failed, "failure" when the run completed
with per-entity errors, and "error" when the run itself could not be carried
out, either before the walk started or because a hierarchy query failed
during it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.utils import translation
from django.utils.translation import gettext


class ResultStatus:
    """Values of ServiceResult.status."""

    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"


@dataclass
class ServiceResult:
    """Result returned by every top-level alternative URL operation."""

    status: str = ResultStatus.SUCCESS
    message: str = ""
    num_processed: int = 0
    num_updated: int = 0
    num_skipped: int = 0
    num_error: int = 0
    main_content_id: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status == ResultStatus.ERROR

    @classmethod
    def error(cls, message: str, num_error: int = 0) -> "ServiceResult":
        return cls(status=ResultStatus.ERROR, message=message, num_error=num_error)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        data = {
            "status": self.status,
            "message": self.message,
            "num_processed": self.num_processed,
            "num_updated": self.num_updated,
            "num_skipped": self.num_skipped,
            "num_error": self.num_error,
        }
        if self.main_content_id is not None:
            data["main_content_id"] = self.main_content_id
        return data


@dataclass
class TraversalStats:
    """Counters accumulated over one traversal or single-entity run."""

    num_processed: int = 0
    num_updated: int = 0
    num_skipped: int = 0
    num_error: int = 0

    def add(self, other: "TraversalStats") -> None:
        """Fold another set of counters into this one."""
        self.num_processed += other.num_processed
        self.num_updated += other.num_updated
        self.num_skipped += other.num_skipped
        self.num_error += other.num_error

    @property
    def has_errors(self) -> bool:
        return self.num_error > 0

    def to_message(self, locale: Optional[str] = None) -> str:
        """Human-readable summary, translated to the given locale if possible."""
        with translation.override(locale):
            return gettext(
                "Processed: %(processed)d; updated: %(updated)d; "
                "skipped: %(skipped)d; errors: %(errors)d"
            ) % {
                "processed": self.num_processed,
                "updated": self.num_updated,
                "skipped": self.num_skipped,
                "errors": self.num_error,
            }

    def to_result(self, message: str = "") -> ServiceResult:
        """Build the service result: success without errors, failure otherwise."""
        return ServiceResult(
            status=ResultStatus.FAILURE if self.has_errors else ResultStatus.SUCCESS,
            message=message,
            num_processed=self.num_processed,
            num_updated=self.num_updated,
            num_skipped=self.num_skipped,
            num_error=self.num_error,
        )
