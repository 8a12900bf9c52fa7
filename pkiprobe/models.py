import datetime as dt
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Tuple

from .common import iso_utc


class Status(IntEnum):
    """Plugin status; the value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


class Classification(str, Enum):
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"
    EXPIRED = "expired"
    UNREADABLE = "unreadable"

    @property
    def status(self) -> Status:
        if self is Classification.OK:
            return Status.OK
        if self is Classification.WARNING:
            return Status.WARNING
        return Status.CRITICAL


@dataclass(frozen=True)
class CertificateRecord:
    serial_number: str
    subject: str
    expires_at: dt.datetime
    path: str = ""
    issuer: str = ""
    subject_cn: Optional[str] = None
    not_before: Optional[dt.datetime] = None
    fingerprint_sha256: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "serial_number": self.serial_number,
            "subject": self.subject,
            "subject_cn": self.subject_cn,
            "issuer": self.issuer,
            "not_before": iso_utc(self.not_before) if self.not_before else None,
            "not_after": iso_utc(self.expires_at),
            "fingerprint_sha256": self.fingerprint_sha256,
        }


@dataclass(frozen=True)
class CertificateEvaluation:
    record: CertificateRecord
    days_left: int
    classification: Classification = Classification.OK

    def as_dict(self) -> Dict[str, Any]:
        return {
            **self.record.as_dict(),
            "days_left": self.days_left,
            "classification": self.classification.value,
        }


@dataclass(frozen=True)
class ReadFailure:
    path: str
    reason: str

    def as_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "reason": self.reason}


@dataclass
class AggregateResult:
    status: Status
    message: str
    evaluated_count: int = 0
    evaluations: List[CertificateEvaluation] = field(default_factory=list)
    failures: List[ReadFailure] = field(default_factory=list)
    duplicate_serials: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def count(self, classification: Classification) -> int:
        if classification is Classification.UNREADABLE:
            return len(self.failures)
        return sum(1 for e in self.evaluations if e.classification is classification)

    @property
    def min_days_left(self) -> Optional[int]:
        if not self.evaluations:
            return None
        return min(e.days_left for e in self.evaluations)
