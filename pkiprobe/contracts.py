from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CheckConfig(BaseModel):
    """Validated configuration for a single probe run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_dir: str = Field(..., min_length=1, description="Directory holding the 'pki' tree.")
    critical_days: int = Field(7, ge=0)
    warning_days: int = Field(30, ge=0)
    verbose: bool = False
    perfdata: bool = False


class CertificateItem(BaseModel):
    path: str
    serial_number: str
    subject: str
    subject_cn: Optional[str] = None
    issuer: str = ""
    not_before: Optional[str] = None
    not_after: str
    fingerprint_sha256: str = ""
    days_left: int
    classification: str = Field(..., examples=["ok", "warning", "critical", "expired"])


class FailureItem(BaseModel):
    path: str
    reason: str


class CheckReport(BaseModel):
    status: str = Field(..., examples=["OK", "WARNING", "CRITICAL", "UNKNOWN"])
    exit_code: int
    line: str
    message: str
    evaluated_count: int = 0
    certificates: List[CertificateItem] = []
    failures: List[FailureItem] = []
    duplicate_serials: List[str] = []
