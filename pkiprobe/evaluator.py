"""Per-certificate classification and the worst-case fold over a whole run."""
from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .expiry import days_left as compute_days_left
from .models import (
    AggregateResult,
    CertificateEvaluation,
    CertificateRecord,
    Classification,
    ReadFailure,
    Status,
)

log = logging.getLogger(__name__)

Outcome = Union[CertificateEvaluation, ReadFailure]


def classify(days_left: int, critical_days: int, warning_days: int) -> Classification:
    """Both thresholds are inclusive upper bounds."""
    if days_left < 0:
        return Classification.EXPIRED
    if days_left <= critical_days:
        return Classification.CRITICAL
    if days_left <= warning_days:
        return Classification.WARNING
    return Classification.OK


def evaluate_record(
    record: CertificateRecord,
    now: dt.datetime,
    critical_days: int,
    warning_days: int,
) -> CertificateEvaluation:
    left = compute_days_left(record.expires_at, now)
    return CertificateEvaluation(
        record=record,
        days_left=left,
        classification=classify(left, critical_days, warning_days),
    )


def describe(outcome: Outcome, verbose: bool = False) -> Optional[str]:
    if isinstance(outcome, ReadFailure):
        return f"{outcome.path} is unreadable: {outcome.reason}."

    subject = outcome.record.subject
    cls = outcome.classification
    if cls is Classification.EXPIRED:
        return f"{subject} expired {abs(outcome.days_left)} day(s) ago."
    if cls in (Classification.CRITICAL, Classification.WARNING):
        return f"{subject} expires in {outcome.days_left} days."
    if verbose:
        return f"{subject} has {outcome.days_left} day(s) left."
    return None


def _duplicates(evaluations: List[CertificateEvaluation]) -> Dict[str, Tuple[str, ...]]:
    seen: Dict[str, List[str]] = {}
    for e in evaluations:
        seen.setdefault(e.record.serial_number, []).append(e.record.path)
    return {serial: tuple(paths) for serial, paths in seen.items() if len(paths) > 1}


def aggregate(outcomes: Iterable[Outcome], verbose: bool = False) -> AggregateResult:
    """Fold outcomes, in scan order, into one status and message.

    The status is the worst classification seen; expired and unreadable
    files both count as CRITICAL. Without any fragment the message falls
    back to the number of certificates verified.
    """
    status = Status.OK
    fragments: List[str] = []
    evaluations: List[CertificateEvaluation] = []
    failures: List[ReadFailure] = []

    for outcome in outcomes:
        if isinstance(outcome, ReadFailure):
            failures.append(outcome)
            status = max(status, Status.CRITICAL)
        else:
            evaluations.append(outcome)
            status = max(status, outcome.classification.status)
        text = describe(outcome, verbose)
        if text:
            fragments.append(text)

    dups = _duplicates(evaluations)
    for serial, paths in dups.items():
        log.warning("serial %s appears in %d files: %s", serial, len(paths), ", ".join(paths),
                    extra={"serial": serial})

    message = " ".join(fragments) if fragments else f"{len(evaluations)} certificates verified."
    return AggregateResult(
        status=Status(status),
        message=message,
        evaluated_count=len(evaluations),
        evaluations=evaluations,
        failures=failures,
        duplicate_serials=dups,
    )
