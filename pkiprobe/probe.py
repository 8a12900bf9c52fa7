"""One probe run: scan, read, evaluate, fold."""
from __future__ import annotations

import datetime as dt
import logging
from typing import Iterator, Optional

from .common import utc_now
from .contracts import CertificateItem, CheckConfig, CheckReport, FailureItem
from .errors import ParseError, ScanError
from .evaluator import Outcome, aggregate, evaluate_record
from .models import AggregateResult, ReadFailure, Status
from .path_utils import pki_root
from .report import exit_code, perfdata, render
from .reader import read_certificate
from .scanner import scan_certificates
from .settings import Settings

log = logging.getLogger(__name__)


def _outcomes(paths, config: CheckConfig, now: dt.datetime) -> Iterator[Outcome]:
    for path in paths:
        try:
            record = read_certificate(path)
        except ParseError as exc:
            log.warning("cannot read certificate %s: %s", exc.path, exc.reason,
                        extra={"cert_path": exc.path})
            yield ReadFailure(path=exc.path, reason=exc.reason)
            continue
        yield evaluate_record(record, now, config.critical_days, config.warning_days)


def run_check(
    config: CheckConfig,
    settings: Optional[Settings] = None,
    now: Optional[dt.datetime] = None,
) -> AggregateResult:
    """Check every certificate below ``<base_dir>/pki``.

    A scan-root failure yields an UNKNOWN result; per-file read errors are
    folded into the result as CRITICAL fragments.
    """
    settings = settings or Settings.from_env()
    root = pki_root(config.base_dir)
    try:
        paths = scan_certificates(root, settings.CERT_PATTERN)
    except ScanError as exc:
        log.error("scan failed: %s", exc, extra={"base_dir": exc.path})
        return AggregateResult(status=Status.UNKNOWN, message=f"cannot scan {exc.path}: {exc.reason}.")

    if now is None:
        now = utc_now()
    log.info("scanning %s (critical=%d, warning=%d)", root, config.critical_days, config.warning_days,
             extra={"base_dir": str(root)})
    result = aggregate(_outcomes(paths, config, now), verbose=config.verbose)
    log.info("%d certificates evaluated, %d unreadable, status %s",
             result.evaluated_count, len(result.failures), result.status.name,
             extra={"base_dir": str(root), "status": result.status.name})
    return result


def format_result(result: AggregateResult, config: CheckConfig, settings: Settings) -> str:
    perf = None
    if (config.perfdata or settings.PERFDATA) and result.status is not Status.UNKNOWN:
        perf = perfdata(result, config.critical_days, config.warning_days)
    return render(settings.PROGRAM_NAME, result, perf)


def build_report(
    config: CheckConfig,
    settings: Optional[Settings] = None,
    now: Optional[dt.datetime] = None,
) -> CheckReport:
    settings = settings or Settings.from_env()
    result = run_check(config, settings, now)
    return CheckReport(
        status=result.status.name,
        exit_code=exit_code(result.status),
        line=format_result(result, config, settings),
        message=result.message,
        evaluated_count=result.evaluated_count,
        certificates=[CertificateItem(**e.as_dict()) for e in result.evaluations],
        failures=[FailureItem(**f.as_dict()) for f in result.failures],
        duplicate_serials=sorted(result.duplicate_serials),
    )
