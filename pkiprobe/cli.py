"""Nagios/Icinga plugin entry point: ``pkiprobe -b <dir> [-c N] [-w N] [-v]``."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, NoReturn, Optional

from pydantic import ValidationError

from .contracts import CheckConfig
from .errors import ConfigError
from .logging_conf import setup_logging
from .models import Status
from .probe import format_result, run_check
from .report import exit_code
from .settings import Settings

log = logging.getLogger(__name__)

TRUSTED_PATH = "/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin:/sbin:/bin"


def _version() -> str:
    try:
        return version("pkiprobe")
    except PackageNotFoundError:
        return "0+unknown"


class _Parser(argparse.ArgumentParser):
    def __init__(self, *args, label: str = "PKIPROBE", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.label = label

    # argparse sort en 2 (CRITICAL pour Nagios), on veut UNKNOWN
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        print(f"{self.label}: UNKNOWN - {message}")
        self.exit(int(Status.UNKNOWN))


def build_parser(label: str = "PKIPROBE") -> argparse.ArgumentParser:
    parser = _Parser(
        prog="pkiprobe",
        label=label,
        description="Check expiration of the certificates stored under <basedir>/pki.",
    )
    parser.add_argument("-b", dest="base_dir", metavar="DIR", required=True,
                        help="base directory containing the 'pki' tree")
    parser.add_argument("-c", dest="critical_days", metavar="DAYS", type=int, default=7,
                        help="critical threshold in days (default: %(default)s)")
    parser.add_argument("-w", dest="warning_days", metavar="DAYS", type=int, default=30,
                        help="warning threshold in days (default: %(default)s)")
    parser.add_argument("-v", dest="verbose", action="store_true",
                        help="also report certificates that are fine")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument("--perfdata", action="store_true",
                        help="append Nagios performance data to the output line")
    return parser


def parse_config(argv: Optional[List[str]] = None, label: str = "PKIPROBE") -> CheckConfig:
    args = build_parser(label).parse_args(argv)
    try:
        return CheckConfig(
            base_dir=args.base_dir,
            critical_days=args.critical_days,
            warning_days=args.warning_days,
            verbose=args.verbose,
            perfdata=args.perfdata,
        )
    except ValidationError as exc:
        errs = "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors())
        raise ConfigError(errs) from exc


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    setup_logging(settings)
    os.environ["PATH"] = TRUSTED_PATH

    try:
        config = parse_config(argv, settings.PROGRAM_NAME)
    except ConfigError as exc:
        print(f"{settings.PROGRAM_NAME}: UNKNOWN - invalid arguments: {exc}")
        return int(Status.UNKNOWN)

    try:
        result = run_check(config, settings)
    except Exception as exc:
        log.exception("unexpected failure while checking %s", config.base_dir)
        print(f"{settings.PROGRAM_NAME}: UNKNOWN - {exc.__class__.__name__}: {exc}")
        return int(Status.UNKNOWN)

    print(format_result(result, config, settings))
    return exit_code(result.status)


if __name__ == "__main__":
    sys.exit(main())
