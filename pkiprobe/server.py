from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from .contracts import CheckConfig
from .expiry import days_left
from .logging_conf import setup_logging
from .path_utils import resolve_path
from .probe import build_report
from .reader import read_certificate
from .settings import Settings

mcp = FastMCP(
    name="PKIProbe",
    instructions=(
        "Purpose: check the expiration of every certificate issued by a local certificate "
        "authority (EasyRSA-style `<base_dir>/pki` tree) and return a Nagios-style verdict. "
        "No network access, no file writes.\n\n"
        "Tools:\n"
        "- `check_pki_store(base_dir, critical_days=7, warning_days=30, verbose=false)` scans "
        "`<base_dir>/pki` for `*.crt` files and returns the overall status (OK/WARNING/CRITICAL/UNKNOWN), "
        "the exit code, the one-line plugin output and one entry per certificate.\n"
        "- `inspect_certificate(path)` reads a single certificate file (PEM, DER or PKCS#7) and "
        "returns its subject, issuer, serial, validity dates and days left.\n\n"
        "Safety: read-only and idempotent."
    ),
)


@mcp.tool(
    description="Liveness check. Returns 'pong'.",
    annotations={"title": "Ping", "readOnlyHint": True, "idempotentHint": True},
)
def ping() -> str:
    return "pong"


@mcp.tool(
    description=(
        "Scan `<base_dir>/pki` and report the worst certificate expiry status, "
        "using inclusive critical/warning thresholds expressed in days."
    ),
    tags={"pkiprobe", "x509", "monitoring", "filesystem"},
    annotations={
        "title": "Check PKI store",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def check_pki_store(
    base_dir: Annotated[str, Field(description="Directory holding the 'pki' tree.")],
    critical_days: Annotated[int, Field(ge=0, description="Critical threshold in days.")] = 7,
    warning_days: Annotated[int, Field(ge=0, description="Warning threshold in days.")] = 30,
    verbose: Annotated[bool, Field(description="Also describe certificates that are fine.")] = False,
) -> dict:
    config = CheckConfig(
        base_dir=str(resolve_path(base_dir)),
        critical_days=critical_days,
        warning_days=warning_days,
        verbose=verbose,
    )
    return build_report(config).model_dump()


@mcp.tool(
    description="Read one certificate file and return its identity, validity window and days left.",
    tags={"pkiprobe", "x509", "analysis", "filesystem"},
    annotations={
        "title": "Inspect certificate",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def inspect_certificate(
    path: Annotated[str, Field(description="Local path to the certificate file.")],
) -> dict:
    record = read_certificate(resolve_path(path))
    return {**record.as_dict(), "days_left": days_left(record.expires_at)}


def main() -> None:
    setup_logging(Settings.from_env())
    mcp.run()


if __name__ == "__main__":
    main()
