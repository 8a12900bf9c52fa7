"""Load a certificate file and extract the fields the probe reports on."""
from __future__ import annotations

import logging
import os
import re
import warnings
from typing import List, Optional

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.serialization.pkcs7 import (
    load_der_pkcs7_certificates,
    load_pem_pkcs7_certificates,
)
from cryptography.x509.oid import NameOID

from .errors import ParseError
from .format_identify import guess_format
from .models import CertificateRecord

log = logging.getLogger(__name__)

_PEM_CERT_RE = re.compile(
    rb"-----BEGIN (?:TRUSTED )?CERTIFICATE-----\r?\n.*?\r?\n-----END (?:TRUSTED )?CERTIFICATE-----",
    re.DOTALL,
)


def _name_to_cn(name: x509.Name) -> Optional[str]:
    attrs = name.get_attributes_for_oid(NameOID.COMMON_NAME)
    if not attrs:
        return None
    value = attrs[0].value
    return value if isinstance(value, str) else value.decode("utf-8", "replace")


def _load_pem(data: bytes) -> x509.Certificate:
    # EasyRSA écrit un bloc texte (openssl -text) avant le PEM
    m = _PEM_CERT_RE.search(data)
    if not m:
        raise ValueError("no CERTIFICATE block found")
    return x509.load_pem_x509_certificate(m.group(0))


def _load_pkcs7(data: bytes) -> x509.Certificate:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            category=UserWarning,
            message=r"PKCS#7 certificates could not be parsed as DER, falling back to parsing as BER\.",
        )
        certs: List[x509.Certificate]
        try:
            certs = load_pem_pkcs7_certificates(data)
        except ValueError:
            certs = load_der_pkcs7_certificates(data)
    if not certs:
        raise ValueError("PKCS#7 bundle holds no certificate")
    return certs[0]


def _load(data: bytes) -> x509.Certificate:
    # le dump texte d'openssl ca peut dépasser la fenêtre de guess_format
    if _PEM_CERT_RE.search(data):
        return _load_pem(data)
    fmt = guess_format(data)
    if fmt == "PEM":
        return _load_pem(data)
    if fmt == "PKCS7":
        return _load_pkcs7(data)
    if fmt == "DER":
        return x509.load_der_x509_certificate(data)
    raise ValueError("not a certificate encoding")


def cert_to_record(cert: x509.Certificate, path: str = "") -> CertificateRecord:
    return CertificateRecord(
        serial_number=format(cert.serial_number, "x"),
        subject=cert.subject.rfc4514_string(),
        expires_at=cert.not_valid_after_utc,
        path=path,
        issuer=cert.issuer.rfc4514_string(),
        subject_cn=_name_to_cn(cert.subject),
        not_before=cert.not_valid_before_utc,
        fingerprint_sha256=cert.fingerprint(hashes.SHA256()).hex(),
    )


def read_certificate(path: str | os.PathLike[str]) -> CertificateRecord:
    """Parse the certificate stored at ``path``.

    PEM (first certificate block), DER and PKCS#7 bundles (first certificate)
    are accepted. Raises :class:`ParseError` when the file cannot be read or
    does not hold a certificate.
    """
    p = os.fspath(path)
    try:
        with open(p, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise ParseError(p, exc.strerror or str(exc)) from exc

    try:
        cert = _load(data)
        record = cert_to_record(cert, path=p)
    except ValueError as exc:
        raise ParseError(p, str(exc) or "malformed certificate") from exc

    log.debug("read %s serial=%s subject=%s", p, record.serial_number, record.subject,
              extra={"cert_path": p, "serial": record.serial_number})
    return record
