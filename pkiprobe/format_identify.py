import re

_PEM_BEGIN = re.compile(rb"-----BEGIN ([A-Z0-9 #]+)-----")


def guess_format(data: bytes) -> str:
    """Return ``PEM``, ``PKCS7``, ``DER`` or ``UNKNOWN`` for raw file bytes."""
    m = _PEM_BEGIN.search(data[:4096])
    if m:
        label = m.group(1).decode("ascii", "ignore")
        if "PKCS7" in label:
            return "PKCS7"
        return "PEM"
    # SEQUENCE DER
    if data[:1] == b"\x30":
        return "DER"
    return "UNKNOWN"
