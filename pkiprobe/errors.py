class ProbeError(Exception):
    """Base class for errors raised by the probe."""


class ConfigError(ProbeError):
    """Missing or invalid check configuration."""


class ScanError(ProbeError):
    """The base directory cannot be scanned."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ParseError(ProbeError):
    """A single certificate file could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
