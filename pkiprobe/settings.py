import os
from dataclasses import dataclass, field

_TRUE = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    LOG_LEVEL: str = field(default="WARNING")
    PROGRAM_NAME: str = field(default="PKIPROBE")
    CERT_PATTERN: str = field(default="*.crt")
    PERFDATA: bool = field(default=False)

    @staticmethod
    def from_env() -> "Settings":
        log_level = os.getenv("PKIPROBE_LOG_LEVEL", "WARNING").upper()
        program = os.getenv("PKIPROBE_PROGRAM_NAME", "").strip() or "PKIPROBE"
        pattern = os.getenv("PKIPROBE_CERT_PATTERN", "").strip() or "*.crt"
        perfdata = os.getenv("PKIPROBE_PERFDATA", "false").lower() in _TRUE
        return Settings(
            LOG_LEVEL=log_level,
            PROGRAM_NAME=program,
            CERT_PATTERN=pattern,
            PERFDATA=perfdata,
        )
