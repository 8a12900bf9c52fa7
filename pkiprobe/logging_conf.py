import datetime as dt
import json
import logging
import os
from typing import Any

from .settings import Settings

# champs passés via extra= par scanner, reader, evaluator et run_check
CONTEXT_FIELDS = ("base_dir", "cert_path", "serial", "status")


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": dt.datetime.fromtimestamp(record.created, dt.timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = str(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(settings: Settings, json_mode: bool | None = None) -> None:
    """Attach a single stderr handler to the root logger.

    stdout is reserved for the plugin line, so nothing here may write to it.
    Calling this more than once is a no-op.
    """
    root = logging.getLogger()
    if getattr(root, "_pkiprobe_configured", False):
        return

    level = getattr(logging, settings.LOG_LEVEL, logging.WARNING)
    root.setLevel(level)

    if json_mode is None:
        json_mode = os.getenv("PKIPROBE_LOG_JSON", "false").lower() in ("1", "true", "yes")

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(_JsonFormatter() if json_mode else logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)

    setattr(root, "_pkiprobe_configured", True)
