"""
Process-wide logging setup.

Modules keep using `logging.getLogger(__name__)`; this only installs the root
handler once at startup.
"""

from __future__ import annotations

import json
import logging

from . import config

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_configured = False


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=True)


def configure_logging(*, force: bool = False) -> None:
    global _configured
    if _configured and not force:
        return None

    handler = logging.StreamHandler()
    if config.json_logs():
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_FORMAT))

    # Without `force`, an already-configured root logger is left alone.
    logging.basicConfig(level=config.log_level(), handlers=[handler], force=force)
    _configured = True
