"""Structured JSON logging for streamchat."""

import json
import logging
import traceback as tb_module
from datetime import datetime, timezone

from streamchat.shared.entities import Diagnostic


class _JsonFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record):
        entry = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        if getattr(record, "session_id", None):
            entry["session_id"] = record.session_id
        if getattr(record, "model", None):
            entry["model"] = record.model
        diagnostic = getattr(record, "diagnostic", None)
        if diagnostic is not None:
            if isinstance(diagnostic, Diagnostic):
                entry["diagnostic"] = diagnostic.to_dict()
            elif isinstance(diagnostic, dict):
                entry["diagnostic"] = diagnostic
        if record.exc_info and record.exc_info[0] is not None:
            entry["error_type"] = record.exc_info[0].__name__
            entry["error_message"] = str(record.exc_info[1])
            entry["stack_trace"] = tb_module.format_exception(*record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def create_logger(name: str, debug: bool = False) -> logging.Logger:
    """Create a structured JSON logger."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger
