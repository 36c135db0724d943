"""
Logging for the job analysis engine.

Concurrent analyses share module loggers, so every line the engine writes for
one analysis is tagged ``[analysis:xxxxxxxx] [stage]``. The tagging is done by
an adapter around whatever logger the caller injects; nothing here holds
process-wide state apart from what setup_logging installs on the root logger.
"""

import logging
import sys
from typing import Any, MutableMapping, Optional, Tuple

LOG_FORMATS = {
    "simple": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    # One object per line for log aggregators
    "json": '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}',
}

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3")


class AnalysisLogger(logging.LoggerAdapter):
    """
    Adapter that prefixes messages with the analysis id and stage.

    Wraps an existing logger instead of configuring one, so a caller can pass
    its own logger (or a test double) to the engine.
    """

    def __init__(self, logger: logging.Logger, analysis_id: Optional[str] = None, stage: Optional[str] = None):
        super().__init__(logger, {"analysis_id": analysis_id, "stage": stage})

    @property
    def prefix(self) -> str:
        parts = []
        if self.extra.get("analysis_id"):
            parts.append(f"[analysis:{self.extra['analysis_id'][:8]}]")
        if self.extra.get("stage"):
            parts.append(f"[{self.extra['stage']}]")
        return " ".join(parts)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        prefix = self.prefix
        return (f"{prefix} {msg}" if prefix else msg), kwargs


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure the root logger for CLI and server entry points.

    Logs go to stderr so CLI output on stdout stays machine-readable.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: "simple" or "json"
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMATS.get(format, LOG_FORMATS["simple"]), datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
