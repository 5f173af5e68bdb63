import json
import logging
from datetime import datetime, timezone
from typing import Any

LOGGER_NAMESPACE = "asset_console"


def configure_logging(level: str = "INFO") -> None:
    logging.getLogger(LOGGER_NAMESPACE).setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    root = logging.getLogger(LOGGER_NAMESPACE)
    if root.handlers:
        return logger
    root.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    logger.log(
        level,
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "module": module,
                "action": action,
                "outcome": outcome,
                **fields,
            },
            ensure_ascii=False,
            default=str,
        ),
    )
