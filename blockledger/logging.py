from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def setup_logging(log_dir: str = "logs", level: str = "INFO", to_file: bool = False) -> None:
    logger.remove()
    logger.add(sys.stdout, level=level.upper(), serialize=True)
    if to_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        logger.add(
            Path(log_dir) / "app.log",
            rotation="10 MB",
            retention="10 days",
            level=level.upper(),
            serialize=True,
        )


__all__ = ["setup_logging"]
