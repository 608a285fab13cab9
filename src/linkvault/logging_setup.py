from __future__ import annotations

import logging
from pathlib import Path

from .config import Config

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(config: Config) -> None:
    level = logging.DEBUG if config.verbose else getattr(
        logging, config.log_level.upper(), logging.INFO
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
