from __future__ import annotations

import logging
from dataclasses import dataclass

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class SnapshotOptions:
    url: str
    output_path: str
    log_level: str

    def writes_to_stdout(self) -> bool:
        return self.output_path == "-"


@dataclass(frozen=True)
class HydrateOptions:
    cache_file: str
    url: str
    log_level: str


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
