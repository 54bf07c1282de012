# logger_utils.py - logging setup and timing helper for the CLI and harness

from __future__ import annotations
import logging
import time
from typing import Optional

from rich.logging import RichHandler

PACKAGE_LOGGER = "smart_autofill"
FILE_FORMAT = "[%(asctime)s] %(levelname)-7s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def setup_logging(level: str = "WARNING", log_path: Optional[str] = None) -> logging.Logger:
    """
    Attach a rich console handler (and optionally a plain file handler) to the
    package logger. Safe to call more than once, old handlers are replaced.
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    root.setLevel(level.upper())
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    console = RichHandler(show_path=False, rich_tracebacks=True)
    console.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(console)

    if log_path:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        root.addHandler(fh)

    root.propagate = False
    return root


class time_block:
    """
    Measure how long a block takes and log it as a metric.
    To use:
        with time_block("training"):
            engine.train(tokens)
    """

    def __init__(self, label: str, log: Optional[logging.Logger] = None) -> None:
        self.label = label
        self.log = log or logger
        self.elapsed = 0.0

    def __enter__(self) -> "time_block":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed = time.perf_counter() - self.start
        self.log.info("%s done: %.3fs", self.label, self.elapsed)
