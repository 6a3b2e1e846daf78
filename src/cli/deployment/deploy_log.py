"""Timestamped, append-only log of one rollout.

A DeployLog owns a loguru file sink for the duration of ``open()``; only
records emitted through that DeployLog reach its file, so several
instances (or unrelated loguru output) never mix.
"""

from __future__ import annotations

import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger

from src.utils.console_like import ConsoleLike, coalesce_console

from .constants import DEPLOY_LOG_FORMAT, DEPLOY_LOG_NAME


def setup_logging(verbose: bool = False) -> None:
    """Replace loguru's default handler for CLI use.

    Without ``verbose`` nothing is written to stderr by loguru; the rich
    console carries the user-facing output.
    """
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG")


class DeployLog:
    """Lifecycle event log for a single invocation.

    Args:
        log_dir: Directory for the log file; None keeps events off disk
        console: Where to report a log file that cannot be created
        now: Timestamp used in the file name (defaults to the current time)
    """

    def __init__(
        self,
        log_dir: Path | None = None,
        *,
        console: ConsoleLike | None = None,
        now: datetime | None = None,
    ) -> None:
        stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
        self.path = log_dir / DEPLOY_LOG_NAME.format(stamp=stamp) if log_dir else None
        self.console = coalesce_console(console)
        self._token = uuid.uuid4().hex
        self._handler_id: int | None = None
        self._logger = logger.bind(deploy_log=self._token)

    def _owns(self, record: Any) -> bool:
        return record["extra"].get("deploy_log") == self._token

    @property
    def is_open(self) -> bool:
        return self._handler_id is not None

    @contextmanager
    def open(self) -> Iterator[DeployLog]:
        """Attach the file sink; it is flushed and closed on exit."""
        if self.path is not None:
            try:
                self._handler_id = logger.add(
                    str(self.path),
                    format=DEPLOY_LOG_FORMAT,
                    level="INFO",
                    filter=self._owns,
                    mode="a",
                    encoding="utf-8",
                    catch=True,
                )
            except OSError as e:
                self.console.warn(f"Cannot write deploy log {self.path}: {e}")
        try:
            yield self
        finally:
            if self._handler_id is not None:
                logger.remove(self._handler_id)
                self._handler_id = None

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)
