"""Reporters receive batches of metric readings from the registry."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional


class LoggingReporter:
    """Writes every reported metric reading to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger(__name__)
        self._level = level

    def report_metrics(self, entries: Iterable[Dict[str, object]]) -> None:
        for entry in entries:
            if entry.get("error"):
                self._logger.warning(
                    f"{entry['name']} unavailable: {entry['error']} "
                    f"dimensions={entry['dimensions']}"
                )
                continue
            self._logger.log(
                self._level,
                f"{entry['name']}={entry['value']} dimensions={entry['dimensions']}",
            )
