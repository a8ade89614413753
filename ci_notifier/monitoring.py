"""
Step Monitoring

Times notifier steps and logs slow or failed ones.
"""

import logging
import time
from typing import Any, Optional

logger = logging.getLogger(__name__)


class StepTracker:
    """
    Context manager for tracking a notifier step.

    Usage:
        with StepTracker("upload screenshots", warn_threshold_seconds=120):
            await upload_group(...)
    """

    def __init__(self, step_name: str, warn_threshold_seconds: Optional[float] = None):
        self.step_name = step_name
        self.warn_threshold_seconds = warn_threshold_seconds
        self._start_time: Optional[float] = None
        self.duration: float = 0.0

    def __enter__(self) -> "StepTracker":
        self._start_time = time.monotonic()
        logger.debug("Starting step: %s", self.step_name)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        end_time = time.monotonic()
        self.duration = end_time - (self._start_time or end_time)

        if exc_val is not None:
            logger.debug("Step failed: %s after %.2fs - %s", self.step_name, self.duration, exc_val)
            # Don't suppress the exception
            return False

        logger.debug("Step completed: %s in %.2fs", self.step_name, self.duration)

        if self.warn_threshold_seconds is not None and self.duration > self.warn_threshold_seconds:
            logger.warning(
                "%s took %.2f seconds (threshold: %.2f)",
                self.step_name,
                self.duration,
                self.warn_threshold_seconds,
            )

        return False
