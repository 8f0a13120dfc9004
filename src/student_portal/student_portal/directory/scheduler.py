from __future__ import annotations

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler

from ..core.constants import DEFAULT_REFRESH_SECONDS
from ..core.exceptions import RefreshFailure
from .cache import DirectoryCache

logger = logging.getLogger(__name__)

JOB_ID = "directory-refresh"


class DirectoryRefresher:
    """Runs DirectoryCache.refresh on a fixed interval in a background thread.

    Failures are logged and recorded on the cache status; the previous
    directory keeps serving until the next tick succeeds.
    """

    def __init__(
        self,
        directory: DirectoryCache,
        *,
        interval_seconds: int = DEFAULT_REFRESH_SECONDS,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self._directory = directory
        self._interval = int(interval_seconds)
        self._scheduler = scheduler or BackgroundScheduler(daemon=True)

    @property
    def running(self) -> bool:
        return bool(self._scheduler.running)

    def run_once(self) -> bool:
        try:
            count = self._directory.refresh()
        except RefreshFailure as exc:
            logger.error("Directory refresh failed, keeping previous directory: %s", exc)
            return False
        except Exception:
            logger.exception("Unexpected error during directory refresh")
            return False
        logger.debug("Directory refresh ok (%d entries)", count)
        return True

    def start(self) -> None:
        if self.running:
            return
        self._scheduler.add_job(
            self.run_once,
            "interval",
            seconds=self._interval,
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info("Directory refresh scheduled every %ds", self._interval)

    def shutdown(self) -> None:
        if self.running:
            self._scheduler.shutdown(wait=False)
