"""
Notification Dispatcher

Fans a newly created job out to every worker whose skills match its
category. Each worker is handled on its own thread: the inbox record is
stored, then a push is attempted regardless of whether the store succeeded.
One worker's failure never affects another, and dispatch never raises.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from matching import NearbyMatcher
from shared import Database, get_structured_logger
from shared.errors import ExternalDeliveryError

from .base_notifier import BaseNotifier
from .queries import INSERT_WORKER_NOTIFICATION
from .records import NotificationRecord, new_job_record

logger = logging.getLogger(__name__)


@dataclass
class WorkerDispatchOutcome:
    """What happened for a single worker during fan-out."""

    worker_id: int
    stored: bool = False
    pushed: bool = False
    error: str | None = None


@dataclass
class DispatchResult:
    """Per-worker outcomes of one dispatch. Partial failure is not an error."""

    job_id: Any = None
    results: dict[int, WorkerDispatchOutcome] = field(default_factory=dict)

    @property
    def matched_count(self) -> int:
        return len(self.results)

    @property
    def stored_count(self) -> int:
        return sum(1 for outcome in self.results.values() if outcome.stored)

    @property
    def pushed_count(self) -> int:
        return sum(1 for outcome in self.results.values() if outcome.pushed)


class NotificationDispatcher:
    """
    Best-effort new-job fan-out.

    Works with any BaseNotifier implementation for push delivery; the
    notifier is injected, never looked up globally.
    """

    def __init__(
        self,
        database: Database,
        notifier: BaseNotifier,
        matcher: NearbyMatcher | None = None,
        max_workers: int | None = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            database: Database connection interface (implements Database protocol)
            notifier: Push transport (e.g., WebPushNotifier)
            matcher: Matcher used to find candidate workers (default: NearbyMatcher(database))
            max_workers: Optional cap on concurrent worker branches (default: one per worker)
        """
        if not database:
            raise ValueError("Database is required")
        if not notifier:
            raise ValueError("Notifier is required")

        self.db = database
        self.notifier = notifier
        self.matcher = matcher or NearbyMatcher(database)
        self.max_workers = max_workers

    def store_notification(self, record: NotificationRecord) -> int:
        """Append a record to its worker's inbox and return the notification id."""
        with self.db.get_cursor() as cur:
            cur.execute(
                INSERT_WORKER_NOTIFICATION,
                (
                    record.worker_id,
                    record.type.value,
                    record.message,
                    record.job_id,
                    record.is_read,
                    record.created_at,
                ),
            )
            result = cur.fetchone()
            if not result:
                raise ValueError("Failed to store notification")
            record.notification_id = result[0]
            return record.notification_id

    def push(self, worker: dict[str, Any], job: dict[str, Any]) -> None:
        """Attempt one push delivery.

        Raises:
            ExternalDeliveryError: If the transport reports a failure
        """
        try:
            delivered = self.notifier.send_new_job_notification(worker=worker, job=job)
        except Exception as e:
            raise ExternalDeliveryError(f"Push transport error: {e}") from e

        if not delivered:
            raise ExternalDeliveryError("Push transport did not accept the notification")

    def notify_worker(
        self, worker: dict[str, Any], job: dict[str, Any], now: datetime
    ) -> WorkerDispatchOutcome:
        """Store and push one worker's notification. Never raises."""
        worker_id = worker["worker_id"]
        log = get_structured_logger(__name__, job_id=job.get("job_id"), worker_id=worker_id)
        outcome = WorkerDispatchOutcome(worker_id=worker_id)

        try:
            self.store_notification(new_job_record(worker_id, job, now=now))
            outcome.stored = True
            log.info("Notification stored")
        except Exception as e:
            outcome.error = str(e)
            log.error(f"Failed to store notification: {e}", exc_info=True)

        if worker.get("push_subscription") and self.notifier.enabled:
            try:
                self.push(worker, job)
                outcome.pushed = True
                log.info("Push notification sent")
            except ExternalDeliveryError as e:
                log.warning(f"Push delivery failed: {e.message}")

        return outcome

    def dispatch(self, job: dict[str, Any]) -> DispatchResult:
        """
        Notify every matching worker about a new job.

        Args:
            job: Newly created job (job_id, title, category, address)

        Returns:
            DispatchResult with one outcome per matched worker
        """
        result = DispatchResult(job_id=job.get("job_id"))

        if not job.get("category"):
            logger.error(f"Job {job.get('job_id')} is missing category, cannot send notifications")
            return result

        try:
            workers = self.matcher.find_workers_for_job(job)
        except Exception as e:
            logger.error(f"Failed to find workers for job {job.get('job_id')}: {e}", exc_info=True)
            return result

        if not workers:
            logger.info(f"No workers match category '{job['category']}' for job {job.get('job_id')}")
            return result

        now = datetime.now(UTC)
        pool_size = len(workers) if self.max_workers is None else min(len(workers), self.max_workers)

        with ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="dispatch") as executor:
            futures = {
                worker["worker_id"]: executor.submit(self.notify_worker, worker, job, now)
                for worker in workers
            }
            for worker_id, future in futures.items():
                try:
                    result.results[worker_id] = future.result()
                except Exception as e:
                    logger.error(f"Dispatch branch for worker {worker_id} crashed: {e}", exc_info=True)
                    result.results[worker_id] = WorkerDispatchOutcome(worker_id=worker_id, error=str(e))

        logger.info(
            f"Dispatch complete for job {job.get('job_id')}. "
            f"Stored: {result.stored_count}/{result.matched_count}, "
            f"pushed: {result.pushed_count}"
        )
        return result
