import logging
from typing import TYPE_CHECKING, Optional

from ..context import OperationContext
from ..exceptions import RedisCloudError, TaskFailedError
from .models import Task

if TYPE_CHECKING:
    from .core import RedisCloudClient

logger = logging.getLogger(__name__)

TASK_COMPLETED = "processing-completed"
TASK_FAILED = "processing-error"
TASK_PENDING = frozenset({"initialized", "received", "processing-in-progress"})

DEFAULT_TASK_POLL_INTERVAL = 10


class TaskService:
    """Tracks the asynchronous tasks the API hands back for every mutating request"""

    def __init__(self, client: "RedisCloudClient", poll_interval: float = DEFAULT_TASK_POLL_INTERVAL):
        self._client = client
        self.poll_interval = poll_interval

    def get(self, task_id: str) -> Task:
        return Task.from_payload(self._client.request("GET", f"/tasks/{task_id}"))

    def wait_for_task(self, task_id: str, ctx: Optional[OperationContext] = None) -> Task:
        """Block until a task completes

        :param task_id: Task returned by a mutating request
        :param ctx: Deadline and cancellation for the wait
        :raises TaskFailedError: if the task ends in ``processing-error`` or an unknown status
        :raises OperationCancelledError: if ``ctx`` is cancelled
        :return: The completed task; ``resource_id`` identifies the affected resource
        """
        ctx = ctx or OperationContext()

        while True:
            ctx.raise_if_cancelled()
            task = self.get(task_id)
            logger.debug("Task %s is %s", task_id, task.status)

            if task.status == TASK_COMPLETED:
                return task
            if task.status == TASK_FAILED:
                raise TaskFailedError(task_id, task.error_description or task.description or "", task.error_type)
            if task.status not in TASK_PENDING:
                raise TaskFailedError(task_id, f"unexpected task status `{task.status}`")
            if ctx.expired():
                raise RedisCloudError(f"timed out waiting for task {task_id} (last status: {task.status})")

            ctx.sleep(self.poll_interval if ctx.remaining() is None else min(self.poll_interval, ctx.remaining()))
