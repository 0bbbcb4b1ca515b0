import logging
import time
from typing import TYPE_CHECKING, Optional

import requests

from thunder_rediscloud.lib.config import DEFAULT_CREATE_TIMEOUT, DEFAULT_POLL_DELAY, DEFAULT_POLL_INTERVAL
from ..context import OperationContext
from ..exceptions import ProvisioningFailedError, ProvisioningTimeoutError, RedisCloudApiError
from .types import DatabaseStatus, PENDING_STATUSES

if TYPE_CHECKING:
    from ..client import RedisCloudClient

logger = logging.getLogger(__name__)


def wait_for_database_to_be_active(
    client: "RedisCloudClient",
    subscription_id: int,
    database_id: int,
    ctx: Optional[OperationContext] = None,
    timeout: float = DEFAULT_CREATE_TIMEOUT,
    delay: float = DEFAULT_POLL_DELAY,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> None:
    """Poll a database until its status is ``active``

    A poll that fails with an API error, a transport error or an undecodable body is logged and retried; only the
    deadline ends the wait in that case. The deadline is the earlier of ``timeout`` and the context's own deadline.

    :param client: Redis Cloud client
    :param subscription_id: Subscription owning the database
    :param database_id: Database to watch
    :param ctx: Deadline and cancellation for the wait
    :param timeout: Seconds to wait at most
    :param delay: Seconds to wait before the first poll
    :param poll_interval: Seconds between polls
    :raises ProvisioningTimeoutError: if the database is not active before the deadline
    :raises ProvisioningFailedError: if the database enters ``error`` or an unexpected status
    :raises OperationCancelledError: if ``ctx`` is cancelled; the database is left as it is
    """
    ctx = ctx or OperationContext()
    wait_time = timeout if ctx.remaining() is None else min(timeout, ctx.remaining())
    deadline = time.monotonic() + wait_time

    def seconds_left() -> float:
        return max(0.0, deadline - time.monotonic())

    status = None
    last_error = None

    ctx.sleep(min(delay, seconds_left()))

    while True:
        ctx.raise_if_cancelled()

        try:
            status = client.database.get(subscription_id, database_id).status
            last_error = None
        except (RedisCloudApiError, requests.RequestException) as e:
            logger.warning("Unable to read status of database %d, retrying: %s", database_id, e)
            last_error = e
        else:
            logger.debug("Database %d is %s", database_id, status)

            if status == DatabaseStatus.active.value:
                return
            if status not in PENDING_STATUSES:
                raise ProvisioningFailedError(database_id, status)

        if seconds_left() <= 0:
            raise ProvisioningTimeoutError(database_id, status, wait_time) from last_error

        ctx.sleep(min(poll_interval, seconds_left()))
