import logging
from typing import TYPE_CHECKING, Iterator, Optional

from ..context import OperationContext
from ..exceptions import NotFoundError
from .models import CreateDatabase, Database, UpdateDatabase

if TYPE_CHECKING:
    from .core import RedisCloudClient

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class DatabaseService:
    """Databases of a flexible subscription"""

    def __init__(self, client: "RedisCloudClient"):
        self._client = client

    def create(self, subscription_id: int, create: CreateDatabase, ctx: Optional[OperationContext] = None) -> int:
        """Create a database and wait for the creation task to be accepted

        :return: The new database id
        """
        body = self._client.request("POST", f"/subscriptions/{subscription_id}/databases", json=create.to_payload())
        task = self._client.task.wait_for_task(body["taskId"], ctx)

        logger.debug("Create task %s produced database %s", task.task_id, task.resource_id)

        return int(task.resource_id)

    def get(self, subscription_id: int, database_id: int) -> Database:
        return Database.from_payload(
            self._client.request("GET", f"/subscriptions/{subscription_id}/databases/{database_id}")
        )

    def list(self, subscription_id: int) -> Iterator[Database]:
        """Iterate over every database of a subscription, one page at a time

        A subscription without databases answers 404, which ends the listing.
        """
        offset = 0
        while True:
            try:
                body = self._client.request(
                    "GET",
                    f"/subscriptions/{subscription_id}/databases",
                    params={"offset": offset, "limit": PAGE_SIZE},
                )
            except NotFoundError:
                return

            page = [
                Database.from_payload(database)
                for subscription in body.get("subscription") or []
                for database in subscription.get("databases") or []
            ]
            yield from page

            if len(page) < PAGE_SIZE:
                return
            offset += PAGE_SIZE

    def update(
        self,
        subscription_id: int,
        database_id: int,
        update: UpdateDatabase,
        ctx: Optional[OperationContext] = None,
    ) -> None:
        body = self._client.request(
            "PUT",
            f"/subscriptions/{subscription_id}/databases/{database_id}",
            json=update.to_payload(),
        )
        self._client.task.wait_for_task(body["taskId"], ctx)

    def delete(self, subscription_id: int, database_id: int, ctx: Optional[OperationContext] = None) -> None:
        body = self._client.request("DELETE", f"/subscriptions/{subscription_id}/databases/{database_id}")
        self._client.task.wait_for_task(body["taskId"], ctx)
