import logging
from typing import TYPE_CHECKING, Optional, Union

import requests

from thunder_rediscloud.lib.config import DEFAULT_CREATE_TIMEOUT, DEFAULT_POLL_DELAY, DEFAULT_POLL_INTERVAL
from ..context import OperationContext
from ..exceptions import AmbiguousResultError, NoResultsError, OperationCancelledError, RedisCloudError
from .encoding import (
    build_create_request,
    build_update_request,
    observe,
    parse_database_id,
    parse_subscription_id,
)
from .filters import DatabaseFilter, by_name, by_protocol, filter_databases
from .spec import DatabaseSpec, ObservedDatabase
from .waiter import wait_for_database_to_be_active

if TYPE_CHECKING:
    from ..client import RedisCloudClient

logger = logging.getLogger(__name__)


class DatabaseReconciler:
    """
    Drives a Redis Cloud database towards a declared :class:`DatabaseSpec`.

    Every operation takes the full spec and an :class:`OperationContext`; nothing is cached between calls.
    """

    def __init__(
        self,
        client: "RedisCloudClient",
        create_timeout: float = DEFAULT_CREATE_TIMEOUT,
        poll_delay: float = DEFAULT_POLL_DELAY,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.client = client
        self.create_timeout = create_timeout
        self.poll_delay = poll_delay
        self.poll_interval = poll_interval

    def create(self, spec: DatabaseSpec, ctx: Optional[OperationContext] = None) -> int:
        """Create the database and block until it is active

        :return: The id assigned by the API
        """
        ctx = ctx or OperationContext()
        subscription_id = parse_subscription_id(spec.subscription_id)

        database_id = self.client.database.create(subscription_id, build_create_request(spec), ctx)

        logger.debug("Created database %d", database_id)

        try:
            wait_for_database_to_be_active(
                self.client,
                subscription_id,
                database_id,
                ctx=ctx,
                timeout=self.create_timeout,
                delay=self.poll_delay,
                poll_interval=self.poll_interval,
            )
        except RedisCloudError:
            # nothing records the id past this point
            logger.warning(
                "Database %d was created on subscription %d but did not become active; it must be imported or "
                "deleted by hand",
                database_id,
                subscription_id,
            )
            raise

        return database_id

    def read(self, spec: DatabaseSpec, ctx: Optional[OperationContext] = None) -> ObservedDatabase:
        """Find the one database matching the declared name and protocol, then fetch it in full

        :raises NoResultsError: if no database matches
        :raises AmbiguousResultError: if more than one database matches
        """
        ctx = ctx or OperationContext()
        subscription_id = parse_subscription_id(spec.subscription_id)

        filters: list[DatabaseFilter] = []
        if spec.name:
            filters.append(by_name(spec.name))
        if spec.protocol:
            filters.append(by_protocol(spec.protocol.value))

        ctx.raise_if_cancelled()
        databases = filter_databases(self.client.database.list(subscription_id), filters)

        if not databases:
            raise NoResultsError()
        if len(databases) > 1:
            raise AmbiguousResultError(len(databases))

        # password and clustering rules only come back from a single get
        ctx.raise_if_cancelled()
        database = self.client.database.get(subscription_id, databases[0].database_id)

        return observe(database)

    def get(
        self,
        spec: DatabaseSpec,
        database_id: Union[str, int],
        ctx: Optional[OperationContext] = None,
    ) -> ObservedDatabase:
        """Fetch a database by the id the API assigned it"""
        ctx = ctx or OperationContext()
        ctx.raise_if_cancelled()

        database = self.client.database.get(
            parse_subscription_id(spec.subscription_id),
            parse_database_id(database_id),
        )

        return observe(database)

    def update(
        self,
        spec: DatabaseSpec,
        database_id: Union[str, int],
        ctx: Optional[OperationContext] = None,
    ) -> None:
        """Resend the whole spec. No provisioning wait follows."""
        ctx = ctx or OperationContext()
        subscription_id = parse_subscription_id(spec.subscription_id)
        database_id = parse_database_id(database_id)

        update = build_update_request(spec)

        logger.debug("Updating database %s (%d)", update.name, database_id)

        self.client.database.update(subscription_id, database_id, update, ctx)

    def delete(
        self,
        spec: DatabaseSpec,
        database_id: Union[str, int],
        ctx: Optional[OperationContext] = None,
    ) -> None:
        """Delete the database, best effort

        A failure reported by the API is logged and not raised, so the caller drops the resource from its state even
        though the database may still exist remotely.
        """
        ctx = ctx or OperationContext()
        subscription_id = parse_subscription_id(spec.subscription_id)
        database_id = parse_database_id(database_id)

        logger.debug("Deleting database %d on subscription %d", database_id, subscription_id)

        try:
            self.client.database.delete(subscription_id, database_id, ctx)
        except OperationCancelledError:
            raise
        except (RedisCloudError, requests.RequestException) as e:
            logger.warning("Failed to delete database %d on subscription %d: %s", database_id, subscription_id, e)
