from typing import Any, Callable, Optional

import requests
from pulumi import dynamic, log, Output, ResourceOptions

from thunder_rediscloud.lib.config import map_config
from thunder_rediscloud.lib.rediscloud import OperationContext, RedisCloudError
from thunder_rediscloud.lib.rediscloud.client import RedisCloudClient
from thunder_rediscloud.lib.rediscloud.database import (
    DatabaseReconciler,
    DatabaseSpec,
    state_from_observed,
    validate_database_props,
)
from thunder_rediscloud.lib.rediscloud.settings import ProviderSettings
from thunder_rediscloud.lib.utils import plain_from_dataclass

COMPUTED_KEYS = ("db_id", "public_endpoint", "private_endpoint")
"""Properties the API assigns."""

REPLACE_KEYS = ("subscription_id", "protocol")
"""Properties the update request cannot carry, so a change replaces the database."""

_SET_KEYS = ("replica_of", "alerts", "source_ips")
_INPUT_KEYS = tuple(DatabaseSpec.__dataclass_fields__)


def spec_from_props(props: dict) -> DatabaseSpec:
    """Map resource properties onto a DatabaseSpec, ignoring computed and internal keys"""
    return map_config(DatabaseSpec, {k: v for k, v in props.items() if k in _INPUT_KEYS}, strict=False)


def _normalize(key: str, value: Any) -> Any:
    if key in _SET_KEYS:
        return sorted((value or []), key=repr)
    if key in ("modules", "hashing_policy"):
        return list(value or [])
    return value


class DatabaseProvider(dynamic.ResourceProvider):
    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        client_factory: Optional[Callable[[], RedisCloudClient]] = None,
    ):
        super().__init__()
        self.settings = settings or ProviderSettings()
        self.client_factory = client_factory

    def _new_client(self) -> RedisCloudClient:
        return self.client_factory() if self.client_factory else self.settings.new_client()

    def _reconciler(self, client: RedisCloudClient) -> DatabaseReconciler:
        return DatabaseReconciler(
            client,
            create_timeout=self.settings.create_timeout,
            poll_delay=self.settings.poll_delay,
            poll_interval=self.settings.poll_interval,
        )

    def check(self, _olds: dict, news: dict) -> dynamic.CheckResult:
        """
        Validate the declared properties
        :param _olds:
        :param news:
        :return:
        """
        failures = [dynamic.CheckFailure(prop, reason) for prop, reason in validate_database_props(news)]
        return dynamic.CheckResult(news, failures)

    def diff(self, _id: str, olds: dict, news: dict) -> dynamic.DiffResult:
        """
        Compare the stored state with the declared properties
        :param _id:
        :param olds:
        :param news:
        :return:
        """
        changes = [key for key in _INPUT_KEYS if _normalize(key, olds.get(key)) != _normalize(key, news.get(key))]

        return dynamic.DiffResult(
            changes=bool(changes),
            replaces=[key for key in changes if key in REPLACE_KEYS],
            stables=list(COMPUTED_KEYS),
            delete_before_replace=True,
        )

    def create(self, props: dict) -> dynamic.CreateResult:
        """
        Create the database and wait for it to become active
        :param props:
        :return:
        """
        spec = spec_from_props(props)

        with self._new_client() as client:
            reconciler = self._reconciler(client)
            database_id = reconciler.create(spec, OperationContext(timeout=self.settings.create_timeout))
            try:
                observed = reconciler.get(spec, database_id, OperationContext(timeout=self.settings.read_timeout))
            except (RedisCloudError, requests.RequestException):
                log.warn(f"database {database_id} is active but could not be read back, it is not in the state")
                raise

        return dynamic.CreateResult(str(database_id), state_from_observed(plain_from_dataclass(spec), observed))

    def read(self, id_: str, props: dict) -> dynamic.ReadResult:
        """
        Refresh the state by looking the database up by name and protocol
        :param id_:
        :param props:
        :return:
        """
        spec = spec_from_props(props)

        with self._new_client() as client:
            observed = self._reconciler(client).read(spec, OperationContext(timeout=self.settings.read_timeout))

        return dynamic.ReadResult(str(observed.database_id), state_from_observed(plain_from_dataclass(spec), observed))

    def update(self, id_: str, olds: dict, news: dict) -> dynamic.UpdateResult:
        """
        Resend the full declared state; the computed properties are carried over
        :param id_:
        :param olds:
        :param news:
        :return:
        """
        spec = spec_from_props(news)

        with self._new_client() as client:
            self._reconciler(client).update(spec, id_, OperationContext(timeout=self.settings.update_timeout))

        return dynamic.UpdateResult(
            {**plain_from_dataclass(spec), **{key: olds.get(key) for key in COMPUTED_KEYS}},
        )

    def delete(self, id_: str, props: dict) -> None:
        """
        Delete the database. A remote failure is logged and the resource still leaves the state.
        :param id_:
        :param props:
        :return:
        """
        spec = spec_from_props(props)

        with self._new_client() as client:
            self._reconciler(client).delete(spec, id_, OperationContext(timeout=self.settings.delete_timeout))


class Database(dynamic.Resource):
    db_id: Output[int]
    public_endpoint: Output[str]
    private_endpoint: Output[str]

    def __init__(
        self,
        name: str,
        spec: DatabaseSpec,
        settings: Optional[ProviderSettings] = None,
        opts: Optional[ResourceOptions] = None,
    ):
        props = {
            **plain_from_dataclass(spec),
            **{key: None for key in COMPUTED_KEYS},
        }
        super().__init__(
            DatabaseProvider(settings),
            name,
            props,
            ResourceOptions.merge(opts, ResourceOptions(additional_secret_outputs=["password"])),
        )
