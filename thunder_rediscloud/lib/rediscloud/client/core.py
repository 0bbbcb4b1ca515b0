import logging
import os
from typing import Any, Optional

import requests

from thunder_rediscloud.lib.config import DEFAULT_API_URL
from ..exceptions import ConfigurationError, NotFoundError, RedisCloudApiError
from .databases import DatabaseService
from .tasks import TaskService

logger = logging.getLogger(__name__)

ACCESS_KEY_ENV = "REDISCLOUD_ACCESS_KEY"
SECRET_KEY_ENV = "REDISCLOUD_SECRET_KEY"
URL_ENV = "REDISCLOUD_URL"

USER_AGENT = "thunder-rediscloud"


class RedisCloudClient:
    """
    Thin client for the Redis Cloud REST API.

    Authentication and transport live here only. Services hang off the client::

        with RedisCloudClient.from_env() as client:
            database = client.database.get(subscription_id, database_id)

    Keys are sent as headers on every request and never written anywhere else.
    """

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        url: str = DEFAULT_API_URL,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url.rstrip("/")
        self.timeout = timeout

        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "x-api-key": access_key,
                "x-api-secret-key": secret_key,
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            }
        )

        self.task = TaskService(self)
        self.database = DatabaseService(self)

    @classmethod
    def from_env(cls, url: Optional[str] = None, **kwargs) -> "RedisCloudClient":
        """Build a client from ``REDISCLOUD_ACCESS_KEY``, ``REDISCLOUD_SECRET_KEY`` and ``REDISCLOUD_URL``

        :param url: Configured API URL. Wins over ``REDISCLOUD_URL``, which wins over the public API.
        :raises ConfigurationError: if either key is missing
        """
        access_key = os.environ.get(ACCESS_KEY_ENV)
        secret_key = os.environ.get(SECRET_KEY_ENV)

        missing = [name for name, value in ((ACCESS_KEY_ENV, access_key), (SECRET_KEY_ENV, secret_key)) if not value]
        if missing:
            raise ConfigurationError(f"`{'`, `'.join(missing)}` must be set to use the Redis Cloud API")

        return cls(
            access_key=access_key,
            secret_key=secret_key,
            url=url or os.environ.get(URL_ENV) or DEFAULT_API_URL,
            **kwargs,
        )

    def request(self, method: str, path: str, **kwargs) -> Any:
        """Send a request and return the decoded JSON body

        Connection failures and timeouts propagate as ``requests`` exceptions.

        :raises NotFoundError: on a 404
        :raises RedisCloudApiError: on any other non-2xx status
        :return: Decoded body, ``None`` when the response is empty
        """
        logger.debug("%s %s", method, path)
        response = self._session.request(method, f"{self.url}{path}", timeout=self.timeout, **kwargs)

        if response.status_code == 404:
            raise NotFoundError(method, path, response.status_code, response.text)
        if not response.ok:
            raise RedisCloudApiError(method, path, response.status_code, response.text)

        return response.json() if response.content else None

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "RedisCloudClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
