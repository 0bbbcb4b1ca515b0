from dataclasses import dataclass
from typing import Optional

from thunder_rediscloud.lib.config import (
    DEFAULT_CREATE_TIMEOUT,
    DEFAULT_DELETE_TIMEOUT,
    DEFAULT_POLL_DELAY,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_UPDATE_TIMEOUT,
    get_api_url,
    get_create_timeout,
    get_poll_delay,
    get_poll_interval,
)
from thunder_rediscloud.lib.utils import run_once
from .client import RedisCloudClient


@dataclass
class ProviderSettings:
    """
    Non-secret settings the database provider carries into the Pulumi provider process.

    The provider is pickled into the stack state, so credentials are never stored here; the client reads them from
    the environment when an operation runs.
    """

    url: Optional[str] = None
    """Configured API URL. `None` leaves the choice to `REDISCLOUD_URL` and the public API."""

    create_timeout: float = DEFAULT_CREATE_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    update_timeout: float = DEFAULT_UPDATE_TIMEOUT
    delete_timeout: float = DEFAULT_DELETE_TIMEOUT
    poll_delay: float = DEFAULT_POLL_DELAY
    poll_interval: float = DEFAULT_POLL_INTERVAL

    def new_client(self) -> RedisCloudClient:
        return RedisCloudClient.from_env(url=self.url)


@run_once
def get_provider_settings() -> ProviderSettings:
    """Resolve the provider settings for this program from stack config and Thunder.common.yaml

    :return: ProviderSettings
    """
    return ProviderSettings(
        url=get_api_url(),
        create_timeout=get_create_timeout(),
        poll_delay=get_poll_delay(),
        poll_interval=get_poll_interval(),
    )

