from typing import Optional

from pulumi import Config

from .thunder_env import thunder_env

DEFAULT_API_URL = "https://api.redislabs.com/v1"
"""Base URL of the Redis Cloud REST API."""

DEFAULT_CREATE_TIMEOUT = 30 * 60
DEFAULT_READ_TIMEOUT = 10 * 60
DEFAULT_UPDATE_TIMEOUT = 30 * 60
DEFAULT_DELETE_TIMEOUT = 10 * 60

DEFAULT_POLL_DELAY = 30
DEFAULT_POLL_INTERVAL = 10

rediscloud_config = Config("rediscloud")


def get_api_url() -> Optional[str]:
    """
    Returns the Redis Cloud API URL configured for this program.

    The `rediscloud:url` stack setting wins over `rediscloud_url` in Thunder.common.yaml. When neither is set the
    client falls back to `REDISCLOUD_URL`, then to the public API.

    :return: API base URL, or None when not configured
    """
    return rediscloud_config.get("url") or thunder_env.get("rediscloud_url")


def get_create_timeout() -> float:
    """Seconds a create may take, provisioning wait included"""
    return float(thunder_env.get("rediscloud_create_timeout", DEFAULT_CREATE_TIMEOUT))


def get_poll_delay() -> float:
    """Seconds to wait before the first status poll of a new database"""
    return float(thunder_env.get("rediscloud_poll_delay", DEFAULT_POLL_DELAY))


def get_poll_interval() -> float:
    return float(thunder_env.get("rediscloud_poll_interval", DEFAULT_POLL_INTERVAL))
