from .core import (
    DEFAULT_API_URL,
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
from .mapper import get_stack_config, map_config
from .thunder_env import thunder_env, ThunderConfigException
