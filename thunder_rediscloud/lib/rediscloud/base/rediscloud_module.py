from abc import ABC

from pulumi import ResourceOptions

from thunder_rediscloud.lib.base import BaseModule, ConfigType
from ..settings import get_provider_settings


class RedisCloudModule(BaseModule, ABC):
    """
    Base class for thunder modules managing Redis Cloud resources
    """

    provider: str = "rediscloud"

    def __init__(self, name: str, config: ConfigType, opts: ResourceOptions = None):
        super().__init__(name, config, opts)

        self.settings = get_provider_settings()
