from .rediscloud_module import RedisCloudModule
