from .databases import RedisCloudDatabases
