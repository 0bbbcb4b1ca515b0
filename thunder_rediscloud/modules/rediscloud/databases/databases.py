from pulumi import get_stack

from thunder_rediscloud.lib.rediscloud.base import RedisCloudModule
from thunder_rediscloud.lib.rediscloud.database import DatabaseSpec
from .config import DatabaseExports, RedisCloudDatabasesArgs
from .database_provider import Database


class RedisCloudDatabases(RedisCloudModule):
    def build(self, config: RedisCloudDatabasesArgs) -> list[DatabaseExports]:
        return [self._create_database(spec) for spec in config.databases]

    def _create_database(self, spec: DatabaseSpec) -> DatabaseExports:
        database = Database(
            f"{get_stack()}-{spec.name}",
            spec,
            settings=self.settings,
            opts=self.child_opts(),
        )

        return DatabaseExports(
            name=spec.name,
            id=database.id,
            db_id=database.db_id,
            public_endpoint=database.public_endpoint,
            private_endpoint=database.private_endpoint,
        )
