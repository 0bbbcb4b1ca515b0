from dataclasses import dataclass

from pulumi import Output

from thunder_rediscloud.lib.rediscloud.database import DatabaseSpec


@dataclass
class RedisCloudDatabasesArgs:
    databases: list[DatabaseSpec]
    """Redis Cloud databases to manage, one resource each."""


@dataclass
class DatabaseExports:
    name: str
    """The name the database was declared with."""

    id: Output[str]
    """The provider-assigned unique ID for this managed resource."""

    db_id: Output[int]
    """Identifier of the database, as assigned by Redis Cloud."""

    public_endpoint: Output[str]
    """Public endpoint to access the database."""

    private_endpoint: Output[str]
    """Private endpoint to access the database."""
