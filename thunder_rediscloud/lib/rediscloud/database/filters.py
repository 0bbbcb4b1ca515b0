from typing import Callable, Iterable

from ..client.models import Database

DatabaseFilter = Callable[[Database], bool]


def by_name(name: str) -> DatabaseFilter:
    return lambda database: database.name == name


def by_protocol(protocol: str) -> DatabaseFilter:
    return lambda database: database.protocol == protocol


def filter_databases(databases: Iterable[Database], filters: list[DatabaseFilter]) -> list[Database]:
    """Keep the databases every filter accepts. No filters keeps everything."""
    return [database for database in databases if all(f(database) for f in filters)]
