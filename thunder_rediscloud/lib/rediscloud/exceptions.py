from typing import Optional


class RedisCloudError(Exception):
    """Base class for every error raised by the Redis Cloud library"""


class ConfigurationError(RedisCloudError):
    pass


class ValidationError(RedisCloudError):
    """A declared value was rejected before any API call was made"""


class RedisCloudApiError(RedisCloudError):
    """The API answered with a non-2xx status. The response body is kept verbatim."""

    def __init__(self, method: str, path: str, status_code: int, body: str):
        super().__init__(f"{method} {path} failed with status {status_code}: {body}")
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body


class NotFoundError(RedisCloudApiError):
    pass


class TaskFailedError(RedisCloudError):
    def __init__(self, task_id: str, description: str, error_type: Optional[str] = None):
        detail = f"{error_type}: {description}" if error_type else description
        super().__init__(f"task {task_id} failed - {detail}")
        self.task_id = task_id
        self.description = description
        self.error_type = error_type


class QueryError(RedisCloudError):
    pass


class NoResultsError(QueryError):
    def __init__(self):
        super().__init__("Your query returned no results. Please change your search criteria and try again.")


class AmbiguousResultError(QueryError):
    def __init__(self, count: int):
        super().__init__(
            f"Your query returned more than one result ({count}). "
            "Please try a more specific search criteria and try again."
        )
        self.count = count


class ProvisioningTimeoutError(RedisCloudError):
    def __init__(self, database_id: int, status: Optional[str], timeout: float):
        super().__init__(
            f"timed out after {timeout:g}s waiting for database {database_id} to become active "
            f"(last status: {status or 'unknown'})"
        )
        self.database_id = database_id
        self.status = status


class ProvisioningFailedError(RedisCloudError):
    def __init__(self, database_id: int, status: str):
        super().__init__(f"database {database_id} entered status `{status}` while waiting for it to become active")
        self.database_id = database_id
        self.status = status


class OperationCancelledError(RedisCloudError):
    pass
