from .context import OperationContext
from .exceptions import (
    AmbiguousResultError,
    ConfigurationError,
    NoResultsError,
    NotFoundError,
    OperationCancelledError,
    ProvisioningFailedError,
    ProvisioningTimeoutError,
    QueryError,
    RedisCloudApiError,
    RedisCloudError,
    TaskFailedError,
    ValidationError,
)
