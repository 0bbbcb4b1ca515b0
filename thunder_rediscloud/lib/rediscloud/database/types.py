from enum import Enum


class Protocol(Enum):
    redis = "redis"
    """Redis protocol, the default"""

    memcached = "memcached"
    """Memcached protocol, for legacy applications"""


class ThroughputMeasurementBy(Enum):
    number_of_shards = "number-of-shards"
    """Throughput is provisioned as a shard count"""

    operations_per_second = "operations-per-second"
    """Throughput is provisioned as operations per second"""


class AlertName(Enum):
    dataset_size = "dataset-size"
    datasets_size = "datasets-size"
    throughput_higher_than = "throughput-higher-than"
    throughput_lower_than = "throughput-lower-than"
    latency = "latency"
    syncsource_error = "syncsource-error"
    syncsource_lag = "syncsource-lag"
    connections_limit = "connections-limit"


class DatabaseStatus(Enum):
    draft = "draft"
    pending = "pending"
    active = "active"
    active_change_pending = "active-change-pending"
    active_upgrade_pending = "active-upgrade-pending"
    error = "error"


PENDING_STATUSES = frozenset(
    {
        DatabaseStatus.draft.value,
        DatabaseStatus.pending.value,
        DatabaseStatus.active_change_pending.value,
        DatabaseStatus.active_upgrade_pending.value,
    }
)
"""Statuses a database passes through on its way to ``active``."""
