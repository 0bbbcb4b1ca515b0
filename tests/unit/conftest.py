import pytest

from thunder_rediscloud.lib.rediscloud.client import Database, DatabaseAlert, RegexRule, ThroughputMeasurement
from thunder_rediscloud.lib.rediscloud.database import (
    Alert,
    AlertName,
    DatabaseReconciler,
    DatabaseSpec,
    Protocol,
    ThroughputMeasurementBy,
)
from .helpers import make_database


@pytest.fixture
def spec() -> DatabaseSpec:
    return DatabaseSpec(
        subscription_id="1234",
        name="sessions",
        protocol=Protocol.redis,
        memory_limit_in_gb=0.1,
        password="s3cret",
        throughput_measurement_by=ThroughputMeasurementBy.operations_per_second,
        throughput_measurement_value=10000,
        alerts=[Alert(name=AlertName.dataset_size, value=40)],
    )


@pytest.fixture
def full_database() -> Database:
    """A database as the single get returns it"""
    return make_database(
        database_id=51,
        memory_limit_in_gb=0.1,
        support_oss_cluster_api=False,
        data_persistence="none",
        replication=True,
        throughput_measurement=ThroughputMeasurement(by="operations-per-second", value=10000),
        public_endpoint="redis-10000.c1.us-east-1.ec2.cloud.redislabs.com:10000",
        private_endpoint="redis-10000.internal.c1.us-east-1.ec2.cloud.redislabs.com:10000",
        password="s3cret",
        regex_rules=[RegexRule(ordinal=1, pattern="(?<tag>.*)"), RegexRule(ordinal=0, pattern=".*\\{(?<tag>.*)\\}.*")],
        alerts=[DatabaseAlert(name="dataset-size", value=40)],
    )


@pytest.fixture
def client(mocker):
    return mocker.MagicMock(name="RedisCloudClient")


@pytest.fixture
def reconciler(client) -> DatabaseReconciler:
    return DatabaseReconciler(client, create_timeout=1, poll_delay=0, poll_interval=0)
