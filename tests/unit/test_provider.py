import pytest

from thunder_rediscloud.lib.rediscloud import RedisCloudApiError
from thunder_rediscloud.lib.rediscloud.database import Protocol
from thunder_rediscloud.lib.rediscloud.settings import ProviderSettings
from thunder_rediscloud.lib.utils import plain_from_dataclass
from thunder_rediscloud.modules.rediscloud.databases.database_provider import (
    DatabaseProvider,
    spec_from_props,
)
from .helpers import make_database


@pytest.fixture
def api(mocker):
    api = mocker.MagicMock(name="RedisCloudClient")
    api.__enter__.return_value = api
    return api


@pytest.fixture
def provider(api) -> DatabaseProvider:
    return DatabaseProvider(ProviderSettings(poll_delay=0, poll_interval=0), client_factory=lambda: api)


@pytest.fixture
def props(spec) -> dict:
    return {
        **plain_from_dataclass(spec),
        "db_id": 51,
        "public_endpoint": "redis-10000.c1.cloud.redislabs.com:10000",
        "private_endpoint": "redis-10000.internal.c1.cloud.redislabs.com:10000",
        "__provider": "serialized provider",
    }


def test_spec_from_props(props):
    props["throughput_measurement_value"] = 10000.0
    props["memory_limit_in_gb"] = 1

    spec = spec_from_props(props)

    assert spec.protocol is Protocol.redis
    assert spec.throughput_measurement_value == 10000
    assert isinstance(spec.throughput_measurement_value, int)
    assert spec.memory_limit_in_gb == 1.0
    assert spec.alerts[0].value == 40


def test_check_passes_valid_props(provider, props):
    result = provider.check({}, props)

    assert result.inputs == props
    assert result.failures == []


def test_check_reports_failures(provider, props):
    props["subscription_id"] = "sub-1234"
    props["source_ips"] = ["10.0.0.1"]

    result = provider.check({}, props)

    assert sorted(failure.property for failure in result.failures) == ["source_ips", "subscription_id"]


def test_diff_without_changes(provider, props):
    news = {**props, "alerts": list(reversed(props["alerts"]))}

    result = provider.diff("51", props, news)

    assert result.changes is False
    assert result.replaces == []


def test_diff_in_place(provider, props):
    result = provider.diff("51", props, {**props, "memory_limit_in_gb": 1.0})

    assert result.changes is True
    assert result.replaces == []


@pytest.mark.parametrize("key, value", [("subscription_id", "5678"), ("protocol", "memcached")])
def test_diff_replaces(provider, props, key, value):
    result = provider.diff("51", props, {**props, key: value})

    assert result.changes is True
    assert result.replaces == [key]
    assert result.delete_before_replace is True


def test_create(provider, api, props, full_database):
    api.database.create.return_value = 51
    api.database.get.return_value = full_database

    result = provider.create(props)

    assert result.id == "51"
    assert result.outs["db_id"] == 51
    assert result.outs["public_endpoint"] == full_database.public_endpoint
    assert result.outs["private_endpoint"] == full_database.private_endpoint
    assert result.outs["hashing_policy"] == [".*\\{(?<tag>.*)\\}.*", "(?<tag>.*)"]
    assert "__provider" not in result.outs


def test_create_reports_database_that_cannot_be_read_back(mocker, provider, api, props):
    log = mocker.patch("thunder_rediscloud.modules.rediscloud.databases.database_provider.log")
    api.database.create.return_value = 51
    api.database.get.side_effect = [
        make_database(51, status="active"),
        RedisCloudApiError("GET", "/subscriptions/1234/databases/51", 503, "unavailable"),
    ]

    with pytest.raises(RedisCloudApiError):
        provider.create(props)

    assert "database 51" in log.warn.call_args.args[0]


def test_read(provider, api, props, full_database):
    api.database.list.return_value = [make_database(51), make_database(52, name="cache")]
    full_database.password = None
    api.database.get.return_value = full_database

    result = provider.read("51", props)

    assert result.id == "51"
    assert result.outs["password"] == "s3cret"
    assert result.outs["replica_of"] == []


def test_update_carries_computed_outputs(provider, api, props):
    result = provider.update("51", props, {**props, "memory_limit_in_gb": 1.0})

    api.database.update.assert_called_once()
    assert result.outs["memory_limit_in_gb"] == 1.0
    assert result.outs["db_id"] == 51
    assert result.outs["public_endpoint"] == props["public_endpoint"]


def test_delete(provider, api, props):
    provider.delete("51", props)

    assert api.database.delete.call_args.args[:2] == (1234, 51)
    api.__exit__.assert_called_once()
