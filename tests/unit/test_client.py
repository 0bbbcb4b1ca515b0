import json
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from thunder_rediscloud.lib.config import DEFAULT_API_URL
from thunder_rediscloud.lib.rediscloud import (
    ConfigurationError,
    NotFoundError,
    RedisCloudApiError,
    TaskFailedError,
)
from thunder_rediscloud.lib.rediscloud.client import (
    ACCESS_KEY_ENV,
    SECRET_KEY_ENV,
    URL_ENV,
    CreateDatabase,
    RedisCloudClient,
)
from thunder_rediscloud.lib.rediscloud.client.databases import PAGE_SIZE
from thunder_rediscloud.lib.rediscloud.settings import ProviderSettings
from .helpers import FakeAdapter, database_payload


def _client(adapter: FakeAdapter) -> RedisCloudClient:
    session = requests.Session()
    session.mount("https://", adapter)
    return RedisCloudClient("access", "secret", url="https://api.example.com/v1/", session=session)


def _task(task_id, status, **response):
    return {"taskId": task_id, "status": status, "response": response}


def test_authentication_headers():
    adapter = FakeAdapter(lambda request: (200, database_payload(51)))

    with _client(adapter) as client:
        database = client.database.get(1234, 51)

    request = adapter.requests[0]
    assert database.database_id == 51
    assert request.url == "https://api.example.com/v1/subscriptions/1234/databases/51"
    assert request.headers["x-api-key"] == "access"
    assert request.headers["x-api-secret-key"] == "secret"


def test_get_decodes_nested_blocks():
    payload = database_payload(
        51,
        replicaOf={"endpoints": ["redis://redis-1.example.com:10000"]},
        clustering={"regexRules": [{"ordinal": 1, "pattern": "(?<tag>.*)"}]},
        security={"password": "s3cret", "sourceIps": ["10.0.0.0/16"], "enableTls": True},
        alerts=[{"name": "dataset-size", "value": 40}],
        modules=[{"name": "RedisJSON"}],
    )

    with _client(FakeAdapter(lambda request: (200, payload))) as client:
        database = client.database.get(1234, 51)

    assert database.replica_of == ["redis://redis-1.example.com:10000"]
    assert database.regex_rules[0].pattern == "(?<tag>.*)"
    assert database.password == "s3cret"
    assert database.source_ips == ["10.0.0.0/16"]
    assert database.enable_tls is True
    assert database.throughput_measurement.value == 10000
    assert [module.name for module in database.modules] == ["RedisJSON"]


def test_replica_of_absent():
    with _client(FakeAdapter(lambda request: (200, database_payload(51)))) as client:
        assert client.database.get(1234, 51).replica_of is None


def test_create_waits_for_task():
    tasks = iter([_task("t-1", "received"), _task("t-1", "processing-completed", resourceId=51)])

    def handler(request):
        if request.method == "POST":
            return 202, _task("t-1", "received")
        return 200, next(tasks)

    adapter = FakeAdapter(handler)
    with _client(adapter) as client:
        client.task.poll_interval = 0
        database_id = client.database.create(1234, CreateDatabase(name="sessions", protocol="redis"))

    assert database_id == 51
    assert json.loads(adapter.requests[0].body) == {"name": "sessions", "protocol": "redis"}
    assert [urlparse(request.url).path for request in adapter.requests[1:]] == ["/v1/tasks/t-1", "/v1/tasks/t-1"]


def test_failed_task():
    def handler(request):
        if request.method == "DELETE":
            return 202, _task("t-2", "received")
        return 200, _task("t-2", "processing-error", error={"type": "DATABASE_BUSY", "description": "busy"})

    with _client(FakeAdapter(handler)) as client, pytest.raises(TaskFailedError) as exc_info:
        client.database.delete(1234, 51)

    assert exc_info.value.error_type == "DATABASE_BUSY"
    assert exc_info.value.description == "busy"


def test_list_pages_through_databases():
    offsets = []

    def handler(request):
        offset = int(parse_qs(urlparse(request.url).query)["offset"][0])
        offsets.append(offset)
        count = PAGE_SIZE if offset == 0 else 2
        databases = [database_payload(offset + i) for i in range(count)]
        return 200, {"subscription": [{"subscriptionId": 1234, "databases": databases}]}

    with _client(FakeAdapter(handler)) as client:
        databases = list(client.database.list(1234))

    assert offsets == [0, PAGE_SIZE]
    assert len(databases) == PAGE_SIZE + 2


def test_list_without_databases():
    with _client(FakeAdapter(lambda request: (404, {"message": "not found"}))) as client:
        assert list(client.database.list(1234)) == []


def test_not_found():
    with _client(FakeAdapter(lambda request: (404, "no such database"))) as client:
        with pytest.raises(NotFoundError) as exc_info:
            client.database.get(1234, 51)

    assert exc_info.value.status_code == 404


def test_api_error_keeps_body():
    with _client(FakeAdapter(lambda request: (400, '{"error": "bad certificate"}'))) as client:
        with pytest.raises(RedisCloudApiError) as exc_info:
            client.database.get(1234, 51)

    assert exc_info.value.status_code == 400
    assert "bad certificate" in exc_info.value.body
    assert not isinstance(exc_info.value, NotFoundError)


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv(ACCESS_KEY_ENV, "access")
    monkeypatch.setenv(SECRET_KEY_ENV, "secret")
    monkeypatch.delenv(URL_ENV, raising=False)
    return monkeypatch


def test_from_env_configured_url_wins(credentials):
    credentials.setenv(URL_ENV, "https://env.example.com/v1")

    with ProviderSettings(url="https://stack.example.com/v1").new_client() as client:
        assert client.url == "https://stack.example.com/v1"


def test_from_env_url_from_environment(credentials):
    credentials.setenv(URL_ENV, "https://env.example.com/v1")

    with ProviderSettings().new_client() as client:
        assert client.url == "https://env.example.com/v1"


def test_from_env_default_url(credentials):
    with RedisCloudClient.from_env() as client:
        assert client.url == DEFAULT_API_URL


def test_from_env_missing_keys(monkeypatch):
    monkeypatch.delenv(ACCESS_KEY_ENV, raising=False)
    monkeypatch.delenv(SECRET_KEY_ENV, raising=False)

    with pytest.raises(ConfigurationError) as exc_info:
        RedisCloudClient.from_env()

    assert ACCESS_KEY_ENV in str(exc_info.value)
    assert SECRET_KEY_ENV in str(exc_info.value)
