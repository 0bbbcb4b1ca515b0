import json

import requests
from requests.adapters import BaseAdapter

from thunder_rediscloud.lib.rediscloud.client import Database


def make_database(database_id=1, name="sessions", protocol="redis", status="active", **kwargs) -> Database:
    return Database(database_id=database_id, name=name, protocol=protocol, status=status, **kwargs)


def database_payload(database_id=1, name="sessions", status="active", **extra) -> dict:
    """A database as the REST API serializes it"""
    return {
        "databaseId": database_id,
        "name": name,
        "protocol": "redis",
        "status": status,
        "memoryLimitInGb": 0.1,
        "supportOSSClusterApi": False,
        "dataPersistence": "none",
        "replication": True,
        "throughputMeasurement": {"by": "operations-per-second", "value": 10000},
        "publicEndpoint": "redis-10000.c1.cloud.redislabs.com:10000",
        "privateEndpoint": "redis-10000.internal.c1.cloud.redislabs.com:10000",
        "security": {"sslClientAuthentication": False, "sourceIps": ["0.0.0.0/0"]},
        **extra,
    }


class FakeAdapter(BaseAdapter):
    """Answers every request on a mounted session with ``handler(request) -> (status, body)``

    ``body`` may be a dict or list (sent as JSON), a string, or ``None`` for an empty response.
    """

    def __init__(self, handler):
        super().__init__()
        self.handler = handler
        self.requests = []

    def send(self, request, **kwargs):
        self.requests.append(request)
        status, body = self.handler(request)

        response = requests.Response()
        response.status_code = status
        response.request = request
        response.url = request.url
        response.encoding = "utf-8"
        if body is None:
            response._content = b""
        elif isinstance(body, str):
            response._content = body.encode()
        else:
            response._content = json.dumps(body).encode()
            response.headers["Content-Type"] = "application/json"

        return response

    def close(self):
        pass
