from dataclasses import dataclass, field, fields
from typing import Any, Optional


def _payload(obj: Any) -> Any:
    if isinstance(obj, list):
        return [_payload(v) for v in obj]
    elif hasattr(obj, "to_payload"):
        return obj.to_payload()
    else:
        return obj


def _compact(obj: object) -> dict[str, Any]:
    """Serialize a request dataclass, dropping every field left as ``None``

    Each field carries its JSON key in ``metadata["key"]``. Empty lists are kept since the API reads an omitted
    field as "no change" and an empty one as "clear".
    """
    return {
        f.metadata["key"]: _payload(getattr(obj, f.name)) for f in fields(obj) if getattr(obj, f.name) is not None
    }


def _key(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"key": name})


@dataclass
class ThroughputMeasurement:
    by: str
    """Either ``number-of-shards`` or ``operations-per-second``"""

    value: int

    def to_payload(self) -> dict:
        return {"by": self.by, "value": self.value}


@dataclass
class DatabaseAlert:
    name: str
    value: int

    def to_payload(self) -> dict:
        return {"name": self.name, "value": self.value}


@dataclass
class DatabaseModule:
    name: str

    def to_payload(self) -> dict:
        return {"name": self.name}


@dataclass
class RegexRule:
    ordinal: int
    pattern: str


@dataclass
class CreateDatabase:
    """Body of ``POST /subscriptions/{subscriptionId}/databases``"""

    name: Optional[str] = _key("name")
    dry_run: Optional[bool] = _key("dryRun")
    protocol: Optional[str] = _key("protocol")
    memory_limit_in_gb: Optional[float] = _key("memoryLimitInGb")
    support_oss_cluster_api: Optional[bool] = _key("supportOSSClusterApi")
    use_external_endpoint_for_oss_cluster_api: Optional[bool] = _key("useExternalEndpointForOSSClusterApi")
    data_persistence: Optional[str] = _key("dataPersistence")
    replication: Optional[bool] = _key("replication")
    throughput_measurement: Optional[ThroughputMeasurement] = _key("throughputMeasurement")
    average_item_size_in_bytes: Optional[int] = _key("averageItemSizeInBytes")
    replica_of: Optional[list[str]] = _key("replicaOf")
    periodic_backup_path: Optional[str] = _key("periodicBackupPath")
    source_ip: Optional[list[str]] = _key("sourceIp")
    client_ssl_certificate: Optional[str] = _key("clientSslCertificate")
    enable_tls: Optional[bool] = _key("enableTls")
    password: Optional[str] = _key("password")
    alerts: Optional[list[DatabaseAlert]] = _key("alerts")
    modules: Optional[list[DatabaseModule]] = _key("modules")

    def to_payload(self) -> dict[str, Any]:
        return _compact(self)


@dataclass
class UpdateDatabase:
    """Body of ``PUT /subscriptions/{subscriptionId}/databases/{databaseId}``"""

    name: Optional[str] = _key("name")
    memory_limit_in_gb: Optional[float] = _key("memoryLimitInGb")
    support_oss_cluster_api: Optional[bool] = _key("supportOSSClusterApi")
    use_external_endpoint_for_oss_cluster_api: Optional[bool] = _key("useExternalEndpointForOSSClusterApi")
    data_persistence: Optional[str] = _key("dataPersistence")
    replication: Optional[bool] = _key("replication")
    throughput_measurement: Optional[ThroughputMeasurement] = _key("throughputMeasurement")
    replica_of: Optional[list[str]] = _key("replicaOf")
    regex_rules: Optional[list[str]] = _key("regexRules")
    periodic_backup_path: Optional[str] = _key("periodicBackupPath")
    source_ip: Optional[list[str]] = _key("sourceIp")
    client_ssl_certificate: Optional[str] = _key("clientSslCertificate")
    enable_tls: Optional[bool] = _key("enableTls")
    password: Optional[str] = _key("password")
    alerts: Optional[list[DatabaseAlert]] = _key("alerts")

    def to_payload(self) -> dict[str, Any]:
        return _compact(self)


@dataclass
class Database:
    """A database as returned by the list and get calls

    The list call leaves ``password`` and ``regex_rules`` empty, only the single get fills them in.
    """

    database_id: int
    name: str
    protocol: Optional[str] = None
    status: Optional[str] = None
    memory_limit_in_gb: Optional[float] = None
    support_oss_cluster_api: bool = False
    data_persistence: Optional[str] = None
    replication: bool = False
    throughput_measurement: Optional[ThroughputMeasurement] = None
    public_endpoint: Optional[str] = None
    private_endpoint: Optional[str] = None
    replica_of: Optional[list[str]] = None
    """Endpoints this database replicates from, ``None`` when the API sent no replica-of block."""
    regex_rules: list[RegexRule] = field(default_factory=list)
    password: Optional[str] = None
    source_ips: list[str] = field(default_factory=list)
    enable_tls: Optional[bool] = None
    ssl_client_authentication: Optional[bool] = None
    modules: list[DatabaseModule] = field(default_factory=list)
    alerts: list[DatabaseAlert] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "Database":
        throughput = payload.get("throughputMeasurement")
        replica_of = payload.get("replicaOf")
        clustering = payload.get("clustering") or {}
        security = payload.get("security") or {}

        return cls(
            database_id=payload["databaseId"],
            name=payload.get("name", ""),
            protocol=payload.get("protocol"),
            status=payload.get("status"),
            memory_limit_in_gb=payload.get("memoryLimitInGb"),
            support_oss_cluster_api=bool(payload.get("supportOSSClusterApi", False)),
            data_persistence=payload.get("dataPersistence"),
            replication=bool(payload.get("replication", False)),
            throughput_measurement=ThroughputMeasurement(by=throughput.get("by"), value=throughput.get("value"))
            if throughput
            else None,
            public_endpoint=payload.get("publicEndpoint"),
            private_endpoint=payload.get("privateEndpoint"),
            replica_of=list(replica_of.get("endpoints") or []) if replica_of is not None else None,
            regex_rules=[
                RegexRule(ordinal=rule.get("ordinal", i), pattern=rule["pattern"])
                for i, rule in enumerate(clustering.get("regexRules") or [])
            ],
            password=security.get("password"),
            source_ips=list(security.get("sourceIps") or []),
            enable_tls=security.get("enableTls"),
            ssl_client_authentication=security.get("sslClientAuthentication"),
            modules=[DatabaseModule(name=module["name"]) for module in payload.get("modules") or []],
            alerts=[DatabaseAlert(name=alert["name"], value=alert["value"]) for alert in payload.get("alerts") or []],
        )


@dataclass
class Task:
    """An asynchronous request tracked by ``GET /tasks/{taskId}``"""

    task_id: str
    status: str
    command_type: Optional[str] = None
    description: Optional[str] = None
    resource_id: Optional[int] = None
    error_type: Optional[str] = None
    error_description: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "Task":
        response = payload.get("response") or {}
        error = response.get("error") or {}

        return cls(
            task_id=payload["taskId"],
            status=payload.get("status", ""),
            command_type=payload.get("commandType"),
            description=payload.get("description"),
            resource_id=response.get("resourceId"),
            error_type=error.get("type"),
            error_description=error.get("description"),
        )
