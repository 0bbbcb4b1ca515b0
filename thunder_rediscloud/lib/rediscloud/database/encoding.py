import re
from typing import Optional, Union

from ..client.models import (
    CreateDatabase,
    Database,
    DatabaseAlert,
    DatabaseModule,
    RegexRule,
    ThroughputMeasurement,
    UpdateDatabase,
)
from ..exceptions import ValidationError
from .spec import DatabaseSpec, ObservedDatabase

_ID = re.compile(r"[0-9]+")


def _is_id(value) -> bool:
    return _ID.fullmatch(str(value)) is not None


def parse_subscription_id(subscription_id: str) -> int:
    """
    :raises ValidationError: if the subscription id is not a number
    """
    if not _is_id(subscription_id):
        raise ValidationError(f"subscription_id must be a number, got `{subscription_id}`")
    return int(subscription_id)


def parse_database_id(database_id: Union[str, int]) -> int:
    if not _is_id(database_id):
        raise ValidationError(f"database id must be a number, got `{database_id}`")
    return int(database_id)


def apply_tls_policy(request: Union[CreateDatabase, UpdateDatabase], enable_tls: bool, certificate: str) -> None:
    """Encode `enable_tls` and `client_ssl_certificate` onto a create or update request

    | enable_tls | certificate | sent                                |
    |------------|-------------|-------------------------------------|
    | true       | no          | enableTls=true                      |
    | true       | yes         | enableTls=true, certificate         |
    | false      | yes         | certificate only (legacy mTLS)      |
    | false      | no          | enableTls=false                     |

    The certificate is validated by the API, which answers 400 for a malformed one.
    """
    if enable_tls:
        request.enable_tls = True
        if certificate:
            request.client_ssl_certificate = certificate
    elif certificate:
        # enable_tls is left out so older mTLS-only databases keep working
        request.client_ssl_certificate = certificate
    else:
        request.enable_tls = False


def _optional_list(values: list) -> Optional[list]:
    return list(values) if values else None


def build_create_request(spec: DatabaseSpec) -> CreateDatabase:
    create = CreateDatabase(
        dry_run=False,
        name=spec.name,
        protocol=spec.protocol.value,
        memory_limit_in_gb=spec.memory_limit_in_gb,
        support_oss_cluster_api=spec.support_oss_cluster_api,
        data_persistence=spec.data_persistence,
        replication=spec.replication,
        throughput_measurement=ThroughputMeasurement(
            by=spec.throughput_measurement_by.value,
            value=spec.throughput_measurement_value,
        ),
        alerts=_optional_list([DatabaseAlert(name=alert.name.value, value=alert.value) for alert in spec.alerts]),
        replica_of=_optional_list(spec.replica_of),
        password=spec.password,
        source_ip=_optional_list(spec.source_ips),
        modules=_optional_list([DatabaseModule(name=module.name) for module in spec.modules]),
    )

    if spec.average_item_size_in_bytes > 0:
        create.average_item_size_in_bytes = spec.average_item_size_in_bytes

    apply_tls_policy(create, spec.enable_tls, spec.client_ssl_certificate)

    if spec.periodic_backup_path:
        create.periodic_backup_path = spec.periodic_backup_path

    return create


def build_update_request(spec: DatabaseSpec) -> UpdateDatabase:
    """Full-replace update: every field is resent, not just the changed ones"""
    update = UpdateDatabase(
        name=spec.name,
        memory_limit_in_gb=spec.memory_limit_in_gb,
        support_oss_cluster_api=spec.support_oss_cluster_api,
        replication=spec.replication,
        throughput_measurement=ThroughputMeasurement(
            by=spec.throughput_measurement_by.value,
            value=spec.throughput_measurement_value,
        ),
        data_persistence=spec.data_persistence,
        password=spec.password,
        source_ip=_optional_list(spec.source_ips),
        alerts=_optional_list([DatabaseAlert(name=alert.name.value, value=alert.value) for alert in spec.alerts]),
        # an omitted replicaOf means "no change", so a cleared set goes out as []
        replica_of=list(spec.replica_of),
    )

    apply_tls_policy(update, spec.enable_tls, spec.client_ssl_certificate)

    if spec.hashing_policy:
        update.regex_rules = list(spec.hashing_policy)

    if spec.periodic_backup_path:
        update.periodic_backup_path = spec.periodic_backup_path

    return update


def flatten_alerts(alerts: list[DatabaseAlert]) -> list[dict]:
    return [{"name": alert.name, "value": alert.value} for alert in alerts]


def flatten_modules(modules: list[DatabaseModule]) -> list[dict]:
    return [{"name": module.name} for module in modules]


def flatten_regex_rules(rules: list[RegexRule]) -> list[str]:
    return [rule.pattern for rule in sorted(rules, key=lambda rule: rule.ordinal)]


def observe(database: Database) -> ObservedDatabase:
    throughput = database.throughput_measurement

    return ObservedDatabase(
        database_id=database.database_id,
        name=database.name,
        protocol=database.protocol,
        memory_limit_in_gb=database.memory_limit_in_gb,
        support_oss_cluster_api=database.support_oss_cluster_api,
        data_persistence=database.data_persistence,
        replication=database.replication,
        throughput_measurement_by=throughput.by if throughput else None,
        throughput_measurement_value=throughput.value if throughput else None,
        password=database.password or None,
        public_endpoint=database.public_endpoint,
        private_endpoint=database.private_endpoint,
        replica_of=list(database.replica_of) if database.replica_of is not None else None,
        alerts=flatten_alerts(database.alerts),
        modules=flatten_modules(database.modules),
        hashing_policy=flatten_regex_rules(database.regex_rules),
        status=database.status,
    )


def state_from_observed(declared: dict, observed: ObservedDatabase) -> dict:
    """Overlay the observed remote state on the declared properties

    ``password`` and ``replica_of`` keep their declared value when the API did not return one.

    :param declared: Declared properties, as plain values
    :param observed: Result of a read
    :return: Properties to store as the resource's state
    """
    state = {
        **declared,
        "db_id": observed.database_id,
        "name": observed.name,
        "protocol": observed.protocol,
        "memory_limit_in_gb": observed.memory_limit_in_gb,
        "support_oss_cluster_api": observed.support_oss_cluster_api,
        "data_persistence": observed.data_persistence,
        "replication": observed.replication,
        "throughput_measurement_by": observed.throughput_measurement_by,
        "throughput_measurement_value": observed.throughput_measurement_value,
        "public_endpoint": observed.public_endpoint,
        "private_endpoint": observed.private_endpoint,
        "alerts": observed.alerts,
        "modules": observed.modules,
        "hashing_policy": observed.hashing_policy,
    }

    if observed.password is not None:
        state["password"] = observed.password
    if observed.replica_of is not None:
        state["replica_of"] = observed.replica_of

    return state
