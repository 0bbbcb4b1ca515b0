import ipaddress
import re
from urllib.parse import urlparse

from .types import AlertName, Protocol, ThroughputMeasurementBy

MAX_NAME_LENGTH = 40
MAX_MODULES = 1

_REQUIRED = (
    "subscription_id",
    "name",
    "protocol",
    "memory_limit_in_gb",
    "password",
    "throughput_measurement_by",
    "throughput_measurement_value",
)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value) -> bool:
    return _is_number(value) and float(value).is_integer()


def _is_cidr(value) -> bool:
    if not isinstance(value, str) or "/" not in value:
        return False
    try:
        ipaddress.ip_network(value, strict=False)
    except ValueError:
        return False
    return True


def _is_redis_uri(value) -> bool:
    if not isinstance(value, str):
        return False
    parsed = urlparse(value)
    return parsed.scheme == "redis" and bool(parsed.hostname)


def validate_database_props(props: dict) -> list[tuple[str, str]]:
    """Check database resource properties before anything is sent to the API

    :param props: Raw resource properties
    :return: ``(property, reason)`` for every violation, empty when the properties are valid
    """
    failures = []

    for key in _REQUIRED:
        if props.get(key) in (None, ""):
            failures.append((key, f"`{key}` is required"))

    subscription_id = props.get("subscription_id")
    if subscription_id not in (None, "") and not re.fullmatch(r"[0-9]+", str(subscription_id)):
        failures.append(("subscription_id", "must be a number"))

    name = props.get("name")
    if isinstance(name, str) and len(name) > MAX_NAME_LENGTH:
        failures.append(("name", f"must be at most {MAX_NAME_LENGTH} characters, got {len(name)}"))

    protocol = props.get("protocol")
    if protocol and protocol not in {p.value for p in Protocol}:
        failures.append(("protocol", f"expected one of {[p.value for p in Protocol]}, got `{protocol}`"))

    by = props.get("throughput_measurement_by")
    if by and by not in {t.value for t in ThroughputMeasurementBy}:
        failures.append(
            (
                "throughput_measurement_by",
                f"expected one of {[t.value for t in ThroughputMeasurementBy]}, got `{by}`",
            )
        )

    for key in ("memory_limit_in_gb", "throughput_measurement_value", "average_item_size_in_bytes"):
        value = props.get(key)
        if value is not None and not _is_number(value):
            failures.append((key, f"must be a number, got `{value}`"))

    for uri in props.get("replica_of") or []:
        if not _is_redis_uri(uri):
            failures.append(("replica_of", f"`{uri}` is not a URL with the `redis` scheme"))

    alert_names = {a.value for a in AlertName}
    for alert in props.get("alerts") or []:
        if alert.get("name") not in alert_names:
            failures.append(("alerts", f"unknown alert name `{alert.get('name')}`"))
        if not _is_integer(alert.get("value")):
            failures.append(("alerts", f"alert `{alert.get('name')}` value must be an integer"))

    modules = props.get("modules") or []
    if len(modules) > MAX_MODULES:
        failures.append(("modules", f"at most {MAX_MODULES} module can be enabled, got {len(modules)}"))
    for module in modules:
        if not module.get("name"):
            failures.append(("modules", "module `name` is required"))

    for cidr in props.get("source_ips") or []:
        if not _is_cidr(cidr):
            failures.append(("source_ips", f"`{cidr}` is not a valid CIDR"))

    return failures
