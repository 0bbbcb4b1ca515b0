from .encoding import apply_tls_policy, build_create_request, build_update_request, observe, state_from_observed
from .filters import by_name, by_protocol, filter_databases
from .reconciler import DatabaseReconciler
from .spec import Alert, DatabaseSpec, Module, ObservedDatabase
from .types import AlertName, DatabaseStatus, Protocol, ThroughputMeasurementBy
from .validation import validate_database_props
from .waiter import wait_for_database_to_be_active
