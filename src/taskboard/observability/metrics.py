"""Business metrics for the taskboard service.

Defines OpenTelemetry metrics for:
- Users and Tasks: creation and deletion
- Assignment synchronization: writes, tolerated misses, duration
- Reconciliation: repairs applied
"""

from opentelemetry import metrics

meter = metrics.get_meter(__name__)

# =============================================================================
# ENTITY METRICS
# =============================================================================

users_created = meter.create_counter(
    name="taskboard.users.created",
    description="Total users created",
    unit="1",
)

users_deleted = meter.create_counter(
    name="taskboard.users.deleted",
    description="Total users deleted",
    unit="1",
)

tasks_created = meter.create_counter(
    name="taskboard.tasks.created",
    description="Total tasks created",
    unit="1",
)

tasks_deleted = meter.create_counter(
    name="taskboard.tasks.deleted",
    description="Total tasks deleted",
    unit="1",
)

# =============================================================================
# SYNCHRONIZATION METRICS
# =============================================================================

sync_writes = meter.create_counter(
    name="taskboard.sync.writes",
    description="Total secondary writes performed to keep assignments consistent",
    unit="1",
)

sync_misses = meter.create_counter(
    name="taskboard.sync.misses",
    description="Total related entities that could not be resolved during synchronization",
    unit="1",
)

sync_processing_time = meter.create_histogram(
    name="taskboard.sync.processing_time",
    description="Time to propagate an assignment change",
    unit="ms",
)

# =============================================================================
# RECONCILIATION METRICS
# =============================================================================

reconcile_repairs = meter.create_counter(
    name="taskboard.reconcile.repairs",
    description="Total invariant violations repaired by reconciliation",
    unit="1",
)
