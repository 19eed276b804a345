"""Observability utilities and metrics."""

from .metrics import reconcile_repairs, sync_misses, sync_processing_time, sync_writes, tasks_created, tasks_deleted, users_created, users_deleted

__all__ = [
    # Entity metrics
    "users_created",
    "users_deleted",
    "tasks_created",
    "tasks_deleted",
    # Synchronization metrics
    "sync_writes",
    "sync_misses",
    "sync_processing_time",
    # Reconciliation metrics
    "reconcile_repairs",
]
