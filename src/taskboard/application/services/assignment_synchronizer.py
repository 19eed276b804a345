"""Keeps Task assignments and User pending-task lists mutually consistent.

Every hook runs after the owning service has committed its own write and
performs the secondary writes one after another. There is no transaction:
a related entity that cannot be resolved is logged and skipped, while a
store failure propagates to the caller with the primary write already
committed.
"""

import logging
import time
from dataclasses import dataclass, field

from opentelemetry import trace

from taskboard.domain.entities import UNASSIGNED_USER_NAME, UNKNOWN_USER_NAME, Task, User
from taskboard.domain.repositories import DocumentCollection
from taskboard.observability import reconcile_repairs, sync_misses, sync_processing_time, sync_writes

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

PENDING_TASKS = "pendingTasks"

UNASSIGNED = {"assignedUser": "", "assignedUserName": UNASSIGNED_USER_NAME}


@dataclass
class ReconcileReport:
    """Outcome of a reconciliation pass.

    Attributes:
        dry_run: Whether repairs were only counted, not written
        users_scanned: Number of users inspected
        tasks_scanned: Number of tasks inspected
        stale_pending_removed: pendingTasks entries pointing at missing or foreign tasks
        missing_pending_added: assigned tasks absent from their owner's pendingTasks
        orphaned_tasks_unassigned: tasks assigned to a user that no longer exists
        stale_names_refreshed: tasks whose assignedUserName differed from the owner's name
    """

    dry_run: bool
    users_scanned: int = 0
    tasks_scanned: int = 0
    stale_pending_removed: int = 0
    missing_pending_added: int = 0
    orphaned_tasks_unassigned: int = 0
    stale_names_refreshed: int = 0
    repaired_ids: list[str] = field(default_factory=list)

    @property
    def total_repairs(self) -> int:
        return self.stale_pending_removed + self.missing_pending_added + self.orphaned_tasks_unassigned + self.stale_names_refreshed


class AssignmentSynchronizer:
    """Propagates assignment changes between the users and tasks collections."""

    def __init__(self, users: DocumentCollection, tasks: DocumentCollection):
        self.users = users
        self.tasks = tasks

    async def on_task_created_async(self, task: Task) -> Task:
        """Resolves the assignee of a new task, caches its name and records the task on the user."""
        if not task.is_assigned:
            return task
        start_time = time.time()
        with tracer.start_as_current_span("sync.on_task_created") as span:
            span.set_attribute("task.id", task.id)
            span.set_attribute("task.assigned_user", task.assigned_user)
            user = await self._get_user_async(task.assigned_user)
            if user is None:
                self._miss("user", task.assigned_user, f"task '{task.id}' created")
            else:
                task = await self._assign_task_async(task, user)
            self._record(start_time, "task_created")
        return task

    async def on_task_updated_async(
        self, task: Task, previous_assigned_user: str, new_assigned_user: str, keep_name: bool = False
    ) -> Task:
        """Moves the task between users' pendingTasks when its assignee changed.

        An assignee that cannot be resolved leaves the task named "unknown",
        unless ``keep_name`` is set because the client supplied the name.
        """
        if previous_assigned_user == new_assigned_user:
            return task
        start_time = time.time()
        with tracer.start_as_current_span("sync.on_task_updated") as span:
            span.set_attribute("task.id", task.id)
            span.set_attribute("task.previous_assigned_user", previous_assigned_user)
            span.set_attribute("task.new_assigned_user", new_assigned_user)

            if previous_assigned_user:
                await self._pull_pending_async(previous_assigned_user, task.id)

            if not new_assigned_user:
                if task.assigned_user_name != UNASSIGNED_USER_NAME:
                    task = await self._update_task_async(task, {"assignedUserName": UNASSIGNED_USER_NAME})
            else:
                user = await self._get_user_async(new_assigned_user)
                if user is None:
                    self._miss("user", new_assigned_user, f"task '{task.id}' reassigned")
                    if not keep_name and task.assigned_user_name != UNKNOWN_USER_NAME:
                        task = await self._update_task_async(task, {"assignedUserName": UNKNOWN_USER_NAME})
                else:
                    task = await self._assign_task_async(task, user)
            self._record(start_time, "task_updated")
        return task

    async def on_task_deleted_async(self, task: Task) -> None:
        """Removes a deleted task from its assignee's pendingTasks."""
        if not task.is_assigned:
            return
        start_time = time.time()
        with tracer.start_as_current_span("sync.on_task_deleted") as span:
            span.set_attribute("task.id", task.id)
            span.set_attribute("task.assigned_user", task.assigned_user)
            await self._pull_pending_async(task.assigned_user, task.id)
            self._record(start_time, "task_deleted")

    async def on_user_updated_async(self, user: User, previous_pending_tasks: list[str], new_pending_tasks: list[str]) -> None:
        """Applies a replaced pendingTasks list to the referenced tasks.

        Every task dropped from the list is unassigned. Every task in the new
        list is assigned to ``user`` and taken off its previous owner's list;
        tasks already consistent are left alone.
        """
        start_time = time.time()
        with tracer.start_as_current_span("sync.on_user_updated") as span:
            span.set_attribute("user.id", user.id)
            kept = set(new_pending_tasks)
            removed = [task_id for task_id in dict.fromkeys(previous_pending_tasks) if task_id not in kept]
            span.set_attribute("user.pending_tasks.removed", len(removed))
            span.set_attribute("user.pending_tasks.count", len(kept))

            for task_id in removed:
                task = await self._get_task_async(task_id)
                if task is None:
                    self._miss("task", task_id, f"user '{user.id}' released it")
                    continue
                if not task.is_assigned and task.assigned_user_name == UNASSIGNED_USER_NAME:
                    continue
                await self._update_task_async(task, UNASSIGNED)

            for task_id in dict.fromkeys(new_pending_tasks):
                task = await self._get_task_async(task_id)
                if task is None:
                    self._miss("task", task_id, f"user '{user.id}' claimed it")
                    continue
                if task.assigned_user == user.id and task.assigned_user_name == user.name:
                    continue
                previous_owner = task.assigned_user
                await self._update_task_async(task, {"assignedUser": user.id, "assignedUserName": user.name})
                if previous_owner and previous_owner != user.id:
                    await self._pull_pending_async(previous_owner, task.id)
            self._record(start_time, "user_updated")

    async def on_user_deleted_async(self, user: User) -> int:
        """Unassigns every task still assigned to a deleted user.

        Affected tasks are found by querying the tasks collection, not by
        trusting the user's pendingTasks. Returns the number of tasks modified.
        """
        start_time = time.time()
        with tracer.start_as_current_span("sync.on_user_deleted") as span:
            span.set_attribute("user.id", user.id)
            modified = await self.tasks.update_many_async({"assignedUser": user.id}, UNASSIGNED)
            span.set_attribute("tasks.unassigned", modified)
            if modified:
                sync_writes.add(modified, {"collection": self.tasks.name})
            log.info(f"Unassigned {modified} task(s) from deleted user '{user.id}'")
            self._record(start_time, "user_deleted")
        return modified

    async def reconcile_async(self, dry_run: bool = True) -> ReconcileReport:
        """Scans both collections and repairs assignment inconsistencies.

        Args:
            dry_run: Count the violations without writing anything

        Returns:
            ReconcileReport with one counter per kind of repair
        """
        report = ReconcileReport(dry_run=dry_run)
        with tracer.start_as_current_span("sync.reconcile") as span:
            span.set_attribute("reconcile.dry_run", dry_run)
            users = {str(doc["_id"]): User.from_document(doc) for doc in await self.users.find_async()}
            tasks = {str(doc["_id"]): Task.from_document(doc) for doc in await self.tasks.find_async()}
            report.users_scanned = len(users)
            report.tasks_scanned = len(tasks)

            for task in tasks.values():
                if not task.is_assigned:
                    continue
                owner = users.get(task.assigned_user)
                if owner is None:
                    log.info(f"Task '{task.id}' is assigned to missing user '{task.assigned_user}'")
                    report.orphaned_tasks_unassigned += 1
                    report.repaired_ids.append(task.id)
                    if not dry_run:
                        await self.tasks.update_async(task.id, UNASSIGNED)
                    task.assigned_user = ""
                    continue
                if task.assigned_user_name != owner.name:
                    log.info(f"Task '{task.id}' caches stale user name '{task.assigned_user_name}'")
                    report.stale_names_refreshed += 1
                    report.repaired_ids.append(task.id)
                    if not dry_run:
                        await self.tasks.update_async(task.id, {"assignedUserName": owner.name})
                if task.id not in owner.pending_tasks:
                    log.info(f"Task '{task.id}' missing from pendingTasks of user '{owner.id}'")
                    report.missing_pending_added += 1
                    report.repaired_ids.append(owner.id)
                    if not dry_run:
                        await self.users.add_to_set_async(owner.id, PENDING_TASKS, task.id)

            for user in users.values():
                for task_id in dict.fromkeys(user.pending_tasks):
                    task = tasks.get(task_id)
                    if task is not None and task.assigned_user == user.id:
                        continue
                    log.info(f"User '{user.id}' lists task '{task_id}' it does not own")
                    report.stale_pending_removed += 1
                    report.repaired_ids.append(user.id)
                    if not dry_run:
                        await self.users.pull_async(user.id, PENDING_TASKS, task_id)

            span.set_attribute("reconcile.repairs", report.total_repairs)
            if not dry_run and report.total_repairs:
                reconcile_repairs.add(report.total_repairs)
        return report

    async def _get_user_async(self, user_id: str) -> User | None:
        document = await self.users.get_async(user_id)
        return User.from_document(document) if document is not None else None

    async def _get_task_async(self, task_id: str) -> Task | None:
        document = await self.tasks.get_async(task_id)
        return Task.from_document(document) if document is not None else None

    async def _assign_task_async(self, task: Task, user: User) -> Task:
        task = await self._update_task_async(task, {"assignedUserName": user.name})
        await self.users.add_to_set_async(user.id, PENDING_TASKS, task.id)
        sync_writes.add(1, {"collection": self.users.name})
        return task

    async def _update_task_async(self, task: Task, changes: dict) -> Task:
        document = await self.tasks.update_async(task.id, changes)
        sync_writes.add(1, {"collection": self.tasks.name})
        if document is None:
            self._miss("task", task.id, "it disappeared during synchronization")
            return task
        return Task.from_document(document)

    async def _pull_pending_async(self, user_id: str, task_id: str) -> None:
        if await self.users.pull_async(user_id, PENDING_TASKS, task_id):
            sync_writes.add(1, {"collection": self.users.name})
        else:
            self._miss("user", user_id, f"task '{task_id}' released")

    def _miss(self, entity: str, entity_id: str, context: str) -> None:
        log.debug(f"Skipping missing {entity} '{entity_id}' ({context})")
        sync_misses.add(1, {"entity": entity})

    def _record(self, start_time: float, hook: str) -> None:
        sync_processing_time.record((time.time() - start_time) * 1000, {"hook": hook})
