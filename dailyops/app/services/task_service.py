"""
Task Service.

Typed access to the check definitions. Ordering is managed by callers:
moving a task swaps ``order`` values with its neighbour, nothing is
renumbered.
"""

import logging
from typing import List, Optional

from dailyops.app.core.exceptions import ResourceNotFoundError
from dailyops.app.db.document_store import DocumentStore
from dailyops.app.models.task import Task
from dailyops.app.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger("dailyops")


def sort_by_order(tasks: List[Task]) -> List[Task]:
    """Stable sort on ``order``; ties keep storage order."""
    return sorted(tasks, key=lambda task: task.order)


class TaskService:

    def __init__(self, store: DocumentStore[Task]):
        self.store = store

    async def list_tasks(self, ordered: bool = False) -> List[Task]:
        tasks = await self.store.list()
        return sort_by_order(tasks) if ordered else tasks

    async def get_task(self, task_id: str) -> Optional[Task]:
        return await self.store.get(task_id)

    async def create_task(self, task_data: TaskCreate) -> Task:
        """Create a task; without an explicit ``order`` it goes after the last task."""
        data = task_data.model_dump()

        def build(tasks: List[Task]) -> dict:
            if data["order"] is None:
                data["order"] = max((task.order for task in tasks), default=0) + 1
            return data

        task = await self.store.append(build)
        logger.info("Created task %s (order=%d)", task.id, task.order)
        return task

    async def update_task(self, task_id: str, task_data: TaskUpdate) -> Optional[Task]:
        return await self.store.update(task_id, task_data.model_dump(exclude_unset=True))

    async def delete_task(self, task_id: str) -> bool:
        return await self.store.delete(task_id)

    async def move_task(self, task_id: str, direction: str) -> List[Task]:
        """
        Swap ``order`` with the previous (``up``) or next (``down``) task.

        Moving the first task up or the last task down changes nothing.
        Returns the tasks sorted by order.

        Raises:
            ResourceNotFoundError: If the task does not exist
        """
        def swap(tasks: List[Task]) -> List[Task]:
            ordered = sort_by_order(tasks)
            index = next((i for i, task in enumerate(ordered) if task.id == task_id), None)
            if index is None:
                raise ResourceNotFoundError("Task", task_id)

            neighbour_index = index - 1 if direction == "up" else index + 1
            if neighbour_index < 0 or neighbour_index >= len(ordered):
                return tasks

            current, neighbour = ordered[index], ordered[neighbour_index]
            current.order, neighbour.order = neighbour.order, current.order
            return tasks

        tasks = await self.store.modify_all(swap)
        return sort_by_order(tasks)
