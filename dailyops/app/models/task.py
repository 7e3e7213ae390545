"""
Task record (a daily check definition).
"""

from dailyops.app.models.base import Record


class Task(Record):
    """
    A check every manager performs each day.

    ``order`` drives display and execution order; it is not required to be
    unique.
    """
    title: str
    description: str = ""
    required: bool = False
    order: int = 0

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', order={self.order})>"
