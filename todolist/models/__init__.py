from .base import Base
from .task import DEADLINE_FORMAT, Task, format_deadline, parse_deadline

__all__ = [
    "Base",
    "Task",
    "DEADLINE_FORMAT",
    "format_deadline",
    "parse_deadline",
]
