from .booking import Booking, BookingStatus
from .notification import Notification
from .project import Project
from .room import Room
from .task import Task, TaskPriority, TaskStatus
from .team_member import TeamMember

__all__ = [
    "Booking",
    "BookingStatus",
    "Notification",
    "Project",
    "Room",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "TeamMember",
]
