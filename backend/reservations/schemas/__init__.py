from .booking import BookingCreate, BookingRead
from .project import (
    ProjectCreate,
    ProjectDetail,
    ProjectRead,
    ProjectSummary,
    TeamMemberCreate,
    TeamMemberRead,
)
from .result import OperationResult, SessionInfo, UndoSnapshot
from .room import RoomCreate, RoomRead
from .task import TaskCreate, TaskRead, TaskStatusUpdate

__all__ = [
    "BookingCreate",
    "BookingRead",
    "OperationResult",
    "ProjectCreate",
    "ProjectDetail",
    "ProjectRead",
    "ProjectSummary",
    "RoomCreate",
    "RoomRead",
    "SessionInfo",
    "TaskCreate",
    "TaskRead",
    "TaskStatusUpdate",
    "TeamMemberCreate",
    "TeamMemberRead",
    "UndoSnapshot",
]
