"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Platform role of a user account."""

    DEVELOPER = "DEVELOPER"
    PROFESSIONAL = "PROFESSIONAL"
    ADMIN = "ADMIN"


class TaskStatus(str, Enum):
    """Board column of a task. Any status may move to any other."""

    BACKLOG = "BACKLOG"
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    REVIEW = "REVIEW"
    DONE = "DONE"

    @property
    def rank(self) -> int:
        """Position of the column on the board, left to right."""
        return list(TaskStatus).index(self)


_STAGE_LABELS = {
    "STAGE_0": "Stage 0: Strategic Definition",
    "STAGE_1": "Stage 1: Preparation & Brief",
    "STAGE_2": "Stage 2: Concept Design",
    "STAGE_3": "Stage 3: Spatial Coordination",
    "STAGE_4": "Stage 4: Technical Design",
    "STAGE_5": "Stage 5: Manufacturing & Construction",
    "STAGE_6": "Stage 6: Handover & Close Out",
    "STAGE_7": "Stage 7: In Use",
}


class RibaStage(str, Enum):
    """RIBA Plan of Work delivery stage."""

    STAGE_0 = "STAGE_0"
    STAGE_1 = "STAGE_1"
    STAGE_2 = "STAGE_2"
    STAGE_3 = "STAGE_3"
    STAGE_4 = "STAGE_4"
    STAGE_5 = "STAGE_5"
    STAGE_6 = "STAGE_6"
    STAGE_7 = "STAGE_7"

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self.value]


class BidStatus(str, Enum):
    """Tender application status."""

    SUBMITTED = "SUBMITTED"
