# shop/domain/enums.py
import enum


class RoleName(str, enum.Enum):
    CLIENT = "CLIENT"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


class StatusName(str, enum.Enum):
    NEW = "NEW"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    DONE = "DONE"


DEFAULT_ROLE = RoleName.CLIENT
DEFAULT_STATUS = StatusName.NEW

# zamkniety zbior przejsc, DONE jest terminalny
STATUS_TRANSITIONS = {
    StatusName.NEW: frozenset({StatusName.ACCEPTED, StatusName.REJECTED}),
    StatusName.ACCEPTED: frozenset({StatusName.DONE}),
    StatusName.REJECTED: frozenset({StatusName.DONE}),
    StatusName.DONE: frozenset(),
}


def can_transition(current: StatusName, new: StatusName) -> bool:
    return new in STATUS_TRANSITIONS[current]
