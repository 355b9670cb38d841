from enum import Enum as PyEnum


class EntityStatus(str, PyEnum):
    ACTIVE = "active"
    NON_ACTIVE = "non-active"
