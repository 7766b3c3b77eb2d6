from enum import Enum


class PermissionLevel(str, Enum):
    READ_ONLY = "read-only"
    WRITE = "write"
    DESTRUCTIVE = "destructive"

    @property
    def rank(self) -> int:
        return LEVEL_RANKS[self]

    @classmethod
    def is_valid(cls, value: object) -> bool:
        try:
            cls(value)
        except ValueError:
            return False
        return True

    def allows(self, required: "PermissionLevel | str") -> bool:
        if not PermissionLevel.is_valid(required):
            return False
        return self.rank >= PermissionLevel(required).rank


LEVEL_RANKS: dict[PermissionLevel, int] = {
    PermissionLevel.READ_ONLY: 1,
    PermissionLevel.WRITE: 2,
    PermissionLevel.DESTRUCTIVE: 3,
}


def level_allows(current: object, required: object) -> bool:
    """Compare two raw level values; unknown values on either side allow nothing."""
    if not PermissionLevel.is_valid(current):
        return False
    return PermissionLevel(current).allows(required)  # type: ignore[arg-type]


class OperationType(str, Enum):
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    OVERWRITE = "overwrite"
    BACKUP = "backup"
    BACKUP_DELETE = "backup-delete"

    @property
    def required_level(self) -> PermissionLevel:
        return _REQUIRED_LEVELS[self]

    @property
    def requires_confirmation(self) -> bool:
        return self in _CONFIRMED_BY_DEFAULT

    @property
    def is_destructive(self) -> bool:
        return self in _DESTRUCTIVE_OPERATIONS


_REQUIRED_LEVELS: dict[OperationType, PermissionLevel] = {
    OperationType.READ: PermissionLevel.READ_ONLY,
    OperationType.WRITE: PermissionLevel.WRITE,
    OperationType.BACKUP: PermissionLevel.WRITE,
    OperationType.DELETE: PermissionLevel.DESTRUCTIVE,
    OperationType.OVERWRITE: PermissionLevel.DESTRUCTIVE,
    OperationType.BACKUP_DELETE: PermissionLevel.DESTRUCTIVE,
}

_CONFIRMED_BY_DEFAULT: frozenset[OperationType] = frozenset(
    {OperationType.DELETE, OperationType.OVERWRITE, OperationType.BACKUP_DELETE}
)

# Overwrite counts as destructive: data is lost if no backup was taken.
_DESTRUCTIVE_OPERATIONS: frozenset[OperationType] = _CONFIRMED_BY_DEFAULT
