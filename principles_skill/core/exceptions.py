"""Core exception types shared across layers."""


class SkillError(Exception):
    """Base class for failures raised while serving a skill request."""


class UnroutableRequestError(SkillError):
    """Raised when no registered handler accepts a request envelope."""


class SkillIdMismatchError(SkillError):
    """Raised when an envelope is addressed to a different skill id."""


class PersistenceError(SkillError):
    """Raised when the attribute store cannot be read, written, or purged."""


__all__ = [
    "SkillError",
    "UnroutableRequestError",
    "SkillIdMismatchError",
    "PersistenceError",
]
