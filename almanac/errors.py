"""Exceptions raised by the almanac engine."""


class AlmanacError(Exception):
    """Base exception for almanac errors."""

    pass


class InvalidArgumentError(AlmanacError, ValueError):
    """Raised when an operation is given an argument it cannot accept.

    Out-of-range calendar fields on an absolute jump are clamped, not
    rejected; only fields of the wrong type or name raise this.
    """

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class ConfigurationError(AlmanacError):
    """Raised when ALMANAC_* environment settings cannot be parsed."""

    pass


class PersistenceError(AlmanacError):
    """Raised when the persistence hook fails to commit a snapshot.

    The engine keeps its previous snapshot when this is raised.
    """

    pass
