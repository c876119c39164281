class DashboardError(Exception):
    """Base class for every error raised by the dashboard core."""


class DivisionUndefined(DashboardError, ZeroDivisionError):
    """A ratio was requested over a zero denominator."""


class ShapeMismatch(DashboardError, ValueError):
    """Export rows do not share the header's key set."""


class EmptyInput(DashboardError, ValueError):
    """Export was asked to serialise zero rows."""


class ExportFailed(DashboardError):
    """The host save operation failed."""


class InvalidArgument(DashboardError, ValueError):
    """A view or range name outside the allowed set."""


class SnapshotError(DashboardError, ValueError):
    """An input payload could not be turned into a DashboardSnapshot."""


class NotComputable:
    """Result of a ratio whose denominator is zero. Falsy, displayed as N/A."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_COMPUTABLE"

    def __str__(self) -> str:
        return "N/A"


NOT_COMPUTABLE = NotComputable()
