"""Exceptions and failure kinds shared across the harness."""

# ── Failure Kinds ──

INVALID_ARGUMENT = "InvalidArgument"
ACCESS_DENIED = "AccessDenied"
TARGET_FAILURE = "TargetFailure"
BACKGROUND_TASK_ERROR = "BackgroundTaskError"

FAILURE_KINDS = frozenset({
    INVALID_ARGUMENT,
    ACCESS_DENIED,
    TARGET_FAILURE,
    BACKGROUND_TASK_ERROR,
})


# ── Exceptions ──


class HarnessError(Exception):
    """Base exception for probe harness errors."""


class CatalogError(HarnessError):
    """The catalog was asked to inspect something that is not a class."""


class StressError(HarnessError):
    """The background workload could not be started or joined."""


class InvocationTargetError(HarnessError):
    """Generic wrapper around an error raised by probe code.

    Dispatch layers that need to re-raise a probe's error wrap it here; the
    invoker reports ``cause`` rather than the wrapper.
    """

    def __init__(self, cause: BaseException):
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause
        self.__cause__ = cause


def describe_exception(exc: BaseException) -> str:
    """Return ``"<Type>: <message>"``, or just the type when there is no message."""
    message = str(exc)
    if message:
        return f"{type(exc).__name__}: {message}"
    return type(exc).__name__
