"""Invoker — dynamic dispatch of one probe method with failure capture.

``invoke()`` always returns an :data:`InvocationResult`.  Errors raised while
resolving, checking or running the method are converted into a
:class:`Failure` tagged with one of three kinds:

  - ``InvalidArgument``: the sample argument does not fit the signature
  - ``AccessDenied``: the method cannot be resolved or is not callable
  - ``TargetFailure``: the method ran and raised

Methods with incompatible signatures are still dispatched and reported as
``InvalidArgument``; nothing is filtered out ahead of time.
"""

import inspect
import logging
import os
import traceback
from dataclasses import dataclass
from typing import Union

from probeharness.catalog import TestMethod, resolve_signature
from probeharness.config import DEFAULT_MAX_FRAMES, DEFAULT_SAMPLE_ARGUMENT
from probeharness.errors import (
    ACCESS_DENIED,
    INVALID_ARGUMENT,
    TARGET_FAILURE,
    InvocationTargetError,
    describe_exception,
)

logger = logging.getLogger(__name__)

_THIS_FILE = os.path.normcase(os.path.abspath(__file__))


# ── Data Classes ──


@dataclass(frozen=True)
class Success:
    """A probe returned normally; ``text`` is ``str()`` of its return value."""

    text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A probe could not be invoked, or raised.

    Attributes:
        kind: One of the failure kinds in :mod:`probeharness.errors`.
        description: ``"<Type>: <message>"`` of the underlying cause.
        frames: Innermost-first trace locations, already capped.
    """

    kind: str
    description: str
    frames: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return False


InvocationResult = Union[Success, Failure]


# ── Helpers ──


def _format_frame(frame: traceback.FrameSummary) -> str:
    return f'File "{frame.filename}", line {frame.lineno}, in {frame.name}'


def extract_frames(exc: BaseException, limit: int = DEFAULT_MAX_FRAMES) -> tuple[str, ...]:
    """Return at most ``limit`` trace locations of ``exc``, innermost first.

    Frames belonging to this module (the dispatch call itself) are skipped.
    """
    if limit <= 0:
        return ()
    summaries = [
        frame
        for frame in traceback.extract_tb(exc.__traceback__)
        if os.path.normcase(os.path.abspath(frame.filename)) != _THIS_FILE
    ]
    summaries.reverse()
    return tuple(_format_frame(frame) for frame in summaries[:limit])


def _unwrap(exc: BaseException) -> BaseException:
    while isinstance(exc, InvocationTargetError):
        exc = exc.cause
    return exc


# An int argument also satisfies these annotations.
_NUMERIC_WIDENING = {
    float: (int, float),
    complex: (int, float, complex),
}


def _accepts(annotation: object, value: object) -> bool:
    # Missing and unevaluated (string) annotations are not checked.
    if annotation is inspect.Parameter.empty or not isinstance(annotation, type):
        return True
    return isinstance(value, _NUMERIC_WIDENING.get(annotation, annotation))


def _check_argument(handle: object, method: TestMethod, argument: object) -> str:
    """Return a description of why ``argument`` does not fit, or ``""``.

    Uses the signature recorded by the catalog, falling back to the
    resolved handle for methods built without one.
    """
    signature = method.signature
    if signature is None:
        signature = resolve_signature(handle)
    if signature is None:
        return ""
    try:
        bound = signature.bind(argument)
    except TypeError as exc:
        return f"TypeError: {method.qualified_name}(): {exc}"
    for name, value in bound.arguments.items():
        param = signature.parameters[name]
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if not _accepts(param.annotation, value):
            return (
                f"TypeError: {method.qualified_name}(): argument {name!r} "
                f"expects {param.annotation.__name__}, "
                f"got {type(value).__name__}"
            )
    return ""


# ── Invocation ──


def invoke(
    instance: object,
    method: TestMethod,
    argument: object = DEFAULT_SAMPLE_ARGUMENT,
    max_frames: int = DEFAULT_MAX_FRAMES,
) -> InvocationResult:
    """Call ``method`` on ``instance`` with ``argument``, capturing the outcome."""
    try:
        handle = getattr(instance, method.name)
    except Exception as exc:
        logger.debug("Cannot resolve %s: %s", method.qualified_name, exc)
        return Failure(kind=ACCESS_DENIED, description=describe_exception(exc))

    if not callable(handle):
        return Failure(
            kind=ACCESS_DENIED,
            description=(
                f"TypeError: {method.qualified_name} resolves to a "
                f"non-callable {type(handle).__name__}"
            ),
        )

    problem = _check_argument(handle, method, argument)
    if problem:
        return Failure(kind=INVALID_ARGUMENT, description=problem)

    try:
        text = str(handle(argument))
    except Exception as exc:
        cause = _unwrap(exc)
        logger.debug("%s raised %s", method.qualified_name, type(cause).__name__)
        return Failure(
            kind=TARGET_FAILURE,
            description=describe_exception(cause),
            frames=extract_frames(cause, max_frames),
        )
    return Success(text=text)
