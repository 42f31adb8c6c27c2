"""Method Catalog — discovers probe methods declared on a target type.

Only the class's own namespace is inspected (inherited methods are not
declared on the type).  Plain functions, static methods and class methods
count as methods; properties and data attributes do not.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Optional

from probeharness.errors import CatalogError

logger = logging.getLogger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


# ── Data Class ──


@dataclass(frozen=True)
class TestMethod:
    """A discovered probe method.

    Attributes:
        name: Method name, unique within the owning type.
        owner: The class the method is declared on.
        arity: Positional parameters, not counting ``self``/``cls``.
        parameter_types: Declared annotation per positional parameter
            (``inspect.Parameter.empty`` where there is none).
        signature: Call signature as seen through an instance, with
            string annotations evaluated; ``None`` when unavailable.
    """

    __test__ = False  # not a pytest test class

    name: str
    owner: type
    arity: int = 1
    parameter_types: tuple = ()
    signature: Optional[inspect.Signature] = field(
        default=None, compare=False, hash=False, repr=False,
    )

    @property
    def qualified_name(self) -> str:
        return f"{self.owner.__name__}.{self.name}"


# ── Helpers ──


def resolve_signature(func: object) -> Optional[inspect.Signature]:
    """Return ``func``'s signature with string annotations evaluated.

    Annotations that cannot be evaluated (undefined names) are left as
    strings.  Returns ``None`` for callables without signature metadata.
    """
    try:
        return inspect.signature(func, eval_str=True)
    except NameError:
        pass
    except (TypeError, ValueError):
        return None
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def _unwrap_member(member: object) -> tuple[object, bool]:
    """Return ``(function, binds_first_arg)`` for a class-namespace member."""
    if isinstance(member, staticmethod):
        return member.__func__, False
    if isinstance(member, classmethod):
        return member.__func__, True
    return member, True


def _bound_signature(func: object, binds_first_arg: bool) -> Optional[inspect.Signature]:
    signature = resolve_signature(func)
    if signature is None or not binds_first_arg:
        return signature
    params = list(signature.parameters.values())
    if params and params[0].kind in _POSITIONAL:
        params = params[1:]
    return signature.replace(parameters=params)


# ── Discovery ──


def discover_methods(target_type: type, prefix: str = "test") -> frozenset[TestMethod]:
    """Enumerate methods declared on ``target_type`` whose name starts with ``prefix``.

    The result is unordered; pass it through
    :func:`probeharness.ordering.sort_methods` for a run order.  A type
    with no matching methods yields an empty set.
    """
    if not inspect.isclass(target_type):
        raise CatalogError(
            f"Expected a class to inspect, got {type(target_type).__name__}"
        )

    found = set()
    for name, member in vars(target_type).items():
        if not name.startswith(prefix):
            continue
        func, binds_first_arg = _unwrap_member(member)
        if not inspect.isroutine(func):
            continue
        signature = _bound_signature(func, binds_first_arg)
        if signature is None:
            # Builtins without signature metadata; assume the convention.
            method = TestMethod(name=name, owner=target_type)
        else:
            params = [
                p for p in signature.parameters.values() if p.kind in _POSITIONAL
            ]
            method = TestMethod(
                name=name,
                owner=target_type,
                arity=len(params),
                parameter_types=tuple(p.annotation for p in params),
                signature=signature,
            )
        found.add(method)

    logger.debug(
        "Discovered %d method(s) with prefix %r on %s",
        len(found), prefix, target_type.__name__,
    )
    return frozenset(found)
