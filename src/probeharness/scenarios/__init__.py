"""Scenario programs — probe targets run by the harness.

``SCENARIOS`` maps a short name to each target type, in run order.
"""

from probeharness.scenarios.bounds import ArrayBoundsProbe, NullArrayProbe
from probeharness.scenarios.float_inlining import FloatInliningProbe
from probeharness.scenarios.try_catch import TryCatchFieldProbe

SCENARIOS: dict[str, type] = {
    "try-catch": TryCatchFieldProbe,
    "float-inlining": FloatInliningProbe,
    "array-bounds": ArrayBoundsProbe,
    "null-array": NullArrayProbe,
}

__all__ = [
    "SCENARIOS",
    "ArrayBoundsProbe",
    "FloatInliningProbe",
    "NullArrayProbe",
    "TryCatchFieldProbe",
]
