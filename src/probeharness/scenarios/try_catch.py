"""Field stores around an exception edge.

``run_test`` mutates fields of three distinct instances both inside the
``try`` body and inside the ``except`` handler.  With ``n == 10`` the
division in the body raises, the handler runs, and the observable result is
``other.field``: ``5 + 100 + 1 == 106``.  An optimizer that drops the
handler's stores because their sums are never read gets this wrong.
"""

from typing import Optional

from probeharness.config import StressConfig
from probeharness.stress import run_with_stress


class TryCatchFieldProbe:
    """Probe target: ``test`` and its stress-routed twin."""

    stress_config: Optional[StressConfig] = None

    def __init__(self) -> None:
        self.field = 5

    def run_test(
        self,
        n: int,
        m: "TryCatchFieldProbe",
        other: "TryCatchFieldProbe",
        unused: "TryCatchFieldProbe",
    ) -> int:
        sum1 = sum2 = sum3 = sum4 = 0
        try:
            # n - 10 == 0 raises here
            sum1 += unused.field % 3
            other.field += 100
            sum2 = 100 // (n - 10)
            m.field -= 10000
        except ZeroDivisionError:
            sum3 += unused.field % 3
            other.field += 1
            sum4 = n * 100 // (n - 11)
            m.field -= 1000
        del sum1, sum2, sum3, sum4  # dead stores
        return other.field

    def test(self, n: int) -> int:
        m = TryCatchFieldProbe()
        other = TryCatchFieldProbe()
        unused = TryCatchFieldProbe()
        return self.run_test(n, m, other, unused)

    def test_with_gc_stress(self, n: int) -> str:
        return run_with_stress(self.test, n, config=self.stress_config)
