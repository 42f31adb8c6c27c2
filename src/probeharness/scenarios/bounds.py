"""Errors raised from short helper methods, checked through the reported trace.

Both probes walk an array through ``gimme``/``hereyouare`` helpers.  The
error surfaces two calls deep inside the helpers, so the harness's capped
trace shows the helper frames rather than the probe's own loop.
"""

from typing import Optional

from probeharness.config import StressConfig
from probeharness.stress import run_with_stress


class Thingies:
    """Owner of the array the probes walk."""

    def __init__(self, size: int, fill) -> None:
        self.thingies_array = [fill(i) for i in range(size)]

    def _at(self, array, i):
        return array[i]

    def gimme(self, array, i):
        return self._at(array, i)

    def hereyouare(self, array, value, i) -> None:
        array[i] = value


class ArrayBoundsProbe:
    """Reads one index past the end of a char array."""

    stress_config: Optional[StressConfig] = None

    def test(self, n: int) -> int:
        holder = Thingies(n, lambda i: chr(ord("a") + i % 26))
        total = 0
        for i in range(n):
            total += ord(holder.thingies_array[i])
        for i in range(n + 1):
            next_thingy = chr(ord(holder.gimme(holder.thingies_array, i)) + 1)
            holder.hereyouare(holder.thingies_array, next_thingy, i)
        return total

    def test_caught(self, n: int) -> str:
        try:
            self.test(n)
        except IndexError:
            return f"caught IndexError past index {n - 1}"
        return "no error"

    def test_with_gc_stress(self, n: int) -> str:
        return run_with_stress(self.test, n, config=self.stress_config)


class NullArrayProbe:
    """Drops the boolean array halfway through the walk."""

    def test(self, n: int) -> bool:
        holder = Thingies(n, lambda i: i % 2 == 0)
        sum_arr_elements = False
        for i in range(n):
            sum_arr_elements = sum_arr_elements & holder.thingies_array[i]
        for i in range(n):
            if i == n // 2:
                holder.thingies_array = None
            next_thingy = holder.gimme(holder.thingies_array, i) or True
            holder.hereyouare(holder.thingies_array, next_thingy, i)
        return sum_arr_elements
