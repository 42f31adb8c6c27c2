"""Target types declared under postponed annotation evaluation."""

from __future__ import annotations


class FutureTarget:
    def test_wants_str(self, s: str):
        return s.upper()

    def test_wants_float(self, x: float):
        return x / 4

    def test_unresolvable(self, n: UndefinedName):  # noqa: F821
        return n + 1
