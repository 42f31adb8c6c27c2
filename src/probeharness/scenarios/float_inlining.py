"""Short leaf method called in a float loop, a candidate for inlining."""


class FloatLeaf:
    def simple_method(self, a: float, b: float) -> float:
        return a - b


class FloatInliningProbe:
    """``work_j = leaf.simple_method(work_j, work_k) + i`` for ``n`` iterations.

    With ``n == 10`` the result is ``256 - 10 * 1024 + 45 == -9939.0``.
    """

    def test(self, n: int) -> float:
        leaf = FloatLeaf()
        work_j = 256.0
        work_k = 1024.0
        i = 0.0
        while i < n:
            work_j = leaf.simple_method(work_j, work_k) + i
            i += 1.0
        return work_j
