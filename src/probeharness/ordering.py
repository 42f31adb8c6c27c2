"""Ordering Sort — deterministic run order for discovered methods.

Insertion sort by name.  Catalogs hold tens of entries, so the quadratic
sort is fine, and names are unique, so no tie-break is needed.
"""

from typing import Iterable

from probeharness.catalog import TestMethod


def sort_methods(methods: Iterable[TestMethod]) -> list[TestMethod]:
    """Return a new list of ``methods`` in ascending code-point order of name."""
    ordered = list(methods)
    for i in range(1, len(ordered)):
        j = i
        while j > 0 and ordered[j - 1].name > ordered[j].name:
            ordered[j - 1], ordered[j] = ordered[j], ordered[j - 1]
            j -= 1
    return ordered
