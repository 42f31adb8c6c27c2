"""Shared test fixtures for probeharness tests."""

import sys
from pathlib import Path

# Add src to path so tests can import probeharness
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
