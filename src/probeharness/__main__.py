import sys

from probeharness.cli import main

sys.exit(main())
