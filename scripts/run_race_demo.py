#!/usr/bin/env python3
"""
Lazy Initialization Race Demo Runner

Usage:
    python scripts/run_race_demo.py
    python scripts/run_race_demo.py --callers 200 --trials 3 --strategy naive --strategy double_checked

Features:
- Naive check-then-create vs. locked / double-checked / eager accessors
- N threads released together through a barrier
- Construction counter per trial
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from lazyinit.cli.race_demo import main


if __name__ == "__main__":
    sys.exit(main())
