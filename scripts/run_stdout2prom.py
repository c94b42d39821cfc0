#!/usr/bin/env python
"""Run stdout2prom from a source checkout without installing it.

    ./my_program | python scripts/run_stdout2prom.py --config config/metrics.example.yml

Same flags and exit codes as the installed ``stdout2prom`` command.
"""
from __future__ import annotations

import sys
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from stdout2prom.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
