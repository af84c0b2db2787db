# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Utilities that aren't specifically tied to graph layout.
"""

from .benchmark import BENCHMARK_LOGGING_LEVEL, Benchmark, nestingStack
