# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Timing of the layout phases, logged at BENCHMARK_LOGGING_LEVEL.

Nested benchmarks are reported with their full path ("Layout/Calculate lanes").
Each thread keeps its own nesting stack, so concurrent layouts don't mislabel
each other's timings.
"""

import logging
import os
import threading
import time

logger = logging.getLogger(__name__)
BENCHMARK_LOGGING_LEVEL = 5

try:
    import psutil
except ModuleNotFoundError:
    logger.info("psutil isn't available. Memory usage won't be reported in benchmarks.")
    psutil = None

_perThread = threading.local()


def getRSS() -> int:
    if psutil:
        return psutil.Process(os.getpid()).memory_info().rss
    else:
        return 0


def nestingStack() -> list[str]:
    """ Names of the benchmarks currently running in the calling thread, outermost first. """
    try:
        return _perThread.nesting
    except AttributeError:
        _perThread.nesting = []
        return _perThread.nesting


class Benchmark:
    """ Context manager that reports how long a layout phase takes to run. """

    def __init__(self, name: str):
        self.name = name
        self.path = name
        self.startTime = 0.0
        self.startBytes = 0
        self.elapsedMs = 0.0
        self.rssDeltaKB = 0

    def __enter__(self):
        stack = nestingStack()
        stack.append(self.name)
        self.path = "/".join(stack)
        self.startBytes = getRSS()
        self.startTime = time.perf_counter()
        return self

    def __exit__(self, exc_type=None, exc_value=None, traceback=None):
        self.elapsedMs = 1000 * (time.perf_counter() - self.startTime)
        self.rssDeltaKB = (getRSS() - self.startBytes) // 1024

        stack = nestingStack()
        assert stack and stack[-1] == self.name, "benchmarks must be exited in reverse order"
        stack.pop()

        status = " (failed)" if exc_type is not None else ""
        logger.log(BENCHMARK_LOGGING_LEVEL, f"{self.elapsedMs:8.2f} ms {self.rssDeltaKB:6,d}K {self.path}{status}")
