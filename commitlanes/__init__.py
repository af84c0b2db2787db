# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Commit-graph layout engine: lane assignment, branch colors and edge geometry
for rendering `git log --graph`-style diagrams.
"""

__version__ = "0.1"
