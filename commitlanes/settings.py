# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import logging
import sys

from commitlanes import colors
from commitlanes.prefsfile import PrefsFile
from commitlanes.refnames import DEFAULT_MAIN_BRANCHES, DEFAULT_REMOTES
from commitlanes.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL

logger = logging.getLogger(__name__)

TEST_MODE = "pytest" in sys.modules
"""
Unit testing mode (don't touch real user prefs, etc.).
"""

DEVDEBUG = TEST_MODE
"""
Enable expensive assertions and debugging features.
Can be forced with command-line switch "--debug".
"""


class LoggingLevel(enum.IntEnum):
    BENCHMARK = BENCHMARK_LOGGING_LEVEL
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING


@dataclasses.dataclass
class Prefs(PrefsFile):
    _filename = "prefs.json"

    _category_geometry          : int                   = 0
    laneWidth                   : int                   = 20
    rowHeight                   : int                   = 28
    dotRadius                   : int                   = 5
    curveControl                : float                 = 0.4

    _category_colors            : int                   = 0
    mainColor                   : str                   = colors.MAIN_COLOR
    orphanColor                 : str                   = colors.ORPHAN_COLOR
    palette                     : list[str]             = dataclasses.field(default_factory=lambda: list(colors.PALETTE))
    mainBranchNames             : list[str]             = dataclasses.field(default_factory=lambda: list(DEFAULT_MAIN_BRANCHES))
    remoteNames                 : list[str]             = dataclasses.field(default_factory=lambda: list(DEFAULT_REMOTES))

    _category_advanced          : int                   = 0
    verbosity                   : LoggingLevel          = LoggingLevel.WARNING

    def load(self) -> bool:
        loaded = super().load()

        # An empty palette would make every lane color lookup divide by zero
        if not self.palette:
            logger.warning("Ignoring empty palette in prefs")
            self.palette = list(colors.PALETTE)

        for key in ("palette", "mainBranchNames", "remoteNames"):
            values = getattr(self, key)
            if not all(isinstance(v, str) and v for v in values):
                logger.warning(f"Ignoring {key} in prefs: expecting a list of non-empty strings, got {values!r}")
                setattr(self, key, self.__dataclass_fields__[key].default_factory())

        if self.laneWidth <= 0 or self.rowHeight <= 0:
            logger.warning(f"Ignoring non-positive graph geometry: {self.laneWidth}x{self.rowHeight}")
            self.laneWidth = Prefs.laneWidth
            self.rowHeight = Prefs.rowHeight

        if self.dotRadius < 0:
            logger.warning(f"Ignoring negative dot radius: {self.dotRadius}")
            self.dotRadius = Prefs.dotRadius

        if not 0 <= self.curveControl <= 1:
            logger.warning(f"Ignoring curve control outside [0, 1]: {self.curveControl}")
            self.curveControl = Prefs.curveControl

        return loaded


prefs = Prefs()
