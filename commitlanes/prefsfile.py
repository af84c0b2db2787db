# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import json
import logging
import os
import tempfile
import typing
from types import NoneType, UnionType
from typing import Any, Type

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "COMMITLANES_CONFIG_DIR"


def configDir() -> str:
    """
    Directory holding the prefs files.
    $COMMITLANES_CONFIG_DIR wins, then $XDG_CONFIG_HOME/commitlanes,
    then ~/.config/commitlanes.
    """
    from commitlanes.settings import TEST_MODE
    if TEST_MODE:
        return os.path.join(tempfile.gettempdir(), "commitlanes-testmode-config")

    override = os.environ.get(CONFIG_DIR_ENV, "")
    if override:
        return override

    xdgHome = os.environ.get("XDG_CONFIG_HOME", "") or os.path.expanduser("~/.config")
    return os.path.join(xdgHome, "commitlanes")


class PrefsFile:
    _filename = ""
    _allowMakeDirs = True

    def getParentDir(self) -> str:
        return configDir()

    def _getFullPath(self, forWriting: bool) -> str:
        assert self._filename != "", "you must override _filename"

        prefsDir = self.getParentDir()
        if not prefsDir:
            return ""

        if forWriting:
            if self._allowMakeDirs:
                os.makedirs(prefsDir, exist_ok=True)
            elif not os.path.isdir(prefsDir):
                return ""

        fullPath = os.path.join(prefsDir, self._filename)

        if not forWriting and not os.path.isfile(fullPath):
            return ""

        return fullPath

    def reset(self):
        assert dataclasses.is_dataclass(self)
        for f in dataclasses.fields(self):
            if f.default_factory != dataclasses.MISSING:
                obj = f.default_factory()
            else:
                obj = f.default
            self.__dict__[f.name] = obj

    def write(self) -> str:
        # Prepare the path
        prefsPath = self._getFullPath(forWriting=True)
        if not prefsPath:
            logger.warning("Couldn't get path for writing")
            return ""

        # Filter the values
        assert dataclasses.is_dataclass(self)
        fields: dict[str, dataclasses.Field] = self.__dataclass_fields__
        filtered = {}
        for key, field in fields.items():
            # Skip private fields
            if key.startswith("_"):
                continue

            if field.default_factory != dataclasses.MISSING:
                default = field.default_factory()
            else:
                default = field.default

            value = self.__dict__[key]

            # Skip default values
            if value == default:
                continue

            # Make the value JSON-friendly
            value = self.encode(value)
            filtered[key] = value

        # If the filtered object comes out empty (all defaults)
        # avoid cluttering the directory - don't write out an empty object
        if not filtered:
            if not self._getFullPath(forWriting=False):
                # File doesn't exist - don't write out an empty object
                logger.debug("Not writing empty object")
            else:
                logger.debug("Deleting prefs file because we want defaults")
                os.unlink(prefsPath)
            return ""

        # Dump the object to disk
        with open(prefsPath, 'wt', encoding='utf-8') as jsonFile:
            json.dump(obj=filtered, fp=jsonFile, indent='\t')

        logger.info(f"Wrote {prefsPath}")
        return prefsPath

    def load(self) -> bool:
        prefsPath = self._getFullPath(forWriting=False)
        if not prefsPath:  # couldn't be found
            return False

        # Load JSON blob
        with open(prefsPath, 'rt', encoding='utf-8') as file:
            try:
                jsonObject = json.load(file)
            except ValueError as loadError:
                logger.warning(f"{prefsPath}: {loadError}", exc_info=True)
                return False

        if not isinstance(jsonObject, dict):
            logger.warning(f"{prefsPath}: expecting a JSON object at the top level")
            return False

        assert dataclasses.is_dataclass(self)
        fields: dict[str, dataclasses.Field] = self.__dataclass_fields__

        # Decode values and store them in this object
        for key, value in jsonObject.items():
            if key.startswith('_') or key not in fields:
                logger.warning(f"{prefsPath}: dropping key: {key}")
                continue
            if value is None:
                continue

            try:
                value = self.decode(value, fields[key].type)
            except ValueError as error:
                logger.warning(f"{prefsPath}: {key}: {error}")
                continue

            self.__dict__[key] = value

        return True

    @staticmethod
    def encode(o: Any) -> Any:
        """ Encode a value to make it JSON-friendly """
        if isinstance(o, enum.Enum):
            return o.value
        elif type(o) in (set, tuple):
            return list(o)
        return o

    @staticmethod
    def decode(o: Any, dstType: Type | UnionType) -> Any:
        """ Convert a value coming from a JSON blob to a target type """

        # Extract type from "SomeType | None" unions
        if type(dstType) is UnionType:
            union = typing.get_args(dstType)
            assert len(union) == 2
            dstType = next(t for t in union if t is not NoneType)

        # "list[str]" -> list
        dstType = typing.get_origin(dstType) or dstType

        if dstType is set:
            srcType = list
        elif dstType is float:
            srcType = (int, float)
        elif issubclass(dstType, enum.StrEnum):
            srcType = str
        elif issubclass(dstType, (enum.IntEnum, enum.Enum)):
            srcType = int
        else:
            srcType = dstType

        if not isinstance(o, srcType):
            raise ValueError("unexpected JSON field type")

        if srcType is not dstType:
            o = dstType(o)

        return o
