# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Thin layer over pygit2 for the few git objects the layout engine understands.
"""

import datetime

from pygit2 import Commit, Oid

SHORT_HASH_CHARS = 7


def oidToStr(oid: Oid | str) -> str:
    """ Hex string for a pygit2 Oid; strings pass through unchanged. """
    if isinstance(oid, Oid):
        return str(oid)
    return oid


def shortHash(oid: Oid | str) -> str:
    return oidToStr(oid)[:SHORT_HASH_CHARS]


def commitSubject(commit: Commit) -> str:
    """ First line of the commit message, like `git log --format=%s`. """
    return commit.message.strip().split("\n", 1)[0].strip()


def commitDate(commit: Commit) -> str:
    """ Committer date in ISO 8601 with the committer's UTC offset. """
    tz = datetime.timezone(datetime.timedelta(minutes=commit.commit_time_offset))
    return datetime.datetime.fromtimestamp(commit.commit_time, tz).isoformat()
