import tempfile

import pygit2
import pytest

from commitlanes import settings


def setUpGitConfigSearchPaths(prefix=""):
    # Don't let unit tests access host system's git config
    levels = [
        pygit2.enums.ConfigLevel.GLOBAL,
        pygit2.enums.ConfigLevel.XDG,
        pygit2.enums.ConfigLevel.SYSTEM,
        pygit2.enums.ConfigLevel.PROGRAMDATA,
    ]
    for level in levels:
        if prefix:
            path = f"{prefix}_{level.name}"
        else:
            path = ""
        pygit2.settings.search_path[level] = path


@pytest.fixture(scope='session', autouse=True)
def maskHostGitConfig():
    setUpGitConfigSearchPaths("")


@pytest.fixture(autouse=True)
def defaultPrefs():
    # Tests must not depend on prefs tweaked by other tests
    assert settings.TEST_MODE
    settings.prefs.reset()
    yield settings.prefs
    settings.prefs.reset()


@pytest.fixture
def tempDir() -> tempfile.TemporaryDirectory:
    td = tempfile.TemporaryDirectory(prefix="commitlanestest-")
    yield td
    td.cleanup()
