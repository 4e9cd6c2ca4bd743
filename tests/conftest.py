import os

# Headless matplotlib for the viewer tests; must precede any pyplot import.
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from coriolis import GlobeEngine, make_point


@pytest.fixture()
def origin():
    return make_point(0, 0, '#fff')


@pytest.fixture()
def destination():
    return make_point(60, 0, '#fff')


@pytest.fixture(scope="module")
def engine():
    return GlobeEngine(path_depth=4)
