import os

import pytest

TESTDATA = os.path.join(os.path.dirname(__file__), 'testdata')


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's own configuration out of every test."""
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.delenv('LETTERKNIFE_CONFIG', raising=False)


@pytest.fixture(name='testdata')
def fixture_testdata():
    """Return a loader for the messages under tests/testdata."""
    def load(name):
        with open(os.path.join(TESTDATA, name), 'rb') as fp:
            return fp.read()
    return load


@pytest.fixture(name='testdata_path')
def fixture_testdata_path():
    return lambda name: os.path.join(TESTDATA, name)
