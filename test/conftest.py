import os

import pytest


@pytest.fixture
def save_env():
    env = dict(os.environ)
    for name in list(os.environ):
        if name.startswith("MENTIONKIT_"):
            del os.environ[name]
    try:
        yield
    finally:
        os.environ.clear()
        os.environ.update(env)
