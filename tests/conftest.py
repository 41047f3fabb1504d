import os
import sys

import pytest

# Enable invariant checks and link guards in tests unless explicitly overridden.
os.environ.setdefault("CHAIN_TEST_GUARDS", "1")
os.environ.setdefault("XLA_PYTHON_CLIENT_PREALLOCATE", "false")

import jax

# Ensure repo root and src/ are importable when pytest uses importlib mode.
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
for _path in (SRC, ROOT):
    if _path not in sys.path:
        sys.path.insert(0, _path)


@pytest.fixture(autouse=True)
def _set_default_device():
    with jax.default_device(jax.devices("cpu")[0]):
        yield


@pytest.fixture(autouse=True)
def _reset_metrics():
    from chain_metrics import arena_metrics_reset, walk_metrics_reset

    walk_metrics_reset()
    arena_metrics_reset()
    yield
