"""Host reads of device values.

Every host decision (range checks, NULL tests, invariant walks) goes through
these helpers so the device -> host syncs stay in one place.
"""

from __future__ import annotations

import jax
import numpy as np


def _host_int_value(value) -> int:
    if isinstance(value, bool):
        raise TypeError("expected int, got bool")
    if isinstance(value, int):
        return value
    # SYNC: scalar pull from device.
    return int(jax.device_get(value))


def _host_bool_value(value) -> bool:
    if isinstance(value, bool):
        return value
    return bool(jax.device_get(value))


def _host_array(value, dtype=None) -> np.ndarray:
    # SYNC: whole-table pull for host walks.
    return np.asarray(jax.device_get(value), dtype=dtype)


__all__ = [
    "_host_int_value",
    "_host_bool_value",
    "_host_array",
]
