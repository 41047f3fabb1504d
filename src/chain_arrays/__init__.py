"""Contiguous-storage peers of the chain list."""

from chain_arrays.dynamic import DynamicArray
from chain_arrays.fixed import FixedArray

__all__ = ["DynamicArray", "FixedArray"]
