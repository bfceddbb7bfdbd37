"""Batch-file adapter: JSON loading and operation decoding."""

from __future__ import annotations

from .loader import BatchDescription, load_batch, parse_batch
from .translator import decode_operation, translate_payload

__all__ = [
    "BatchDescription",
    "decode_operation",
    "load_batch",
    "parse_batch",
    "translate_payload",
]
