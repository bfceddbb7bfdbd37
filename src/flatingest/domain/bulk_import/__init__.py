"""Batch operation interpreter."""

from __future__ import annotations

from .errors import (
    BatchNotFoundError,
    BatchSourceError,
    ConflictError,
    InvalidBatchError,
    NotFoundError,
    OperationError,
    ReferenceKindError,
    ReferenceNotFoundError,
    UnknownOperationError,
    UnresolvedReferenceError,
    ValidationError,
)
from .executor import DEFAULT_NODE_BUNDLE, OperationExecutor
from .operations import CreateFile, CreateMedia, CreateNode, IdRef, Operation, UpdateNode
from .reference_cache import ReferenceCache
from .report import BatchReport, BatchStats, ErrorEntry, KindStats, ProcessedEntry
from .resolver import Binding, IdentifierResolver
from .runner import BatchContext, BatchRunner, OperationDecoder

__all__ = [
    "DEFAULT_NODE_BUNDLE",
    "BatchContext",
    "BatchNotFoundError",
    "BatchReport",
    "BatchRunner",
    "BatchSourceError",
    "BatchStats",
    "Binding",
    "ConflictError",
    "CreateFile",
    "CreateMedia",
    "CreateNode",
    "ErrorEntry",
    "IdRef",
    "IdentifierResolver",
    "InvalidBatchError",
    "KindStats",
    "NotFoundError",
    "Operation",
    "OperationDecoder",
    "OperationError",
    "OperationExecutor",
    "ProcessedEntry",
    "ReferenceCache",
    "ReferenceKindError",
    "ReferenceNotFoundError",
    "UnknownOperationError",
    "UnresolvedReferenceError",
    "UpdateNode",
    "ValidationError",
]
