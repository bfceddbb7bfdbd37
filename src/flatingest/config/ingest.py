"""Bulk import defaults."""

from __future__ import annotations

from dataclasses import dataclass

from flatingest.domain.bulk_import.executor import DEFAULT_NODE_BUNDLE

from .env import optional_env_var


@dataclass(frozen=True, slots=True)
class IngestConfig:
    node_bundle: str = DEFAULT_NODE_BUNDLE


def get_ingest_config() -> IngestConfig:
    bundle = optional_env_var("FLATINGEST_NODE_BUNDLE")
    return IngestConfig(node_bundle=bundle or DEFAULT_NODE_BUNDLE)
