"""Source metadata listing."""

from .aggregator import MetaAggregator, MetaRow, validate_scope

__all__ = ["MetaAggregator", "MetaRow", "validate_scope"]
