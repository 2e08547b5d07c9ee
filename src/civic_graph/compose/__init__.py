"""Aggregate main-tier composition."""

from .main_tier import Composition, MainTierComposer, compose_main, count_by_namespace

__all__ = ["Composition", "MainTierComposer", "compose_main", "count_by_namespace"]
