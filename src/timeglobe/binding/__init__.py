# SPDX-License-Identifier: Apache-2.0
"""Snapshot-to-renderer binding with explicit memoization."""

from .binder import Binding, CacheInfo, FeatureBinder
from .snapshot import AnnexationData, LifeData, RenderSnapshot, TravelData
from .visualizations import (
    TRAVEL_FALLBACK,
    AnnexationVisualization,
    FeatureStyle,
    LifeVisualization,
    TravelVisualization,
    Visualization,
    available,
    create,
    get,
    register,
)

__all__ = [
    "TRAVEL_FALLBACK",
    "AnnexationData",
    "AnnexationVisualization",
    "Binding",
    "CacheInfo",
    "FeatureBinder",
    "FeatureStyle",
    "LifeData",
    "LifeVisualization",
    "RenderSnapshot",
    "TravelData",
    "TravelVisualization",
    "Visualization",
    "available",
    "create",
    "get",
    "register",
]
