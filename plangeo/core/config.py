"""Configuration objects for the planar algorithms."""
from __future__ import annotations

from dataclasses import dataclass, field

from .constants import EPS_DISTANCE, EPS_DETERMINANT, DEFAULT_RAY_LENGTH


@dataclass
class ToleranceConfig:
    """Numerical thresholds.

    - eps_distance: two points closer than this coincide.
    - eps_determinant: triples whose orientation determinant is below this
      (in absolute value) are collinear.
    """
    eps_distance: float = EPS_DISTANCE
    eps_determinant: float = EPS_DETERMINANT


@dataclass
class DualGraphConfig:
    ray_length: float = DEFAULT_RAY_LENGTH


@dataclass
class GeometryConfig:
    """Unified configuration.

    Attributes
    ----------
    tolerances : ToleranceConfig
        Thresholds shared by every algorithm.
    dual_graph : DualGraphConfig
        Parameters of the circumcenter graph extractor.
    """
    tolerances: ToleranceConfig = field(default_factory=ToleranceConfig)
    dual_graph: DualGraphConfig = field(default_factory=DualGraphConfig)


__all__ = ['ToleranceConfig', 'DualGraphConfig', 'GeometryConfig']
