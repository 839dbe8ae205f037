"""Logging utilities for plangeo.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All plangeo code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')
_ROOT = 'plangeo'


def _ensure_package_root() -> logging.Logger:
    """Ensure the 'plangeo' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'plangeo' logger.
    """
    pkg_root = logging.getLogger(_ROOT)
    has_non_null = any(not isinstance(h, logging.NullHandler) for h in pkg_root.handlers)
    if not has_non_null:
        # NullHandlers added by the package __init__ would swallow records
        for h in list(pkg_root.handlers):
            pkg_root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        pkg_root.addHandler(handler)
    pkg_root.propagate = False
    return pkg_root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO') -> None:
    """Set the level of the 'plangeo' logger family.

    This does NOT modify the process root logger.
    """
    _ensure_package_root().setLevel(_to_level(level))


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'plangeo' namespace.

    Without an explicit level the logger is left at NOTSET so it inherits the
    level configured through configure_logging().
    """
    _ensure_package_root()
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
