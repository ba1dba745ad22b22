# src/skyline/scaling.py
from __future__ import annotations
import math
from .config import SCALE_REFERENCE_H


def proportional_size(size: float, viewport_h: float) -> float:
    """Shrink a size/position constant for short viewports.

    Tall screens (>= SCALE_REFERENCE_H) use the authored value untouched;
    shorter ones scale it by viewport_h / SCALE_REFERENCE_H and round up.
    """
    if viewport_h >= SCALE_REFERENCE_H:
        return size
    return math.ceil(size / SCALE_REFERENCE_H * viewport_h)
