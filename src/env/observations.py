# src/env/observations.py
from __future__ import annotations
from typing import List, Optional
import numpy as np

from src.skyline.buildings import Building
from src.skyline.session import GameSession

OBS_SIZE = 6
MAX_VY = 16.0          # |vy| normalisation, twice the jump impulse
LOOKAHEAD = 2          # upcoming buildings described in the vector


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def upcoming_buildings(session: GameSession, count: int = LOOKAHEAD) -> List[Building]:
    """Buildings whose right edge is still ahead of the player's left edge, nearest first."""
    px = session.player.x
    out: List[Building] = []
    for b in session.buildings:
        if b.right >= px:
            out.append(b)
            if len(out) == count:
                break
    return out


def build_observation(session: GameSession) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector:
      [ y_top_norm, vy_norm,
        dx@1, top@1,
        dx@2, top@2 ]
    - y_top_norm in [0,1] over [0, floor - player.height]
    - vy_norm    in [-1,1]
    - dx: distance from player's right edge to the building's left edge,
      normalised by viewport width and clamped to [0,1] (0 = overlapping)
    - top: building top y / floor, in [0,1]
    Missing buildings use the sentinel dx=1.0, top=1.0 (far away, no wall).
    """
    p = session.player
    floor = session.floor
    y_norm = _clamp01(p.y / max(1.0, floor - p.height))
    vy_norm = max(-1.0, min(1.0, p.vy / MAX_VY))

    feats: List[float] = [y_norm, vy_norm]
    ahead: List[Optional[Building]] = list(upcoming_buildings(session))
    ahead += [None] * (LOOKAHEAD - len(ahead))
    for b in ahead:
        if b is None:
            feats.extend([1.0, 1.0])
            continue
        dx = (b.x - (p.x + p.width)) / float(session.viewport_w)
        feats.extend([_clamp01(dx), _clamp01(b.y / floor)])

    return np.asarray(feats, dtype=np.float32)
