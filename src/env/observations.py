# src/env/observations.py
from __future__ import annotations
import numpy as np

from src.game.config import SCREEN_WIDTH, SCREEN_HEIGHT, TERMINAL_VELOCITY

OBS_SIZE = 5

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_row(y: float) -> float:
    return _clamp01(y / float(SCREEN_HEIGHT))

def _norm_velocity(v: float, v_max: float = TERMINAL_VELOCITY) -> float:
    """Clip v to [-v_max, v_max] and scale to [-1,1]."""
    v_max = float(max(1e-6, v_max))
    vv = max(-v_max, min(v, v_max))
    return vv / v_max

def build_observation(player, obstacle) -> np.ndarray:
    """
    Returns a fixed (5,) float32 vector:
      [ y_norm, vel_norm, dx_norm, gap_top_norm, gap_bottom_norm ]
    - y_norm          in [0,1]  player row / SCREEN_HEIGHT
    - vel_norm        in [-1,1] velocity / TERMINAL_VELOCITY
    - dx_norm         in [0,1]  columns until the wall / SCREEN_WIDTH
    - gap_top/bottom  in [0,1]  survivable rows of the gap / SCREEN_HEIGHT
    """
    dx = obstacle.x - player.x
    feats = [
        _norm_row(float(player.y)),
        _norm_velocity(float(player.velocity)),
        _clamp01(dx / float(SCREEN_WIDTH)),
        _norm_row(float(obstacle.gap_top)),
        _norm_row(float(obstacle.gap_bottom)),
    ]
    return np.asarray(feats, dtype=np.float32)
