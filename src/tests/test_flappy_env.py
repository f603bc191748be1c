# src/tests/test_flappy_env.py
"""
FlappyEnv (Gymnasium): API contract, determinism, episode termination.
"""
from typing import List, Tuple

import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from src.env.flappy_env import FlappyEnv
from src.game.config import CELL_PX, SCREEN_WIDTH, SCREEN_HEIGHT, COLOR_NAVY
from src.game.state import GameMode


def test_api_check():
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlappyEnv()
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_reset_starts_a_fresh_run():
    env = FlappyEnv()
    obs, info = env.reset(seed=3)
    assert env.state.mode is GameMode.PLAYING
    assert info["score"] == 0 and info["seed"] == 3
    assert obs.shape == (5,) and obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    # dx to the first wall: (80 - 5) / 80
    assert abs(obs[2] - 75 / 80) < 1e-6


def test_flap_action_rises_in_same_step():
    env = FlappyEnv()
    env.reset(seed=3)
    obs, r, term, trunc, _ = env.step(1)
    assert abs(obs[1] - (-0.9)) < 1e-6
    assert env.state.player.y == 24
    assert r == 1.0 and not term and not trunc


def test_noop_rollout_dies_on_floor():
    env = FlappyEnv()
    env.reset(seed=11)
    for _ in range(200):
        obs, r, term, trunc, info = env.step(0)
        assert env.observation_space.contains(obs)
        if term:
            break
    assert term
    assert r == -1.0
    assert info["death_cause"] == "floor"


def test_truncates_at_max_steps():
    env = FlappyEnv(max_steps=3)
    env.reset(seed=0)
    flags = [env.step(1)[2:4] for _ in range(3)]
    assert flags[-1] == (False, True)


def test_determinism():
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool]]:
        env = FlappyEnv()
        traj = []
        env.reset(seed=seed_val)
        for a in action_seq:
            obs, r, term, trunc, _ = env.step(int(a))
            traj.append((obs.copy(), float(r), bool(term)))
            if term or trunc:
                break
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.random_sample() < 0.2) for _ in range(300)]

    t1 = rollout(123, action_seq)
    t2 = rollout(123, action_seq)
    assert len(t1) == len(t2)
    for (o1, r1, te1), (o2, r2, te2) in zip(t1, t2):
        assert np.allclose(o1, o2)
        assert (r1, te1) == (r2, te2)


@pytest.fixture
def headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")


def test_rgb_array_render(headless):
    env = FlappyEnv(render_mode="rgb_array")
    try:
        env.reset(seed=1)
        env.step(0)
        frame = env.render()
        assert frame.shape == (SCREEN_HEIGHT * CELL_PX, SCREEN_WIDTH * CELL_PX, 3)
        assert frame.dtype == np.uint8
        # an empty cell mid-screen (left of the wall, under the HUD) shows the navy playfield
        row, col = 45, 40
        assert env.buffer.cell(col, row).glyph == " "
        assert tuple(frame[row * CELL_PX, col * CELL_PX]) == COLOR_NAVY
    finally:
        env.close()


def test_render_after_death_keeps_end_mode(headless):
    env = FlappyEnv(render_mode="rgb_array")
    try:
        env.reset(seed=1)
        term = False
        while not term:
            _, _, term, _, _ = env.step(0)
        assert env.state.mode is GameMode.END
        frame = env.render()
        assert frame.shape == (SCREEN_HEIGHT * CELL_PX, SCREEN_WIDTH * CELL_PX, 3)
        assert env.state.mode is GameMode.END
        assert env.buffer.row_text(5).strip() == "You are dead!"
    finally:
        env.close()


def test_human_render_paints_through_terminal(headless):
    env = FlappyEnv(render_mode="human")
    try:
        env.reset(seed=1)
        _, _, _, _, info = env.step(0)
        assert env.terminal is not None
        assert env.render() is None
        assert env.buffer.row_text(1).startswith(f"Score: {info['score']}")
    finally:
        env.close()
    assert env.terminal is None
