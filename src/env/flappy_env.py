# src/env/flappy_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym

from src.game.state import State, GameMode
from src.game.terminal import GlyphBuffer, Terminal
from src.env.observations import build_observation, OBS_SIZE


class FlappyEnv(gym.Env):
    """
    Flappy Dragon Gymnasium environment (vector observations).
    - One decision = one simulation step (the FRAME_DURATION gate is skipped).
    - Action 1 flaps before the step, so the flap shows up in the same step.
    - Observation: shape (5,), float32, see build_observation().
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 1000 // 75}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 max_steps: Optional[int] = 2000):
        super().__init__()
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Invalid render_mode {render_mode}"
        self.render_mode = render_mode
        self.max_steps = max_steps

        # --- Gym spaces ---
        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)

        # [y_norm, vel_norm, dx_norm, gap_top_norm, gap_bottom_norm]
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.array([1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, shape=(OBS_SIZE,), dtype=np.float32)

        # --- Runtime state ---
        # gap positions come from this Random, never from self.np_random
        self._rng = random.Random()
        self.state: Optional[State] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.terminal: Optional[Terminal] = None
        self.buffer = GlyphBuffer()

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Seeding policy:
        # - seed given -> reseed the gap source for strict reproducibility
        # - no seed    -> keep drawing from the current source
        if seed is not None:
            self._rng = random.Random(int(seed))
            self.current_seed = int(seed)

        self.state = State(self._rng)
        self.state.restart()
        self.timestep = 0

        obs = self._get_obs()
        return obs, self._info()

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "Call reset() before step()"

        if action == 1:
            self.state.player.flap()
        self.state.step()

        self.timestep += 1
        terminated = self.state.mode is GameMode.END
        truncated = (not terminated) and (self.max_steps is not None) and (self.timestep >= self.max_steps)

        # Reward: +1 if alive after this step; -1 on death
        reward = -1.0 if terminated else 1.0

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.state is not None
        return build_observation(self.state.player, self.state.obstacle)

    def _info(self) -> Dict[str, Any]:
        assert self.state is not None
        return {
            "score": self.state.score,
            "distance": self.state.player.x,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": self.state.death_cause,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.terminal is None:
            self.terminal = Terminal(fps=self.metadata["render_fps"])

        # paint without advancing the simulation; with no key the end screen never transitions
        if self.state.mode is GameMode.PLAYING:
            commands = self.state.playing_screen()
        else:
            commands = self.state.handle_frame(0.0, None)
        self.buffer.apply(commands)
        Terminal.poll()
        self.terminal.draw(self.buffer)
        self.terminal.tick()

        if self.render_mode == "rgb_array":
            return self.terminal.snapshot()
        return None

    def close(self):
        if self.terminal is not None:
            self.terminal.close()
            self.terminal = None
