# src/game/game.py
import sys, argparse, random
from pygame import K_SPACE, K_p, K_q
from .config import FPS, CELL_PX, SEED_DEFAULT, LOG_RUNS
from .state import State, GameMode, Signal
from .terminal import Terminal, GlyphBuffer

KEY_SIGNALS = {
    K_SPACE: Signal.FLAP,
    K_p: Signal.START,
    K_q: Signal.QUIT,
}

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy Dragon")
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Seed for gap positions. Omit for a new layout each launch.")
    p.add_argument("--fps", type=int, default=FPS,
                   help="Frame cap; 0 ticks as fast as possible.")
    p.add_argument("--cell-px", type=int, default=CELL_PX,
                   help="Pixel size of one terminal cell.")
    p.add_argument("--verbose", action="store_true",
                   help="Print a line every time a run ends.")
    return p.parse_args(argv)

def run(argv=None):
    args = parse_args(argv)
    log_runs = LOG_RUNS or args.verbose

    rng = random.Random(args.seed)
    state = State(rng)
    term = Terminal(cell_px=args.cell_px, fps=args.fps)
    buffer = GlyphBuffer()

    last_mode = state.mode
    try:
        while not state.exit_requested:
            elapsed_ms = term.tick()
            closed, key = term.poll()
            if closed:
                break

            commands = state.handle_frame(elapsed_ms, KEY_SIGNALS.get(key))
            buffer.apply(commands)
            term.draw(buffer)

            if log_runs and state.mode is not last_mode:
                if state.mode is GameMode.END:
                    print(f"[END] score={state.score} distance={state.player.x} cause={state.death_cause}")
                elif state.mode is GameMode.PLAYING:
                    print(f"[START] seed={args.seed}")
            last_mode = state.mode
    finally:
        term.close()
    sys.exit(0)

if __name__ == "__main__":
    run()
