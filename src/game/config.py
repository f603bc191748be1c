# --- Display ---
SCREEN_WIDTH = 80           # terminal columns
SCREEN_HEIGHT = 50          # terminal rows
CELL_PX = 12                # pixel size of one glyph cell in the window
TITLE = "Flappy Dragon"
FPS = 0                     # 0 = uncapped, tick as fast as the host allows

# --- Simulation ---
FRAME_DURATION = 75.0       # ms of accumulated frame time per simulation step

# --- Player ---
PLAYER_START_X = 5
PLAYER_START_Y = 25
GRAVITY = 0.2               # velocity added per simulation step (rows/step)
TERMINAL_VELOCITY = 2.0     # clamp downward velocity
FLAP_VELOCITY = -2.0        # negative = upward

# --- Obstacles ---
GAP_Y_MIN = 10              # gap center range [GAP_Y_MIN, GAP_Y_MAX)
GAP_Y_MAX = 40
GAP_SIZE_BASE = 20          # gap size at score 0, shrinks by 1 per point
GAP_SIZE_MIN = 2

# --- Seeding ---
SEED_DEFAULT = None         # None = new gap layout every launch

# --- Glyphs ---
PLAYER_GLYPH = "@"
OBSTACLE_GLYPH = "|"
BLANK_GLYPH = " "

# --- Colors (RGB) ---
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_RED = (255, 0, 0)
COLOR_YELLOW = (255, 255, 0)
COLOR_NAVY = (0, 0, 128)

# --- Debug ---
LOG_RUNS = False            # print a summary line whenever a run ends
