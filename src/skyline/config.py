from pathlib import Path

# --- Display ---
WIDTH = 960
HEIGHT = 540
FPS = 60
CAPTION = "Skyline Flyer"

# --- Responsive sizing ---
SCALE_REFERENCE_H = 500     # below this viewport height every size shrinks

# --- World / Physics (per tick, not per second) ---
GRAVITY = 0.5               # px/tick^2
JUMP_VY = -8.0              # upward impulse
SCROLL_PX_PER_TICK = 2.0    # building speed

# --- Player ---
PLAYER_X = 100
PLAYER_Y = 250
PLAYER_W = 50
PLAYER_H = 40
SPRITE_PATH = Path(__file__).resolve().parents[2] / "assets" / "img" / "fly.png"

# --- Buildings ---
BUILDING_W = 90
BUILDING_H = 1400
GAP_MIN_W = 200             # recycled building spacing, before scaling
GAP_MAX_W = 500
# (x, y) of the authored course; x is never scaled, y is
BUILDING_LAYOUT = (
    (500, 450), (700, 400), (850, 350), (900, 350),
    (1050, 150), (2500, 450), (2900, 400), (3150, 350),
    (3900, 450), (4200, 400), (4400, 200), (4700, 150),
)
POOL_SIZE = len(BUILDING_LAYOUT)

# --- HUD ---
HUD_FONT = ("arial", 24)
HUD_POS = (20, 16)
OVERLAY_FONT = ("arial", 28)

# --- Messages ---
MSG_GROUND = "You crashed into the ground!"
MSG_BUILDING = "You crashed into a building!"

# --- Colors (RGB) ---
COLOR_BG = (126, 192, 238)
COLOR_FG = (255, 255, 255)
COLOR_ACCENT = (255, 196, 64)
COLOR_BUILDING = (0, 0, 0)
COLOR_PANEL = (20, 28, 44)
COLOR_BUTTON = (40, 60, 90)
COLOR_BUTTON_EDGE = (90, 130, 180)
