from pathlib import Path

# --- Display ---
WIDTH = 960
HEIGHT = 540
FPS = 60

# --- World / Physics ---
GROUND_RATIO = 0.9          # ground line as a fraction of viewport height
GRAVITY = 0.7               # px/tick^2, less gravity = slower fall
JUMP_IMPULSE = -22.0        # px/tick, negative = upward
JUMP_SUSTAIN = 0.3          # added to vy each tick while jump is held and rising
MAX_JUMPS = 2               # ground contact restores the double jump

# --- Player ---
PLAYER_X_RATIO = 0.15       # player's fixed x (world scrolls left)
PLAYER_START_Y_RATIO = 0.7
PLAYER_PLACEHOLDER_W = 80.0 # size until the sprite aspect is known
PLAYER_PLACEHOLDER_H = 110.0
PLAYER_H_RATIO = 0.12       # sprite height as a fraction of viewport height
PLAYER_W_SHRINK = 0.9
PLAYER_GROUND_GAP = 10      # lift above the ground after a resize
START_LIVES = 3

# --- World clock ---
START_SPEED = 5.0           # px/tick
SPEED_RAMP = 0.0005         # added to speed every running tick
SPAWN_INTERVAL = 140        # ticks between pillars
SEED_DEFAULT = 12345

# --- Pillars ---
PILLAR_MIN_H = 80
PILLAR_H_RANGE = 100
PILLAR_MIN_W = 100
PILLAR_W_RANGE = 80
SPAWN_OFFSET_X = 80         # spawn just past the right edge
OFFSCREEN_MARGIN = 50       # pruned once the trailing edge is past -50

# --- Coins ---
COIN_CHANCE = 0.4
COIN_RADIUS = 20
COIN_LIFT = 50              # gap between pillar top and coin centre
COIN_POINTS = 5
PASS_POINTS = 1

# --- Day/Night ---
SKY_STEP = 0.002

# --- Colors (RGB) ---
COLOR_GROUND = (75, 79, 82)
COLOR_FG = (255, 255, 255)
COLOR_ACCENT = (120, 200, 255)
COLOR_PILLAR = (140, 98, 57)
COLOR_COIN = (250, 204, 21)
COLOR_DANGER = (255, 86, 110)
COLOR_PANEL = (20, 28, 40)

# --- Assets / storage ---
ASSETS_DIR = Path(__file__).resolve().parents[2] / "assets"
PLAYER_SPRITE = "beard.png"
COIN_SPRITE = "coin.png"
JUMP_SOUND = "jump.mp3"
HIT_SOUND = "collision.mp3"
SOUND_VOLUME = 0.8
BEST_SCORE_PATH = Path.home() / ".beard_dash" / "best_score.json"
