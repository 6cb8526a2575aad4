# --- Display ---
WIDTH = 960
HEIGHT = 540
MIN_WIDTH = 320
MIN_HEIGHT = 320            # keeps every random height band well formed
FPS = 60

# --- World / Physics (per frame, no dt) ---
GRAVITY = 0.7
GLIDE_GRAVITY = 0.075       # gravity while gliding and falling
GLIDE_DRAG = 0.975          # horizontal decay while gliding and falling
JUMP_FORCE = -14.0
MOVE_SPEED = 5.0
MAX_JUMPS = 2
FALL_MARGIN = 100           # below HEIGHT + margin -> game over
CAMERA_LEAD = 1 / 3         # player sits at this fraction of the screen width

# --- Player ---
PLAYER_SIZE = 40
PLAYER_SPAWN = (200.0, 300.0)

# --- Level generation ---
PLATFORM_WIDTH = 180
PLATFORM_HEIGHT = 25
PLATFORM_GAP = 220
PLATFORM_GAP_JITTER = 50
PLATFORM_BAND_TOP = 0.5     # fraction of height, upper limit of platform tops
PLATFORM_BAND_BOTTOM = 100  # px above the bottom edge
INITIAL_PLATFORMS = 20
GROUND_X = -10000
GROUND_W = 20000
GROUND_H = 40
TERRAIN_LOOKAHEAD = 1000    # generate while last platform ends before cam right + this
PLATFORM_PRUNE_MARGIN = 500
SEED_DEFAULT = 12345

# --- Coins ---
COIN_SIZE = 17.5
COIN_POINTS = 10
COIN_ABOVE_PLATFORM = 40
COIN_EDGE_INSET = 20
INITIAL_COIN_CHANCE = 0.4   # per initial platform
INITIAL_SCATTERED_COINS = 15
PLATFORM_COIN_CHANCE = 0.5  # per generated platform
COIN_SPAWN_CHANCE = 0.02    # per frame
MAX_ACTIVE_COINS = 20
COIN_SPAWN_AHEAD = (100, 500)
COIN_PRUNE_MARGIN = 100

# --- Colors (RGB) ---
COLOR_SKY = (135, 206, 235)
COLOR_PLAT = (139, 69, 19)
COLOR_COIN = (255, 215, 0)
COLOR_PLAYER = (255, 70, 70)
COLOR_GLIDE = (200, 200, 255, 150)
COLOR_FG = (255, 255, 255)
COLOR_DANGER = (255, 0, 0)
COLOR_HUD = (20, 30, 50)
