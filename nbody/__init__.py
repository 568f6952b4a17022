# ── Central defaults (tune here, not scattered across files) ──

# Physics
G = 1.0
DT = 0.05

# Initial conditions
N_PARTICLES_RANGE = (50, 150)
ORBIT_RADIUS_RANGE = (0.25, 1.0)    # fraction of half the display extent
MASS_RANGE = (1.0, 4.0)
TANGENTIAL_SPEED_RANGE = (0.5, 2.5)
ANCHOR_MASS = 1000.0

# View / rendering
VIEW_INFLATION = 1.2
DISPLAY_WIDTH = 800
DISPLAY_HEIGHT = 600
BG_COLOR = (0, 0, 0)
ANCHOR_COLOR = (255, 220, 80)
FPS = 60

# Runs
N_STEPS = 2000
SEED = 42
