"""
Quick demo: watch the disc orbit the anchor and clump together.
Run: python demo.py
Press Q or close window to exit.
"""
import numpy as np

from nbody.generator import new_world
from nbody.renderer import Renderer, AppearanceConfig
import nbody as P

# Build the world using centralized defaults
appearance = AppearanceConfig()
world = new_world(np.random.RandomState(P.SEED), (appearance.width, appearance.height))
start_mass = world.total_mass()
print(f"Particles: {len(world)}")

Renderer(appearance).play(world)

print(f"Ticks: {world.tick_count}, merges: {len(world.merge_log)}, "
      f"particles left: {len(world)}")
print(f"Mass drift: {abs(world.total_mass() - start_mass):.10f}")
