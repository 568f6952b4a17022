import numpy as np
import matplotlib.pyplot as plt
import os
import nbody as P
from nbody.engine import generate_trajectory, WorldConfig
from nbody.generator import new_world, GeneratorConfig
from nbody.metrics import compute_total_mass, compute_momentum, mass_drift, momentum_drift
from nbody.renderer import Renderer, save_frames


def evaluate(n_steps=P.N_STEPS, seed=P.SEED):
    print("Generating world")
    world = new_world(np.random.RandomState(seed), (P.DISPLAY_WIDTH, P.DISPLAY_HEIGHT),
                      config=GeneratorConfig(), world_config=WorldConfig())
    print(f"Particles: {len(world)}, total mass: {world.total_mass():.4f}")

    renderer = Renderer()
    first_frame = renderer.render(world.particles())

    print(f"Running {n_steps} ticks")
    traj = generate_trajectory(world, n_steps=n_steps)
    last_frame = renderer.render(world.particles())

    full_states = traj['full_states']
    mass = compute_total_mass(full_states)
    momentum = compute_momentum(full_states)

    print(f"Merges:          {len(traj['merges'])}")
    print(f"Particles left:  {traj['n_particles'][-1]}")
    print(f"Mass drift:      {mass_drift(full_states):.3e} (relative)")
    print(f"Momentum drift:  {momentum_drift(full_states):.3e} (absolute)")

    # Plotting
    os.makedirs('results/plots', exist_ok=True)

    plt.figure(figsize=(10, 5))
    plt.plot(traj['time'], mass - mass[0])
    plt.title('Total mass change')
    plt.xlabel('time')
    plt.savefig('results/plots/mass.png')
    plt.close()

    plt.figure(figsize=(10, 5))
    plt.plot(traj['time'], momentum[:, 0] - momentum[0, 0], label='px')
    plt.plot(traj['time'], momentum[:, 1] - momentum[0, 1], label='py')
    plt.title('Total momentum change')
    plt.xlabel('time')
    plt.legend()
    plt.savefig('results/plots/momentum.png')
    plt.close()

    plt.figure(figsize=(10, 5))
    plt.plot(traj['time'], traj['n_particles'])
    plt.title('Particle count (merges)')
    plt.xlabel('time')
    plt.savefig('results/plots/n_particles.png')
    plt.close()

    save_frames([first_frame, last_frame], 'results/frames')
    print("Plots saved to results/plots/, frames to results/frames/")


if __name__ == "__main__":
    evaluate()
