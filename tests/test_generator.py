import numpy as np
import pytest

import nbody as P
from nbody.engine import radius_for_mass
from nbody.generator import new_world, GeneratorConfig, anchor_particle


def test_seeded_worlds_are_identical():
    a = new_world(np.random.RandomState(11))
    b = new_world(np.random.RandomState(11))
    assert np.array_equal(a.get_full_state(), b.get_full_state())


def test_config_seed_used_without_rng():
    a = new_world(config=GeneratorConfig(seed=5))
    b = new_world(np.random.RandomState(5))
    assert np.array_equal(a.get_full_state(), b.get_full_state())


def test_count_within_range_plus_anchor():
    config = GeneratorConfig(n_particles_range=(10, 20))
    for seed in range(10):
        world = new_world(np.random.RandomState(seed), config=config)
        assert 11 <= len(world) <= 21


def test_anchor_is_last_at_origin_and_still():
    world = new_world(np.random.RandomState(0))
    anchor = world.particles()[-1]
    assert (anchor.x, anchor.y, anchor.vx, anchor.vy) == (0.0, 0.0, 0.0, 0.0)
    assert anchor.mass == P.ANCHOR_MASS
    assert anchor.radius == pytest.approx(radius_for_mass(P.ANCHOR_MASS))
    assert anchor.color == P.ANCHOR_COLOR


def test_velocities_are_tangential():
    world = new_world(np.random.RandomState(1))
    for p in world.particles()[:-1]:
        assert np.dot(p.position, p.velocity) == pytest.approx(0.0, abs=1e-9)
        lo, hi = P.TANGENTIAL_SPEED_RANGE
        assert lo <= p.speed <= hi


def test_orbits_fill_the_hinted_display():
    world = new_world(np.random.RandomState(2), (400, 1000))
    lo, hi = P.ORBIT_RADIUS_RANGE
    for p in world.particles()[:-1]:
        r = np.hypot(p.x, p.y)
        assert lo * 200 <= r <= hi * 200


def test_masses_and_radii_in_range():
    world = new_world(np.random.RandomState(3))
    lo, hi = P.MASS_RANGE
    for p in world.particles()[:-1]:
        assert lo <= p.mass <= hi
        assert p.radius == pytest.approx(2 * np.sqrt(p.mass))


def test_fresh_world_can_step():
    world = new_world(np.random.RandomState(4),
                      config=GeneratorConfig(n_particles_range=(5, 10)))
    world.step()
    assert world.tick_count == 1


def test_custom_anchor_mass():
    world = new_world(np.random.RandomState(0),
                      config=GeneratorConfig(n_particles_range=(0, 0), anchor_mass=50.0))
    (anchor,) = world.particles()
    assert anchor.mass == 50.0


@pytest.mark.parametrize("kwargs", [
    dict(n_particles_range=(5, 1)),
    dict(mass_range=(0.0, 1.0)),
    dict(orbit_radius_range=(0.0, 1.0)),
    dict(anchor_mass=-3.0),
])
def test_bad_config_rejected(kwargs):
    with pytest.raises(ValueError):
        GeneratorConfig(**kwargs)


def test_bad_extent_rejected():
    with pytest.raises(ValueError):
        new_world(np.random.RandomState(0), (0, 600))


def test_anchor_particle_defaults():
    a = anchor_particle()
    assert a.mass == P.ANCHOR_MASS
    assert a.velocity == pytest.approx(np.zeros(2))
