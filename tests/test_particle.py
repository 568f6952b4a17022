import numpy as np
import pytest

from nbody.engine import Particle, radius_for_mass
from nbody.errors import DegenerateDistanceError


def test_radius_follows_mass():
    p = Particle(x=0.0, y=0.0, mass=10.0)
    assert p.radius == pytest.approx(2 * np.sqrt(10.0))


def test_fixed_radius_must_match_mass():
    Particle(x=0.0, y=0.0, mass=25.0, fixed_radius=10.0)
    with pytest.raises(ValueError):
        Particle(x=0.0, y=0.0, mass=25.0, fixed_radius=3.0)


@pytest.mark.parametrize("mass", [0.0, -1.0])
def test_mass_must_be_positive(mass):
    with pytest.raises(ValueError):
        Particle(x=0.0, y=0.0, mass=mass)


def test_acceleration_points_at_other_with_inverse_square():
    a = Particle(x=0.0, y=0.0, mass=2.0)
    b = Particle(x=3.0, y=4.0, mass=5.0)
    acc = a.acceleration_from(b)
    # |F| = 2 * 5 / 25, a = F / 2
    assert np.linalg.norm(acc) == pytest.approx(5.0 / 25.0)
    assert acc / np.linalg.norm(acc) == pytest.approx(np.array([0.6, 0.8]))


def test_acceleration_scales_with_g():
    a = Particle(x=0.0, y=0.0, mass=1.0)
    b = Particle(x=2.0, y=0.0, mass=1.0)
    assert a.acceleration_from(b, g=3.0) == pytest.approx(3.0 * a.acceleration_from(b))


def test_compute_acceleration_from_overwrites():
    a = Particle(x=0.0, y=0.0)
    b = Particle(x=10.0, y=0.0)
    c = Particle(x=0.0, y=-10.0)
    a.compute_acceleration_from(b)
    a.compute_acceleration_from(c)
    assert a.acceleration == pytest.approx(a.acceleration_from(c))
    assert a.ax == pytest.approx(0.0)


def test_coincident_particles_raise():
    a = Particle(x=1.0, y=1.0)
    b = Particle(x=1.0, y=1.0)
    with pytest.raises(DegenerateDistanceError):
        a.acceleration_from(b)


def test_integrate_is_semi_implicit():
    p = Particle(x=0.0, y=0.0, vx=1.0, vy=0.0, ax=2.0, ay=-1.0)
    p.integrate(0.5)
    assert (p.vx, p.vy) == pytest.approx((2.0, -0.5))
    # position moves with the updated velocity
    assert (p.x, p.y) == pytest.approx((1.0, -0.25))


def test_collision_at_touching_distance():
    a = Particle(x=0.0, y=0.0, mass=1.0)
    b = Particle(x=4.0, y=0.0, mass=1.0)
    c = Particle(x=4.001, y=0.0, mass=1.0)
    assert a.is_colliding_with(b)
    assert not a.is_colliding_with(c)


def test_collision_is_symmetric():
    rng = np.random.RandomState(3)
    for _ in range(200):
        a = Particle(x=rng.uniform(-20, 20), y=rng.uniform(-20, 20),
                     mass=rng.uniform(0.5, 20))
        b = Particle(x=rng.uniform(-20, 20), y=rng.uniform(-20, 20),
                     mass=rng.uniform(0.5, 20))
        assert a.is_colliding_with(b) == b.is_colliding_with(a)


def test_merge_conserves_mass_and_momentum():
    a = Particle(x=1.0, y=2.0, vx=3.0, vy=-1.0, mass=2.0)
    b = Particle(x=-4.0, y=0.5, vx=-1.0, vy=2.0, mass=6.0)
    momentum = a.momentum + b.momentum
    a.merge_with(b)
    assert a.mass == pytest.approx(8.0)
    assert a.velocity == pytest.approx(momentum / 8.0)
    assert a.position == pytest.approx(np.array([(2 - 24) / 8, (4 + 3) / 8]))
    assert a.radius == pytest.approx(radius_for_mass(8.0))


def test_merge_is_order_independent():
    a1 = Particle(x=1.0, y=2.0, vx=3.0, vy=-1.0, mass=2.0)
    b1 = Particle(x=-4.0, y=0.5, vx=-1.0, vy=2.0, mass=6.0)
    a2 = Particle(x=1.0, y=2.0, vx=3.0, vy=-1.0, mass=2.0)
    b2 = Particle(x=-4.0, y=0.5, vx=-1.0, vy=2.0, mass=6.0)
    a1.merge_with(b1)
    b2.merge_with(a2)
    assert a1.full_state == pytest.approx(b2.full_state)


def test_near_coincident_particles_raise():
    a = Particle(x=0.0, y=0.0)
    b = Particle(x=1e-160, y=0.0)
    with pytest.raises(DegenerateDistanceError):
        a.acceleration_from(b)
