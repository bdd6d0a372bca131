import numpy as np
import pytest

from flappy_sim.particles import PARTICLE_DECAY, PARTICLE_GRAVITY, Particle, ParticleBuffer


@pytest.fixture
def buffer(rng):
    return ParticleBuffer(rng, max_count=200, keep_count=100)


def test_emit_adds_fresh_particles(buffer):
    buffer.emit(10, 20, "#FFFFFF", 5)
    assert len(buffer) == 5
    particles = buffer.particles()
    assert all(isinstance(p, Particle) for p in particles)
    assert all(p.x == 10 and p.y == 20 and p.life == 1.0 for p in particles)
    assert all(p.color == "#FFFFFF" for p in particles)
    assert all(2 <= p.size < 6 for p in particles)
    assert all(-2 <= p.vx < 2 and -4 <= p.vy < 0 for p in particles)


def test_emit_nothing(buffer):
    buffer.emit(0, 0, "#FFFFFF", 0)
    assert len(buffer) == 0


def test_update_integrates_and_decays(buffer):
    buffer.emit(0, 0, "#FFD700", 3)
    before = buffer.particles()
    buffer.update(1.0)
    after = buffer.particles()
    for b, a in zip(before, after):
        assert a.vy == pytest.approx(b.vy + PARTICLE_GRAVITY)
        assert a.x == pytest.approx(b.x + b.vx)
        assert a.y == pytest.approx(b.y + b.vy + PARTICLE_GRAVITY)
        assert a.life == pytest.approx(1 - PARTICLE_DECAY)


def test_dead_particles_are_culled(buffer):
    buffer.emit(0, 0, "#FFD700", 4)
    buffer.update(30.0)
    assert len(buffer) == 4
    buffer.update(30.0)
    assert len(buffer) == 0


def test_cap_keeps_newest(buffer):
    buffer.emit(0, 0, "#FFFFFF", 150)
    buffer.emit(0, 0, "#FF0000", 51)
    buffer.update(0.0)
    assert len(buffer) == 100
    colors = [p.color for p in buffer.particles()]
    assert colors[:49] == ["#FFFFFF"] * 49
    assert colors[49:] == ["#FF0000"] * 51


def test_cap_not_applied_at_limit(buffer):
    buffer.emit(0, 0, "#FFFFFF", 200)
    buffer.update(0.0)
    assert len(buffer) == 200


def test_clear(buffer):
    buffer.emit(0, 0, "#FFFFFF", 10)
    buffer.clear()
    assert len(buffer) == 0
    assert buffer.particles() == []


def test_seeded_buffers_match():
    a = ParticleBuffer(np.random.default_rng(42))
    b = ParticleBuffer(np.random.default_rng(42))
    a.emit(1, 2, "#FFFFFF", 8)
    b.emit(1, 2, "#FFFFFF", 8)
    assert a.particles() == b.particles()
