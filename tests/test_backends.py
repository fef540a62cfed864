import math
import numpy as np
import pytest

from nbodybench.backends import BACKENDS, get_backend
from nbodybench.backends import cpu, vectorized
from nbodybench.helpers import Body, XorShift64, generate_bodies


@pytest.fixture(params=BACKENDS)
def engine(request, config):
    with get_backend(request.param, config, workers=2) as backend:
        yield backend


def advance(engine, bodies, steps):
    state = engine.load(bodies)
    for _ in range(steps):
        state = engine.step(state)
    return engine.unload(state)


def test_get_backend(config):
    assert isinstance(get_backend('cpu', config), cpu.Backend)
    assert isinstance(get_backend('numpy', config), vectorized.Backend)
    with pytest.raises(ValueError):
        get_backend('cuda', config)


def test_mass_conserved(engine, bodies):
    state = engine.load(bodies)
    masses = [b.mass for b in bodies]
    for _ in range(10):
        state = engine.step(state)
        assert [b.mass for b in engine.unload(state)] == masses


def test_cardinality_fixed(engine, bodies):
    assert len(advance(engine, bodies, 5)) == len(bodies)


def test_step_leaves_input_untouched(engine, bodies):
    state = engine.load(bodies)
    before = engine.unload(state)
    engine.step(state)
    assert engine.unload(state) == before


def test_load_copies(engine, bodies):
    snapshot = [b.copy() for b in bodies]
    advance(engine, bodies, 3)
    assert bodies == snapshot


def test_single_body_moves_linearly(engine, config):
    body = generate_bodies(1, XorShift64())[0]
    steps = 100
    final = advance(engine, [body], steps)[0]
    # the self term has dx = dy = 0 so velocity never changes
    assert final.vx == body.vx
    assert final.vy == body.vy
    assert final.x == pytest.approx(body.x + body.vx * config['dt'] * steps, rel=1e-9, abs=1e-9)
    assert final.y == pytest.approx(body.y + body.vy * config['dt'] * steps, rel=1e-9, abs=1e-9)


def test_two_body_kicks_are_opposite(engine):
    a = Body(2.0, 0.0, 0.0, 0.0, 0.0)
    b = Body(0.5, 3.0, 4.0, 0.0, 0.0)
    a1, b1 = advance(engine, [a, b], 1)
    # the kick is not divided by the receiving mass, so the changes are equal and opposite
    assert a1.vx == pytest.approx(-b1.vx)
    assert a1.vy == pytest.approx(-b1.vy)
    assert a1.vx > 0 and a1.vy > 0
    assert a1.vy / a1.vx == pytest.approx(4.0 / 3.0)


def test_two_body_force_law(engine, config):
    a = Body(2.0, 0.0, 0.0, 0.0, 0.0)
    b = Body(0.5, 3.0, 4.0, 0.0, 0.0)
    a1, _ = advance(engine, [a, b], 1)
    dt = config['dt']
    inv_dist = 2.0 * 0.5 / math.sqrt(25.0 + 0.0001)
    assert a1.vx == pytest.approx(dt * 3.0 * inv_dist ** 3)
    assert a1.x == pytest.approx(dt * a1.vx)


def test_positions_use_updated_velocity(engine, config):
    a = Body(1.0, 0.0, 0.0, 1.0, 0.0)
    b = Body(1.0, 1.0, 0.0, 0.0, 0.0)
    a1, _ = advance(engine, [a, b], 1)
    assert a1.vx > 1.0
    assert a1.x == config['dt'] * a1.vx


def test_coincident_bodies_stay_finite(engine):
    bodies = [Body(5.0, 1.0, 1.0, 0.0, 0.0), Body(5.0, 1.0, 1.0, 0.0, 0.0)]
    for body in advance(engine, bodies, 3):
        assert math.isfinite(body.x) and math.isfinite(body.vx)


def test_empty_system(engine):
    assert advance(engine, [], 3) == []


def test_gravitational_constant_not_applied(config, bodies):
    scaled = dict(config, G=1000.0)
    assert advance(get_backend('cpu', config), bodies, 5) == advance(get_backend('cpu', scaled), bodies, 5)


@pytest.mark.parametrize('name', ['numpy', 'parallel'])
def test_matches_reference_loop(config, name):
    bodies = generate_bodies(9, XorShift64())
    expected = advance(get_backend('cpu', config), bodies, 20)
    with get_backend(name, config, workers=3) as engine:
        actual = advance(engine, bodies, 20)
    for e, a in zip(expected, actual):
        np.testing.assert_allclose([a.x, a.y, a.vx, a.vy], [e.x, e.y, e.vx, e.vy], rtol=1e-12, atol=0)


def test_vectorized_pack_roundtrip(bodies):
    state = vectorized.pack(bodies)
    assert state.shape == (5, len(bodies))
    assert vectorized.unpack(state) == bodies


def test_parallel_chunks_cover_all_rows(config):
    with get_backend('parallel', config, workers=4) as engine:
        chunks = engine._chunks(10)
        assert chunks[0][0] == 0 and chunks[-1][1] == 10
        assert all(prev[1] == nxt[0] for prev, nxt in zip(chunks, chunks[1:]))
        assert len(engine._chunks(2)) == 2


def test_parallel_rejects_zero_workers(config):
    with pytest.raises(ValueError):
        get_backend('parallel', config, workers=0)
