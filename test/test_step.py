import math
from fractions import Fraction

import equinox as eqx
import jax.numpy as jnp
import pytest
import rungekutta as rk

from .helpers import all_tableaus, tree_allclose


class _ExactGrowth(rk.AbstractSystem):
    def vf(self, t, y):
        return y


def test_midpoint_growth(record):
    def vector_field(t, y, args):
        record.append((t, y))
        return y

    tableau = rk.ButcherTableau.build(
        [[0.0, 0.0], [0.5, 0.0]], [0.0, 1.0], [0.0, 0.5], num_stages=2
    )
    y1 = tableau.step(rk.System(vector_field), 0.0, 1.0, 1.0)
    assert tree_allclose(y1, jnp.asarray(2.5))

    [(t0, y0), (t_half, y_half)] = record
    assert t0 == 0.0
    assert y0 == 1.0
    assert t_half == 0.5
    assert y_half == 1.5


def test_midpoint_exact():
    half = Fraction(1, 2)
    tableau = rk.ButcherTableau.build(
        [[0, 0], [half, 0]], [0, 1], [0, half], num_stages=2
    )
    y1 = tableau.step(_ExactGrowth(), Fraction(0), Fraction(1), Fraction(1))
    assert y1 == Fraction(5, 2)
    assert isinstance(y1, Fraction)


def test_backward(record):
    def vector_field(t, y, args):
        record.append(t)
        return y

    y1 = rk.MIDPOINT.step(rk.System(vector_field), 0.0, 1.0, -1.0)
    # k0 = 1, y_half = 1 - 0.5 * 1, k1 = 0.5, y1 = 1 - 1 * 0.5
    assert tree_allclose(y1, jnp.asarray(0.5))
    assert record == [0.0, -0.5]


def test_backward_undoes_forward():
    system = rk.System(lambda t, y, args: -y)
    y0 = jnp.array([1.0, -2.0, 3.0])
    y1 = rk.RK4.step(system, 0.0, y0, 1e-3)
    y2 = rk.RK4.step(system, 1e-3, y1, -1e-3)
    assert tree_allclose(y2, y0, rtol=1e-10, atol=1e-10)


@pytest.mark.parametrize("tableau", all_tableaus)
def test_num_evaluations(tableau, record):
    def vector_field(t, y, args):
        record.append(t)
        return jnp.cos(t) * y

    tableau.step(rk.System(vector_field), 1.0, jnp.array([1.0, 2.0]), 0.25)
    assert len(record) == tableau.num_stages
    assert record == [1.0 + c * 0.25 for c in tableau.nodes]


@pytest.mark.parametrize("tableau", all_tableaus)
def test_linear_time(tableau):
    # Every consistent method integrates y' = 1 exactly.
    system = rk.System(lambda t, y, args: jnp.ones_like(y))
    y1 = tableau.step(system, 0.0, jnp.array(2.0), 0.5)
    assert tree_allclose(y1, jnp.array(2.5))


def test_euler():
    system = rk.System(lambda t, y, args: -2 * y)
    y1 = rk.EULER.step(system, 0.0, jnp.array([1.0, 4.0]), 0.1)
    assert tree_allclose(y1, jnp.array([0.8, 3.2]))


def test_pytree_state():
    system = rk.System(lambda t, y, args: {"a": -y["a"], "b": (y["b"][0], 2 * t)})
    y0 = {"a": jnp.array([1.0, 2.0]), "b": (jnp.array(3.0), jnp.array(0.0))}
    y1 = rk.EULER.step(system, 1.0, y0, 0.1)
    expected = {"a": jnp.array([0.9, 1.8]), "b": (jnp.array(3.3), jnp.array(0.2))}
    assert tree_allclose(y1, expected)


def test_rk4_exponential():
    system = rk.System(lambda t, y, args: y)
    y1 = rk.RK4.step(system, 0.0, jnp.array(1.0), 0.1)
    # RK4 reproduces the Taylor series of exp up to and including the h^4 term.
    taylor = sum(0.1**n / math.factorial(n) for n in range(5))
    assert tree_allclose(y1, jnp.array(taylor), rtol=1e-12, atol=0)


def test_vf_exception_propagates():
    class _Failed(Exception):
        pass

    def vector_field(t, y, args):
        if t > 0:
            raise _Failed
        return y

    with pytest.raises(_Failed):
        rk.RK4.step(rk.System(vector_field), 0.0, jnp.array(1.0), 0.1)


def test_same_tableau_same_step():
    def build():
        return rk.ButcherTableau.build(
            [[0.0, 0.0], [2 / 3, 0.0]], [0.25, 0.75], [0.0, 2 / 3], num_stages=2
        )

    system = rk.System(lambda t, y, args: jnp.sin(t) - y**2)
    y0 = jnp.array([0.3, 0.7])
    assert tree_allclose(
        build().step(system, 0.2, y0, 0.05), build().step(system, 0.2, y0, 0.05)
    )
    assert tree_allclose(
        build().step(system, 0.2, y0, 0.05), rk.RALSTON.step(system, 0.2, y0, 0.05)
    )


def test_jit():
    system = rk.System(lambda t, y, args: -args * y, args=jnp.array(2.0))

    @eqx.filter_jit
    def step(solver, system, y0):
        return solver.step(system, 0.0, y0, 0.1)

    y0 = jnp.array([1.0, 2.0])
    solver = rk.ExplicitRungeKutta(rk.RK4)
    assert tree_allclose(step(solver, system, y0), rk.RK4.step(system, 0.0, y0, 0.1))
