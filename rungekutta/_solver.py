import equinox as eqx

from ._custom_types import RealScalarLike, Y
from ._problem import InitialValueProblem
from ._system import AbstractSystem
from ._tableau import ButcherTableau


class SolverState(eqx.Module):
    """The current time and state of a solve."""

    t: RealScalarLike
    y: Y


class ExplicitRungeKutta(eqx.Module):
    """A fixed-step explicit Runge--Kutta solver, defined by its tableau.

    !!! example

        ```python
        solver = ExplicitRungeKutta(RK4)
        state = solver.init(problem)
        state = solver.advance(problem.system, state, 0.1)
        ```
    """

    tableau: ButcherTableau = eqx.field(static=True)

    @property
    def num_stages(self) -> int:
        return self.tableau.num_stages

    def init(self, problem: InitialValueProblem) -> SolverState:
        return SolverState(problem.t0, problem.y0)

    def step(
        self, system: AbstractSystem, t0: RealScalarLike, y0: Y, dt: RealScalarLike
    ) -> Y:
        """Returns the state at time `t0 + dt`.

        See [`rungekutta.ButcherTableau.step`][].
        """
        return self.tableau.step(system, t0, y0, dt)

    def advance(
        self, system: AbstractSystem, state: SolverState, dt: RealScalarLike
    ) -> SolverState:
        """Steps the solve by `dt`, which may be negative to step backwards in time."""
        y1 = self.step(system, state.t, state.y, dt)
        return SolverState(state.t + dt, y1)


ExplicitRungeKutta.__init__.__doc__ = """**Arguments:**

- `tableau`: the [`rungekutta.ButcherTableau`][] of the method, e.g.
    `rungekutta.RK4`.
"""
