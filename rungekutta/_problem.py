import equinox as eqx

from ._custom_types import RealScalarLike, Y
from ._system import AbstractSystem


class InitialValueProblem(eqx.Module):
    r"""An initial value problem: a system together with a point $y(t_0) = y_0$ at which
    its solution is known.

    Despite the name, the known point need not be at the start of the interval of
    interest; solves may proceed forwards or backwards from it.
    """

    system: AbstractSystem
    t0: RealScalarLike
    y0: Y

    def initial_value(self, t0: RealScalarLike, y0: Y) -> "InitialValueProblem":
        """Returns a copy of this problem, with the known point replaced by
        $y(t_0) = y_0$.
        """
        return InitialValueProblem(self.system, t0, y0)


InitialValueProblem.__init__.__doc__ = """**Arguments:**

- `system`: the [`rungekutta.AbstractSystem`][] to solve.
- `t0`: the time at which the state is known.
- `y0`: the state at time `t0`. Any PyTree.
"""
