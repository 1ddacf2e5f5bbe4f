import abc
from collections.abc import Callable

import equinox as eqx
import jax.numpy as jnp
import jax.tree_util as jtu

from ._custom_types import Args, RealScalarLike, Y
from ._misc import upcast_or_raise


class AbstractSystem(eqx.Module):
    r"""Abstract base class for a differential equation system

    $\frac{\mathrm{d}y}{\mathrm{d}t} = f(t, y(t))$.

    Subclass this directly to use state or time types that JAX does not understand,
    e.g. `fractions.Fraction` for exact arithmetic. The solvers only ever call
    [`rungekutta.AbstractSystem.vf`][], once per stage, and propagate any exception it
    raises.
    """

    @abc.abstractmethod
    def vf(self, t: RealScalarLike, y: Y) -> Y:
        """The vector field.

        **Arguments:**

        - `t`: the time at which to evaluate the derivative.
        - `y`: the state; a PyTree. Implementations are free to consume this and
            reuse it when building their output.

        **Returns:**

        The derivative of `y` with respect to `t`: a PyTree with the same structure as
        `y`.
        """


class System(AbstractSystem):
    r"""A system $\frac{\mathrm{d}y}{\mathrm{d}t} = f(t, y(t), args)$ defined by a
    callable.

    `vector_field` should return some PyTree, with the same structure as the state,
    and with every leaf shape-broadcastable and dtype-upcastable to the equivalent leaf
    of the state.

    !!! example

        ```python
        vector_field = lambda t, y, args: -args * y
        system = System(vector_field, args=0.5)
        ```
    """

    vector_field: Callable[[RealScalarLike, Y, Args], Y]
    args: Args = None

    def vf(self, t: RealScalarLike, y: Y) -> Y:
        out = self.vector_field(t, y, self.args)
        if jtu.tree_structure(out) != jtu.tree_structure(y):
            raise ValueError(
                "The vector field inside `System` must return a pytree with the "
                "same structure as `y`."
            )

        def _broadcast_and_upcast(oi, yi):
            oi = jnp.broadcast_to(oi, jnp.shape(yi))
            oi = upcast_or_raise(
                oi,
                yi,
                "the vector field passed to `System`",
                "the corresponding leaf of `y`",
            )
            return oi

        return jtu.tree_map(_broadcast_and_upcast, out, y)


System.__init__.__doc__ = """**Arguments:**

- `vector_field`: A callable representing the vector field. This callable takes three
    arguments `(t, y, args)`. `t` is a scalar representing the time. `y` is the state
    of the system. `args` is whatever was passed as `args` here.
- `args`: Optional. Any extra parameters to forward to `vector_field`.
"""
