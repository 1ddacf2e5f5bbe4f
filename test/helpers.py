import equinox as eqx
import jax.numpy as jnp
import jax.tree_util as jtu
import rungekutta as rk


def _no_nan(x):
    if eqx.is_array(x):
        return x.at[jnp.isnan(x)].set(8.9568)  # arbitrary magic value
    else:
        return x


def tree_allclose(x, y, *, rtol=1e-5, atol=1e-8, equal_nan=False):
    if equal_nan:
        x = jtu.tree_map(_no_nan, x)
        y = jtu.tree_map(_no_nan, y)
    return eqx.tree_equal(x, y, typematch=True, rtol=rtol, atol=atol)


all_tableaus = (
    rk.EULER,
    rk.MIDPOINT,
    rk.HEUN,
    rk.RALSTON,
    rk.KUTTA3,
    rk.SSPRK3,
    rk.RK4,
    rk.RK4_38,
)

tableau_orders = {
    rk.EULER: 1,
    rk.MIDPOINT: 2,
    rk.HEUN: 2,
    rk.RALSTON: 2,
    rk.KUTTA3: 3,
    rk.SSPRK3: 3,
    rk.RK4: 4,
    rk.RK4_38: 4,
}
