import numbers

import equinox as eqx
import jax
import jax.numpy as jnp
import jax.tree_util as jtu
import numpy as np
from jaxtyping import ArrayLike, PyTree


def upcast_or_raise(
    x: ArrayLike, array_for_dtype: ArrayLike, x_name: str, dtype_name: str
):
    """If `JAX_NUMPY_DTYPE_PROMOTION=strict`, then this will raise an error if
    `jnp.result_type(x, array_for_dtype)` is not the same as `array_for_dtype.dtype`.
    It will then cast `x` to `jnp.result_type(x, array_for_dtype)`.

    Thus if `JAX_NUMPY_DTYPE_PROMOTION=standard`, then the usual anything-goes behaviour
    will apply. If `JAX_NUMPY_DTYPE_PROMOTION=strict` then we loosen from prohibiting
    all dtype casting, to still allowing upcasting.
    """
    x_dtype = jnp.result_type(x)
    target_dtype = jnp.result_type(array_for_dtype)
    with jax.numpy_dtype_promotion("standard"):
        promote_dtype = jnp.result_type(x_dtype, target_dtype)
    config_value = jax.config.jax_numpy_dtype_promotion  # pyright: ignore
    if config_value == "strict":
        if target_dtype != promote_dtype:
            raise ValueError(
                f"When `JAX_NUMPY_DTYPE_PROMOTION=strict`, then {x_name} must have "
                f"a dtype that can be promoted to the dtype of {dtype_name}. "
                f"However {x_name} had dtype {x_dtype} and {dtype_name} had dtype "
                f"{target_dtype}."
            )
    elif config_value != "standard":
        assert False, f"Unrecognised `JAX_NUMPY_DTYPE_PROMOTION={config_value}`"
    return jnp.astype(x, promote_dtype)


def is_zero(x) -> bool:
    """Whether a tableau coefficient is the additive zero of its type.

    Works for Python scalars, `fractions.Fraction`, and NumPy/JAX scalars alike.
    """
    return bool(np.all(np.asarray(x) == 0))


def is_real(x) -> bool:
    return isinstance(x, numbers.Real)


def tree_isfinite(tree: PyTree) -> bool:
    """Whether every floating point leaf of `tree` is finite. Leaves that are not
    floating point (integers, `fractions.Fraction`, ...) cannot overflow to `inf`/`nan`
    and so are ignored.
    """
    leaves = jtu.tree_leaves(eqx.filter(tree, eqx.is_inexact_array_like))
    return all(bool(jnp.all(jnp.isfinite(leaf))) for leaf in leaves)
