import typing
from typing import Any, TYPE_CHECKING, Union
from typing_extensions import TypeAlias

import numpy as np
from jaxtyping import Array, ArrayLike, Float, Int, PyTree, Shaped


if TYPE_CHECKING:
    FloatScalarLike = Union[float, Array, np.ndarray]
    IntScalarLike = Union[int, Array, np.ndarray]
elif getattr(typing, "GENERATING_DOCUMENTATION", False):
    # Skip the union with Array in docs.
    FloatScalarLike = float
    IntScalarLike = int
else:
    FloatScalarLike = Float[ArrayLike, ""]
    IntScalarLike = Int[ArrayLike, ""]


RealScalarLike = Union[FloatScalarLike, IntScalarLike]

# Tableau coefficients are stored exactly as they were passed in, so that exact
# scalar types (e.g. `fractions.Fraction`) survive into the step.
Coefficient: TypeAlias = Any

Y = PyTree[Shaped[ArrayLike, "?*y"], "Y"]
Args = PyTree[Any]
