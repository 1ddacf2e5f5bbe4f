import warnings
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

import jax.tree_util as jtu
import numpy as np

from ._custom_types import Coefficient, RealScalarLike, Y
from ._misc import is_real, is_zero
from ._system import AbstractSystem


class TableauError(ValueError):
    """Raised when the coefficients passed to [`rungekutta.ButcherTableau`][] do not
    describe an explicit Runge--Kutta method.

    Catch one of the subclasses to find out which property was violated.
    """

    message = "The tableau is invalid."

    def __init__(self, message: Optional[str] = None):
        super().__init__(self.message if message is None else message)


class MatrixDimError(TableauError):
    message = "The matrix has the wrong dimension."


class WeightsDimError(TableauError):
    message = "The weights vector has the wrong dimension."


class NodesDimError(TableauError):
    message = "The nodes vector has the wrong dimension."


class NonLowerTriangularMatrixError(TableauError):
    message = "The matrix is not strictly lower triangular."


def _collect(
    values: Iterable[Coefficient], num_stages: int, error: type[TableauError]
):
    values = tuple(values)
    if len(values) != num_stages:
        raise error(
            f"{error.message} Expected {num_stages} elements, got {len(values)}."
        )
    return values


def _collect_matrix(rows: Iterable[Iterable[Coefficient]], num_stages: int):
    # Only the first `num_stages` rows are consumed.
    rows = iter(rows)
    matrix = []
    for i in range(num_stages):
        try:
            row = next(rows)
        except StopIteration:
            raise MatrixDimError(
                f"{MatrixDimError.message} Expected {num_stages} rows, got {i}."
            ) from None
        try:
            row = tuple(row)
        except TypeError:
            raise MatrixDimError(
                f"{MatrixDimError.message} Row {i} is not a sequence."
            ) from None
        if len(row) != num_stages:
            raise MatrixDimError(
                f"{MatrixDimError.message} Expected row {i} to have {num_stages} "
                f"elements, got {len(row)}."
            )
        matrix.append(row)
    return tuple(matrix)


def _check_consistency(matrix, weights, nodes):
    coefficients = [*weights, *nodes, *(a for row in matrix for a in row)]
    if not all(is_real(x) for x in coefficients):
        return
    if not np.isclose(float(sum(weights)), 1.0):
        warnings.warn(
            f"The weights of the tableau sum to {float(sum(weights))} rather than 1, "
            "so the method is not consistent.",
            stacklevel=4,
        )
    for i, (row, node) in enumerate(zip(matrix, nodes)):
        if not np.isclose(float(sum(row)), float(node)):
            warnings.warn(
                f"Stage {i} has node {float(node)} but its matrix row sums to "
                f"{float(sum(row))}.",
                stacklevel=4,
            )


# Not a pytree node!
@dataclass(frozen=True)
class ButcherTableau:
    r"""The Butcher tableau of an explicit Runge--Kutta method with `num_stages`
    stages, together with the naive algorithm for taking a step with it.

    Each step is computed as

    $y_1 = y_0 + \Delta t \sum_{i=1}^s b_i k_i$

    where each stage $k_i$ is

    $k_i = f(t_0 + c_i \Delta t, y_0 + \Delta t \sum_{j=1}^{i-1} a_{ij} k_j)$.

    The tableau is validated once, on construction, and is immutable afterwards.
    """

    matrix: tuple[tuple[Coefficient, ...], ...]
    weights: tuple[Coefficient, ...]
    nodes: tuple[Coefficient, ...]
    num_stages: int

    # Example!
    #
    # The explicit midpoint method has tableau
    #
    #   0 |  0   0
    # 1/2 | 1/2  0
    # ----+--------
    #     |  0   1
    #
    # which is written as
    # ButcherTableau.build(
    #     [[0, 0], [0.5, 0]],  # matrix, a_ij, row by row
    #     [0, 1],  # weights, b_i
    #     [0, 0.5],  # nodes, c_i
    #     num_stages=2,
    # )
    #
    # Unlike some other conventions, the full square matrix and the first node are
    # written out explicitly.

    def __post_init__(self):
        if self.num_stages < 1:
            raise ValueError(
                f"`num_stages` must be at least 1, got {self.num_stages}."
            )
        weights = _collect(self.weights, self.num_stages, WeightsDimError)
        nodes = _collect(self.nodes, self.num_stages, NodesDimError)
        matrix = _collect_matrix(self.matrix, self.num_stages)

        for i, row in enumerate(matrix):
            for j, value in enumerate(row):
                if i <= j and not is_zero(value):
                    raise NonLowerTriangularMatrixError(
                        f"{NonLowerTriangularMatrixError.message} Found nonzero "
                        f"coefficient {value} at row {i}, column {j}."
                    )

        _check_consistency(matrix, weights, nodes)
        object.__setattr__(self, "matrix", matrix)
        object.__setattr__(self, "weights", weights)
        object.__setattr__(self, "nodes", nodes)

    @classmethod
    def build(
        cls,
        matrix: Iterable[Iterable[Coefficient]],
        weights: Iterable[Coefficient],
        nodes: Iterable[Coefficient],
        *,
        num_stages: int,
    ) -> "ButcherTableau":
        """Build and validate a tableau. Equivalent to calling the constructor.

        **Arguments:**

        - `matrix`: the coefficients $a_{ij}$, as an iterable of `num_stages` rows, each
            of `num_stages` elements. Only the first `num_stages` rows are read.
        - `weights`: the `num_stages` coefficients $b_i$.
        - `nodes`: the `num_stages` coefficients $c_i$.
        - `num_stages`: the number of stages of the method. The data must match this
            exactly; it is never inferred.

        **Returns:**

        A validated `ButcherTableau`.

        **Raises:**

        Checks are performed in the following order, and the first failure is raised.

        - `WeightsDimError` if `weights` does not have `num_stages` elements.
        - `NodesDimError` if `nodes` does not have `num_stages` elements.
        - `MatrixDimError` if `matrix` has fewer than `num_stages` rows, or if any row
            does not have `num_stages` elements.
        - `NonLowerTriangularMatrixError` if any coefficient on or above the diagonal
            of `matrix` is nonzero. These would make the method implicit.
        """
        return cls(matrix, weights, nodes, num_stages)

    def step(
        self, system: AbstractSystem, t0: RealScalarLike, y0: Y, dt: RealScalarLike
    ) -> Y:
        """Make a single step of size `dt`, starting from `y0` at time `t0`.

        `dt` may be negative to step backwards in time. The vector field of `system` is
        evaluated exactly `num_stages` times, in stage order; any exception it raises
        is propagated unchanged.

        **Returns:**

        The state at time `t0 + dt`.
        """
        ks = []
        for i in range(self.num_stages):
            yi = _combine(y0, dt, self.matrix[i][:i], ks)
            ti = t0 + self.nodes[i] * dt
            ks.append(system.vf(ti, yi))
        return _combine(y0, dt, self.weights, ks)


def _sum(*x):
    assert len(x) > 0
    # Not `sum`, which starts from the integer `0` rather than from a stage.
    total = x[0]
    for xi in x[1:]:
        total = total + xi
    return total


def _combine(y0, dt, coefficients, ks):
    """Computes `y0 + dt * Σ_j coefficients[j] * ks[j]`."""
    if len(ks) == 0:
        return y0

    def _combine_leaf(y0_leaf, *k_leaves):
        increment = _sum(*[c * k for c, k in zip(coefficients, k_leaves)])
        return y0_leaf + dt * increment

    return jtu.tree_map(_combine_leaf, y0, *ks)
