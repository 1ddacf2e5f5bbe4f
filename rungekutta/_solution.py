import equinox as eqx
import optimistix as optx
from jaxtyping import Array, ArrayLike, Bool, PyTree

from ._custom_types import RealScalarLike, Y


class RESULTS(optx.RESULTS):  # pyright: ignore
    successful = ""
    convergence_failed = (
        "The solver failed to converge: the state became non-finite. Try decreasing "
        "the step size."
    )
    max_iterations_exceeded = (
        "The maximum number of solver steps was reached. Try increasing `max_steps`."
    )
    # Only produced by adaptive step size control, which is not implemented.
    tolerance_exceeded = "The solver failed to converge within the specified tolerance."


def is_successful(result: RESULTS) -> Bool[Array, ""]:
    return result == RESULTS.successful


class Solution(eqx.Module):
    """The solution to an initial value problem.

    **Attributes:**

    - `t0`: The time at which the solve started, i.e. the known point of the problem.
    - `t1`: The time that was reached. Equal to the requested end time if the solve was
        successful.
    - `y1`: The state at time `t1`.
    - `result`: Whether the solve was successful, or the cause of failure. A
        human-readable message can be obtained via `rungekutta.RESULTS[result]`.
    - `stats`: Statistics for the solve. Currently just `"num_steps"`.
    """

    t0: RealScalarLike
    t1: RealScalarLike
    y1: Y
    result: RESULTS
    stats: dict[str, PyTree[ArrayLike]]