import numpy as np

from ._custom_types import RealScalarLike
from ._misc import tree_isfinite
from ._problem import InitialValueProblem
from ._solution import is_successful, RESULTS, Solution
from ._solver import ExplicitRungeKutta, SolverState


# Absorbs floating point error in `(t1 - t0) / dt0`, so that e.g. stepping from 0 to 1
# with `dt0=0.1` does not demand an eleventh step of size ~1e-16.
_num_steps_rtol = 1e-9


def _num_steps(t0: RealScalarLike, t1: RealScalarLike, dt0: RealScalarLike) -> int:
    if t1 == t0:
        return 0
    ratio = float((t1 - t0) / dt0)
    return max(1, int(np.ceil(ratio * (1 - _num_steps_rtol))))


def integrate(
    problem: InitialValueProblem,
    solver: ExplicitRungeKutta,
    t1: RealScalarLike,
    dt0: RealScalarLike,
    *,
    max_steps: int = 4096,
    throw: bool = True,
) -> Solution:
    """Solves an initial value problem with a constant step size.

    Starting from the known point of `problem`, takes steps of size `dt0` towards
    `t1`. The final step is shortened so as to land exactly on `t1`.

    **Arguments:**

    - `problem`: the [`rungekutta.InitialValueProblem`][] to solve.
    - `solver`: the solver to use, e.g. `ExplicitRungeKutta(RK4)`.
    - `t1`: the time to solve until. May be less than `problem.t0`, in which case the
        solve proceeds backwards in time.
    - `dt0`: the step size. Must be nonzero, and have the same sign as
        `t1 - problem.t0`.
    - `max_steps`: the maximum number of steps to take before giving up.
    - `throw`: whether to raise an exception if the solve fails. If `False` then the
        partial solution is returned, and `Solution.result` should be checked.

    **Returns:**

    A [`rungekutta.Solution`][].

    **Raises:**

    - `ValueError` if `dt0` is zero or points away from `t1`.
    - `RuntimeError` if `throw=True` and the solve fails, either because more than
        `max_steps` steps are needed or because the state became non-finite.
    """
    t0 = problem.t0
    if t1 != t0:
        if dt0 == 0:
            raise ValueError("`dt0` must be nonzero.")
        if (t1 - t0) * dt0 < 0:
            raise ValueError(
                "Must have (t1 - t0) * dt0 >= 0, we instead got "
                f"t1 with value {t1} and type {type(t1)}, "
                f"t0 with value {t0} and type {type(t0)}, "
                f"dt0 with value {dt0} and type {type(dt0)}"
            )
    if max_steps < 0:
        raise ValueError(f"`max_steps` must be non-negative, got {max_steps}.")

    num_steps = _num_steps(t0, t1, dt0)
    result = RESULTS.successful
    state = solver.init(problem)
    steps_taken = 0
    for i in range(min(num_steps, max_steps)):
        # Times are computed from `t0` rather than accumulated, so that the last step
        # lands exactly on `t1`.
        t_next = t1 if i == num_steps - 1 else t0 + (i + 1) * dt0
        y_next = solver.step(problem.system, state.t, state.y, t_next - state.t)
        state = SolverState(t_next, y_next)
        steps_taken += 1
        if not tree_isfinite(state.y):
            result = RESULTS.convergence_failed
            break
    else:
        if num_steps > max_steps:
            result = RESULTS.max_iterations_exceeded

    sol = Solution(
        t0=t0,
        t1=state.t,
        y1=state.y,
        result=result,
        stats=dict(num_steps=steps_taken),
    )
    if throw and not is_successful(result):
        raise RuntimeError(RESULTS[result])
    return sol
