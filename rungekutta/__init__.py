import importlib.metadata

from ._integrate import integrate as integrate
from ._problem import InitialValueProblem as InitialValueProblem
from ._solution import (
    is_successful as is_successful,
    RESULTS as RESULTS,
    Solution as Solution,
)
from ._solver import (
    ExplicitRungeKutta as ExplicitRungeKutta,
    SolverState as SolverState,
)
from ._system import AbstractSystem as AbstractSystem, System as System
from ._tableau import (
    ButcherTableau as ButcherTableau,
    MatrixDimError as MatrixDimError,
    NodesDimError as NodesDimError,
    NonLowerTriangularMatrixError as NonLowerTriangularMatrixError,
    TableauError as TableauError,
    WeightsDimError as WeightsDimError,
)
from ._tableaus import (
    EULER as EULER,
    HEUN as HEUN,
    KUTTA3 as KUTTA3,
    MIDPOINT as MIDPOINT,
    RALSTON as RALSTON,
    RK4 as RK4,
    RK4_38 as RK4_38,
    SSPRK3 as SSPRK3,
)


__version__ = importlib.metadata.version("rungekutta")
