from ._tableau import ButcherTableau


EULER = ButcherTableau.build([[0.0]], [1.0], [0.0], num_stages=1)

MIDPOINT = ButcherTableau.build(
    [[0.0, 0.0], [0.5, 0.0]],
    [0.0, 1.0],
    [0.0, 0.5],
    num_stages=2,
)

HEUN = ButcherTableau.build(
    [[0.0, 0.0], [1.0, 0.0]],
    [0.5, 0.5],
    [0.0, 1.0],
    num_stages=2,
)

# Ralston's method is the 2/3-method, not the 3/4-method.
RALSTON = ButcherTableau.build(
    [[0.0, 0.0], [2 / 3, 0.0]],
    [0.25, 0.75],
    [0.0, 2 / 3],
    num_stages=2,
)

KUTTA3 = ButcherTableau.build(
    [[0.0, 0.0, 0.0], [0.5, 0.0, 0.0], [-1.0, 2.0, 0.0]],
    [1 / 6, 2 / 3, 1 / 6],
    [0.0, 0.5, 1.0],
    num_stages=3,
)

# Strong stability preserving, a.k.a. Shu--Osher.
SSPRK3 = ButcherTableau.build(
    [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.25, 0.25, 0.0]],
    [1 / 6, 1 / 6, 2 / 3],
    [0.0, 1.0, 0.5],
    num_stages=3,
)

RK4 = ButcherTableau.build(
    [
        [0.0, 0.0, 0.0, 0.0],
        [0.5, 0.0, 0.0, 0.0],
        [0.0, 0.5, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
    ],
    [1 / 6, 1 / 3, 1 / 3, 1 / 6],
    [0.0, 0.5, 0.5, 1.0],
    num_stages=4,
)

RK4_38 = ButcherTableau.build(
    [
        [0.0, 0.0, 0.0, 0.0],
        [1 / 3, 0.0, 0.0, 0.0],
        [-1 / 3, 1.0, 0.0, 0.0],
        [1.0, -1.0, 1.0, 0.0],
    ],
    [1 / 8, 3 / 8, 3 / 8, 1 / 8],
    [0.0, 1 / 3, 2 / 3, 1.0],
    num_stages=4,
)
