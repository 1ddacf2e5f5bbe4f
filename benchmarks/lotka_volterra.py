import timeit

import jax
import jax.numpy as jnp
import rungekutta as rk


jax.config.update("jax_enable_x64", True)


def vector_field(t, y, args):
    a = 1.5
    b = -1
    c = -3
    d = 1
    x = y[0]
    y = y[1]
    return jnp.stack([a * x + b * x * y, c * y + d * x * y])


system = rk.System(vector_field)
problem = rk.InitialValueProblem(system, 0.0, jnp.array([1.0, 1.0]))
t1 = 10.0

ref_sol = rk.integrate(
    problem, rk.ExplicitRungeKutta(rk.RK4), t1, dt0=1e-3, max_steps=100_000
)


def time_run(name, tableau, dt0):
    solver = rk.ExplicitRungeKutta(tableau)

    def run():
        return rk.integrate(problem, solver, t1, dt0, throw=False)

    sol = run()
    error = jnp.sqrt(jnp.sum((sol.y1 - ref_sol.y1) ** 2)).item()
    time = min(timeit.repeat(run, repeat=3, number=1))
    num_steps = sol.stats["num_steps"]
    print(f"{name}: dt0={dt0} error={error} time={time} num_steps={num_steps}")


for name, tableau in [
    ("euler", rk.EULER),
    ("midpoint", rk.MIDPOINT),
    ("ralston", rk.RALSTON),
    ("ssprk3", rk.SSPRK3),
    ("rk4", rk.RK4),
]:
    for dt0 in (1e-1, 1e-2):
        time_run(name, tableau, dt0)
