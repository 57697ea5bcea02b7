"""
2D ocean convection run with Dedalus

A layer of fluid (periodic in x, bounded in z) in the
gravitational field. The bottom is held at a higher temperature
than the top, the resulting buoyancy drives convection.

    div(u) = 0
    dt(u) - nu*lap(u) + grad(p) - b*ez = - u.grad(u)
    dt(T) - kappa*lap(T) = - u.grad(T)
    dt(S) - kappa*lap(S) = - u.grad(S)

with the linear equation of state b = g*(alpha*T - beta*S).

Walls are impenetrable and free-slip, T is fixed at top and
bottom, S has no flux through the walls.
"""
import logging
import os

import numpy as np
import dedalus.public as d3

from .config import SIMULATION_CONFIG, io_config
from .field import FieldTimeSeries

logger = logging.getLogger(__name__)


class ConvectionSimulation:
    """
    Set up and run the convection problem.

    All parameters (see ocean2d.config.SIMULATION_CONFIG) can be
    overwritten by keyword arguments.

    Example
    >>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
    sim = ConvectionSimulation(stop_time=100.0, seed=1)
    sim.run()
    sim.extend(10.0)
    uF = sim.read_output("u")
    >>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
    """

    VELOCITIES = ("u", "w")
    TRACERS = ("T", "S")

    def __init__(self, **kwargs):
        self.CONFIG = dict(SIMULATION_CONFIG)
        self.CONFIG.update(**kwargs)
        self.__dict__.update(**self.CONFIG)

        self.solver = None
        self.fields = {}
        self.handlers = {}

    # -----------------------------------------
    #               Setup
    # -----------------------------------------

    def build(self):
        """Problem, solver, initial condition and output writers"""
        io_config(self.CONFIG)
        Nx, Nz = self.shape
        Lx, Lz = self.extent

        # Grid
        coords = d3.CartesianCoordinates("x", "z")
        dist = d3.Distributor(coords, dtype=np.float64)
        xbasis = d3.RealFourier(
            coords["x"], size=Nx, bounds=(0, Lx), dealias=self.dealias
        )
        zbasis = d3.ChebyshevT(
            coords["z"], size=Nz, bounds=(0, Lz), dealias=self.dealias
        )

        # Fields
        p = dist.Field(name="p", bases=(xbasis, zbasis))
        T = dist.Field(name="T", bases=(xbasis, zbasis))
        S = dist.Field(name="S", bases=(xbasis, zbasis))
        u = dist.VectorField(coords, name="u", bases=(xbasis, zbasis))
        tau_p = dist.Field(name="tau_p")
        tau_T1 = dist.Field(name="tau_T1", bases=xbasis)
        tau_T2 = dist.Field(name="tau_T2", bases=xbasis)
        tau_S1 = dist.Field(name="tau_S1", bases=xbasis)
        tau_S2 = dist.Field(name="tau_S2", bases=xbasis)
        tau_u1 = dist.VectorField(coords, name="tau_u1", bases=xbasis)
        tau_u2 = dist.VectorField(coords, name="tau_u2", bases=xbasis)

        # Substitutions
        nu, kappa = self.nu, self.kappa
        T_top, T_bottom = self.T_top, self.T_bottom
        g_alpha = self.gravity * self.thermal_expansion
        g_beta = self.gravity * self.haline_contraction
        ex, ez = coords.unit_vector_fields(dist)
        lift_basis = zbasis.derivative_basis(1)
        lift = lambda A: d3.Lift(A, lift_basis, -1)
        grad_u = d3.grad(u) + ez * lift(tau_u1)
        grad_T = d3.grad(T) + ez * lift(tau_T1)
        grad_S = d3.grad(S) + ez * lift(tau_S1)
        dz_ux = ex @ (ez @ grad_u)

        # Problem
        variables = [p, T, S, u, tau_p, tau_T1, tau_T2, tau_S1, tau_S2, tau_u1, tau_u2]
        problem = d3.IVP(variables, namespace=locals())
        problem.add_equation("trace(grad_u) + tau_p = 0")
        problem.add_equation(
            "dt(u) - nu*div(grad_u) + grad(p) - (g_alpha*T - g_beta*S)*ez"
            " + lift(tau_u2) = - u@grad(u)"
        )
        problem.add_equation("dt(T) - kappa*div(grad_T) + lift(tau_T2) = - u@grad(T)")
        problem.add_equation("dt(S) - kappa*div(grad_S) + lift(tau_S2) = - u@grad(S)")
        problem.add_equation("T(z=0) = T_bottom")
        problem.add_equation("T(z=Lz) = T_top")
        problem.add_equation("ez@grad_S(z=0) = 0")
        problem.add_equation("ez@grad_S(z=Lz) = 0")
        problem.add_equation("ez@u(z=0) = 0")
        problem.add_equation("ez@u(z=Lz) = 0")
        problem.add_equation("dz_ux(z=0) = 0")
        problem.add_equation("dz_ux(z=Lz) = 0")
        problem.add_equation("integ(p) = 0")  # Pressure gauge

        # Solver
        self.solver = problem.build_solver(getattr(d3, self.timestepper))
        self.solver.stop_sim_time = self.stop_time

        x, z = dist.local_grids(xbasis, zbasis)
        self.x, self.z = x.ravel(), z.ravel()
        self.fields = {"u": u, "T": T, "S": S, "p": p}
        self.unit_vectors = (ex, ez)

        self.set_initial_conditions()
        self.add_output_writers()

        self.flow = d3.GlobalFlowProperty(self.solver, cadence=self.log_every)
        self.flow.add_property(np.sqrt(u @ u), name="speed")
        return self.solver

    def set_initial_conditions(self):
        """Small uniform random perturbation of the temperature"""
        T = self.fields["T"]
        rng = np.random.default_rng(self.seed)
        T["g"] = self.perturbation * rng.random(T["g"].shape)

    def output_path(self, kind):
        """Directory of the velocity or tracer output sets"""
        if kind == "velocities":
            return os.path.join(self.output_dir, self.velocity_output)
        if kind == "tracers":
            return os.path.join(self.output_dir, self.tracer_output)
        raise ValueError("Unknown output {:}. Use velocities or tracers.".format(kind))

    def add_output_writers(self):
        u, T, S = self.fields["u"], self.fields["T"], self.fields["S"]
        ex, ez = self.unit_vectors

        # Tasks on the (Nx, Nz) grid, not the dealiased one
        velocities = self.solver.evaluator.add_file_handler(
            self.output_path("velocities"),
            sim_dt=self.output_interval,
            max_writes=self.max_writes,
        )
        velocities.add_task(ex @ u, name="u", scales=1)
        velocities.add_task(ez @ u, name="w", scales=1)

        tracers = self.solver.evaluator.add_file_handler(
            self.output_path("tracers"),
            sim_dt=self.output_interval,
            max_writes=self.max_writes,
        )
        tracers.add_task(T, name="T", scales=1)
        tracers.add_task(S, name="S", scales=1)

        self.handlers = {"velocities": velocities, "tracers": tracers}

    # -----------------------------------------
    #               Run
    # -----------------------------------------

    def run(self, stop_time=None):
        """Step the solver until stop_time (default: self.stop_time)"""
        if self.solver is None:
            self.build()
        if stop_time is not None:
            self.stop_time = stop_time
            self.CONFIG["stop_time"] = stop_time
        self.solver.stop_sim_time = self.stop_time

        logger.info("Starting main loop until t = %g", self.stop_time)
        try:
            while self.solver.proceed:
                self.solver.step(self.dt)
                if (self.solver.iteration - 1) % self.log_every == 0:
                    logger.info(
                        "Iteration=%i, Time=%e, dt=%e, max(|u|)=%e",
                        self.solver.iteration,
                        self.solver.sim_time,
                        self.dt,
                        self.flow.max("speed"),
                    )
        except Exception:
            logger.error("Exception raised, triggering end of main loop.")
            raise
        finally:
            self.solver.log_stats()
        return self.solver.sim_time

    def extend(self, extra_time):
        """Continue a finished run for extra_time"""
        return self.run(self.stop_time + extra_time)

    @property
    def time(self):
        if self.solver is None:
            return 0.0
        return self.solver.sim_time

    # -----------------------------------------
    #         Current state and output
    # -----------------------------------------

    def snapshot(self, name):
        """
        Current state of u, w, T or S on the grid as 3D
        array (Nx, 1, Nz)
        """
        if self.solver is None:
            raise RuntimeError("Simulation not built. Call build() or run() first.")
        if name in ("u", "w"):
            field = self.fields["u"]
            field.change_scales(1)
            data = field["g"][0 if name == "u" else 1]
        elif name in self.fields:
            field = self.fields[name]
            field.change_scales(1)
            data = field["g"]
        else:
            raise KeyError("Unknown field {:}".format(name))
        return np.array(data)[:, None, :]

    def read_output(self, name):
        """FieldTimeSeries of a written velocity or tracer task"""
        if name in self.VELOCITIES:
            return FieldTimeSeries.read(self.output_path("velocities"), name)
        if name in self.TRACERS:
            return FieldTimeSeries.read(self.output_path("tracers"), name)
        raise KeyError("{:} is not written. Written: {:}".format(
            name, self.VELOCITIES + self.TRACERS))
