# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Fixed-Step RK4 Integrator for the Mass-Spring-Damper Oscillator

Classic 4th-order Runge-Kutta applied to the two-state system
[x, x_dot] produced by OscillatorModel.

Sampling
--------
For a window [t_start, t_end] and step size dt:

    steps     = floor((t_end - t_start) / dt)
    n_samples = steps + 2

The first sample is the initial state at t_start. The loop then runs
steps + 1 times, so the last time sample may lie up to one dt beyond
t_end. Callers that need samples strictly inside the window should slice
``trajectory["t"] <= t_end``.

All arithmetic is single precision (float32). Time samples are computed as
t_start + i*dt rather than by repeated float32 addition, so they do not
drift over long runs.
"""

import time
import warnings
from typing import TYPE_CHECKING, Optional

import numpy as np

from msdsim.integration.integration_state import (
    InitialState,
    IntegrationState,
    TimeWindow,
)
from msdsim.integration.integrator_base import IntegratorBase
from msdsim.systems.validation import (
    InvalidStepSizeError,
    StateNotInitializedError,
    StepLimitExceededError,
    TimeWindowNotSetError,
    validate_step_size,
)
from msdsim.types.core import FLOAT_DTYPE, ScalarLike, StateVector, as_float
from msdsim.types.trajectories import Trajectory

if TYPE_CHECKING:
    from msdsim.systems.oscillator import OscillatorModel

DEFAULT_STEP_SIZE = 0.001
"""Step size used when none is given [s]."""


class RK4Integrator(IntegratorBase):
    """
    Classic 4th-order Runge-Kutta integrator.

    Algorithm:
        k1 = f(x_k)
        k2 = f(x_k + 0.5*dt*k1)
        k3 = f(x_k + 0.5*dt*k2)
        k4 = f(x_k + dt*k3)
        x_{k+1} = x_k + (dt/6) * (k1 + 2*k2 + 2*k3 + k4)

    with f(x) = [x_dot, -wn²*x - zeta*x_dot].

    Characteristics:
    - Order: 4 (global error ∝ dt⁴)
    - Function evaluations: 4 per step
    - Fixed step; no error control

    Parameters
    ----------
    model : OscillatorModel
        Oscillator to integrate
    dt : float
        Step size (default 0.001)
    **options
        max_steps : int or None
            Upper bound on RK4 steps per run (default None, unbounded)

    Examples
    --------
    >>> model = OscillatorModel.from_physical(m=1.0, c=1.0, k=1.0)
    >>> integrator = RK4Integrator(model, dt=0.001)
    >>> trajectory = integrator.integrate(InitialState(2.0, 0.0), TimeWindow(10.0))
    >>> trajectory["x"][0], trajectory["t"][0]
    (2.0, 0.0)
    >>> len(trajectory["t"])
    10002
    """

    def __init__(
        self, model: "OscillatorModel", dt: ScalarLike = DEFAULT_STEP_SIZE, **options
    ):
        super().__init__(model, dt, **options)

    def step(self, x: StateVector, dt: Optional[ScalarLike] = None) -> StateVector:
        """
        Take one RK4 step using four derivative evaluations.

        Parameters
        ----------
        x : StateVector
            Current state [x, x_dot]
        dt : Optional[float]
            Step size (uses self.dt if None)

        Returns
        -------
        StateVector
            Next state, float32

        Raises
        ------
        InvalidStepSizeError
            If dt <= 0
        """
        dt = validate_step_size(self.dt if dt is None else dt)
        x = np.asarray(x, dtype=FLOAT_DTYPE)
        return self._rk4_step(x, dt, as_float(0.5 * dt), as_float(dt / 6.0))

    def _rk4_step(
        self,
        x: StateVector,
        dt: np.float32,
        half_dt: np.float32,
        sixth_dt: np.float32,
    ) -> StateVector:
        k1 = self._evaluate_dynamics(x)
        k2 = self._evaluate_dynamics(x + half_dt * k1)
        k3 = self._evaluate_dynamics(x + half_dt * k2)
        k4 = self._evaluate_dynamics(x + dt * k3)

        # Weighted combination
        x_next = x + sixth_dt * (k1 + 2 * k2 + 2 * k3 + k4)

        self._stats["total_steps"] += 1

        return x_next.astype(FLOAT_DTYPE, copy=False)

    def integrate(
        self,
        initial_state: Optional[InitialState],
        time_window: Optional[TimeWindow],
        dt: Optional[ScalarLike] = None,
    ) -> Trajectory:
        """
        Integrate from the initial state over the time window.

        Preconditions are checked in order: initial state, time window,
        step size, step limit. Nothing is allocated before they pass.

        Parameters
        ----------
        initial_state : InitialState or None
            Position and velocity at t_start
        time_window : TimeWindow or None
            Integration window
        dt : Optional[float]
            Step size (uses self.dt if None)

        Returns
        -------
        Trajectory
            TypedDict with read-only float32 sequences x, x_dot, t of length
            floor((t_end - t_start)/dt) + 2, plus diagnostics

        Raises
        ------
        StateNotInitializedError
            If initial_state is None
        TimeWindowNotSetError
            If time_window is None
        InvalidStepSizeError
            If dt <= 0 or is not finite, or the step count overflows
        StepLimitExceededError
            If max_steps is set and the run needs more steps

        Examples
        --------
        >>> trajectory = integrator.integrate(
        ...     InitialState(1.0, 0.0), TimeWindow(t_end=2 * np.pi)
        ... )
        >>> np.allclose(trajectory["x"], np.cos(trajectory["t"]), atol=1e-4)
        True
        """
        start_time = time.time()

        if initial_state is None:
            raise StateNotInitializedError(
                "Initial state not set. Use set_initial_state() first."
            )
        if time_window is None:
            raise TimeWindowNotSetError(
                "Start and end times not set. Use set_time_window() first."
            )
        dt = validate_step_size(self.dt if dt is None else dt)

        t0, tf = time_window.t_start, time_window.t_end
        duration = tf - t0
        with np.errstate(over="ignore"):
            step_ratio = np.floor(duration / dt)

        if not np.isfinite(step_ratio):
            if self.max_steps is not None:
                raise StepLimitExceededError(
                    f"Integration over [{t0}, {tf}] with dt={dt} needs a step count "
                    f"beyond float32 range, more than max_steps={self.max_steps}."
                )
            raise InvalidStepSizeError(
                f"Step size dt={dt} is too small for the time window [{t0}, {tf}]: "
                "the step count overflows."
            )

        num_steps = int(step_ratio)
        n_samples = num_steps + 2

        if self.max_steps is not None and num_steps + 1 > self.max_steps:
            raise StepLimitExceededError(
                f"Integration over [{t0}, {tf}] with dt={dt} needs {num_steps + 1} "
                f"steps, more than max_steps={self.max_steps}."
            )

        if num_steps == 0 and duration > 0:
            warnings.warn(
                f"Step size dt={dt} exceeds the time window length {duration}; "
                "the trajectory holds only the initial sample and one step.",
                UserWarning,
                stacklevel=2,
            )

        half_dt = as_float(0.5 * dt)
        sixth_dt = as_float(dt / 6.0)

        # Time grid
        t_points = (np.float64(t0) + np.float64(dt) * np.arange(n_samples)).astype(FLOAT_DTYPE)

        # Initialize storage
        positions = np.empty(n_samples, dtype=FLOAT_DTYPE)
        velocities = np.empty(n_samples, dtype=FLOAT_DTYPE)

        x = initial_state.as_vector()
        positions[0] = x[0]
        velocities[0] = x[1]

        fev_before = self._stats["total_fev"]

        # Integration loop: steps + 1 iterations
        for i in range(1, n_samples):
            x = self._rk4_step(x, dt, half_dt, sixth_dt)
            positions[i] = x[0]
            velocities[i] = x[1]

        for sequence in (positions, velocities, t_points):
            sequence.flags.writeable = False

        elapsed = time.time() - start_time
        self._stats["total_time"] += elapsed

        result: Trajectory = {
            "x": positions,
            "x_dot": velocities,
            "t": t_points,
            "success": True,
            "message": "RK4 integration completed",
            "nfev": self._stats["total_fev"] - fev_before,
            "nsteps": n_samples - 1,
            "dt": float(dt),
            "integration_time": elapsed,
            "solver": self.name,
        }

        return result

    def integrate_state(
        self, state: IntegrationState, dt: Optional[ScalarLike] = None
    ) -> Trajectory:
        """
        Integrate a snapshot of a mutable IntegrationState.

        Raises
        ------
        StateNotInitializedError
            If state has no initial state
        TimeWindowNotSetError
            If state has no time window
        InvalidStepSizeError
            If dt <= 0
        """
        initial_state, time_window = state.require_ready()
        return self.integrate(initial_state, time_window, dt=dt)

    @property
    def name(self) -> str:
        return "RK4 (Classic)"


def integrate_oscillator(
    model: "OscillatorModel",
    state: IntegrationState,
    step_size: ScalarLike = DEFAULT_STEP_SIZE,
) -> Trajectory:
    """
    Integrate a model from a configured IntegrationState in one call.

    Parameters
    ----------
    model : OscillatorModel
        Oscillator to integrate
    state : IntegrationState
        Initial state and time window (both must be set)
    step_size : float
        RK4 step size (default 0.001)

    Returns
    -------
    Trajectory
        Position, velocity and time sequences

    Examples
    --------
    >>> model = OscillatorModel.from_physical(1.0, 1.0, 1.0)
    >>> state = IntegrationState().set_initial_state(2.0, 0.0).set_time_window(10.0)
    >>> trajectory = integrate_oscillator(model, state)
    >>> trajectory["t"], trajectory["x"], trajectory["x_dot"]
    """
    return RK4Integrator(model, dt=step_size).integrate_state(state)


__all__ = [
    "DEFAULT_STEP_SIZE",
    "RK4Integrator",
    "integrate_oscillator",
]
