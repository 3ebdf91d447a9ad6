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
Integration Setup - Initial State and Time Window

Holds what the integrator needs besides the model:
- InitialState: position and velocity at t_start (frozen value object)
- TimeWindow: (t_start, t_end) with 0 <= t_start <= t_end (frozen, validated)
- IntegrationState: mutable holder with explicit setters, tracked as a
  small state machine (SetupPhase)

Phase transitions (order-independent):

    UNCONFIGURED --set_initial_state--> STATE_SET  --set_time_window--> READY
    UNCONFIGURED --set_time_window----> WINDOW_SET --set_initial_state-> READY

Setters may be called again at any time to re-parameterize; the phase never
moves backwards and nothing is reset after an integration run.

Examples
--------
>>> state = IntegrationState()
>>> state.phase
<SetupPhase.UNCONFIGURED: 'unconfigured'>
>>> state.set_initial_state(2.0, 0.0).set_time_window(10.0)
>>> state.phase
<SetupPhase.READY: 'ready'>
>>> x0, window = state.require_ready()
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from msdsim.systems.validation import (
    StateNotInitializedError,
    TimeWindowNotSetError,
    validate_time_window,
)
from msdsim.types.core import ScalarLike, StateVector, as_float, as_state_vector
from msdsim.types.trajectories import TimeSpan


class SetupPhase(Enum):
    """
    Configuration phase of an IntegrationState.

    Attributes
    ----------
    UNCONFIGURED : str
        Neither initial state nor time window set
    STATE_SET : str
        Only the initial state is set
    WINDOW_SET : str
        Only the time window is set
    READY : str
        Both set; integration may proceed
    """

    UNCONFIGURED = "unconfigured"
    STATE_SET = "state_set"
    WINDOW_SET = "window_set"
    READY = "ready"


@dataclass(frozen=True)
class InitialState:
    """Position and velocity at the start of the time window."""

    position: ScalarLike
    velocity: ScalarLike

    def __post_init__(self):
        object.__setattr__(self, "position", as_float(self.position))
        object.__setattr__(self, "velocity", as_float(self.velocity))

    def as_tuple(self) -> Tuple[np.float32, np.float32]:
        return (self.position, self.velocity)

    def as_vector(self) -> StateVector:
        """State vector [x0, x0_dot] (fresh float32 array)."""
        return as_state_vector(self.position, self.velocity)


@dataclass(frozen=True)
class TimeWindow:
    """
    Integration window, constructed in (end, start) order.

    Parameters
    ----------
    t_end : ScalarLike
        End time T
    t_start : ScalarLike
        Start time t0 (default 0)

    Raises
    ------
    InvalidTimeWindowError
        If t_start < 0 or t_start > t_end

    Examples
    --------
    >>> TimeWindow(10.0).as_span()
    (0.0, 10.0)
    >>> TimeWindow(10.0, 2.5).duration
    7.5
    """

    t_end: ScalarLike
    t_start: ScalarLike = 0.0

    def __post_init__(self):
        t_start, t_end = validate_time_window(self.t_end, self.t_start)
        object.__setattr__(self, "t_start", t_start)
        object.__setattr__(self, "t_end", t_end)

    @property
    def duration(self) -> np.float32:
        return self.t_end - self.t_start

    def as_span(self) -> TimeSpan:
        return (self.t_start, self.t_end)


class IntegrationState:
    """
    Mutable integration setup gating the integrator.

    Both setters record the latest values and mark them as set. The
    integrator reads value snapshots (see ``require_ready``), so later
    mutation does not affect a completed run.

    Examples
    --------
    >>> state = IntegrationState()
    >>> state.set_initial_state(1.0, 0.0)
    >>> state.is_ready
    False
    >>> state.set_time_window(5.0, 1.0)
    >>> state.get_time_window()
    (1.0, 5.0)
    """

    def __init__(self):
        self._initial_state: Optional[InitialState] = None
        self._time_window: Optional[TimeWindow] = None

    # ========================================================================
    # Setters
    # ========================================================================

    def set_initial_state(self, x0: ScalarLike, x0_dot: ScalarLike) -> "IntegrationState":
        """
        Record the initial position and velocity.

        Any pair of values is accepted.

        Parameters
        ----------
        x0 : ScalarLike
            Initial position
        x0_dot : ScalarLike
            Initial velocity

        Returns
        -------
        IntegrationState
            self, for chaining
        """
        self._initial_state = InitialState(position=x0, velocity=x0_dot)
        return self

    def set_time_window(
        self, t_end: ScalarLike, t_start: ScalarLike = 0.0
    ) -> "IntegrationState":
        """
        Record the integration window. Arguments are (end, start).

        Parameters
        ----------
        t_end : ScalarLike
            End time T
        t_start : ScalarLike
            Start time t0 (default 0)

        Returns
        -------
        IntegrationState
            self, for chaining

        Raises
        ------
        InvalidTimeWindowError
            If t_start < 0 or t_start > t_end. A previously set window is
            kept unchanged.
        """
        self._time_window = TimeWindow(t_end=t_end, t_start=t_start)
        return self

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def initial_state(self) -> Optional[InitialState]:
        """Current initial state, or None if never set."""
        return self._initial_state

    @property
    def time_window(self) -> Optional[TimeWindow]:
        """Current time window, or None if never set."""
        return self._time_window

    @property
    def initial_state_set(self) -> bool:
        return self._initial_state is not None

    @property
    def time_window_set(self) -> bool:
        return self._time_window is not None

    @property
    def phase(self) -> SetupPhase:
        if self.initial_state_set and self.time_window_set:
            return SetupPhase.READY
        if self.initial_state_set:
            return SetupPhase.STATE_SET
        if self.time_window_set:
            return SetupPhase.WINDOW_SET
        return SetupPhase.UNCONFIGURED

    @property
    def is_ready(self) -> bool:
        return self.phase is SetupPhase.READY

    def get_initial_state(self) -> Tuple[np.float32, np.float32]:
        """
        Return (x0, x0_dot).

        Raises
        ------
        StateNotInitializedError
            If set_initial_state() was never called
        """
        if self._initial_state is None:
            raise StateNotInitializedError(
                "Initial state not set. Use set_initial_state() first."
            )
        return self._initial_state.as_tuple()

    def get_time_window(self) -> TimeSpan:
        """
        Return (t_start, t_end).

        Raises
        ------
        TimeWindowNotSetError
            If set_time_window() was never called
        """
        if self._time_window is None:
            raise TimeWindowNotSetError(
                "Start and end times not set. Use set_time_window() first."
            )
        return self._time_window.as_span()

    def require_ready(self) -> Tuple[InitialState, TimeWindow]:
        """
        Snapshot of (initial state, time window) for an integration run.

        Checks are ordered: initial state first, then time window.

        Raises
        ------
        StateNotInitializedError
            If the initial state is not set
        TimeWindowNotSetError
            If the time window is not set
        """
        if self._initial_state is None:
            raise StateNotInitializedError(
                "Initial state not set. Use set_initial_state() first."
            )
        if self._time_window is None:
            raise TimeWindowNotSetError(
                "Start and end times not set. Use set_time_window() first."
            )
        return self._initial_state, self._time_window

    def __repr__(self) -> str:
        return (
            f"IntegrationState(phase={self.phase.value}, "
            f"initial_state={self._initial_state}, time_window={self._time_window})"
        )


__all__ = [
    "SetupPhase",
    "InitialState",
    "TimeWindow",
    "IntegrationState",
]
