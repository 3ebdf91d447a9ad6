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
Validation for Oscillator Parameters and Integration Setup

Checks every caller-supplied value before it reaches the model or the
integrator:
- Physical parameters m, c, k (strictly positive, finite)
- Modal parameters zeta, wn (non-negative, finite)
- Time windows (0 <= t_start <= t_end, finite)
- Integration step sizes (positive, finite)

All checks raise synchronously; nothing is corrected or clamped. Accepted
values are returned converted to float32.

Examples
--------
>>> validate_positive("m", 2.0)
2.0
>>> validate_positive("m", 0.0)
Traceback (most recent call last):
    ...
InvalidParameterError: m must be strictly positive, got 0.0
"""

from typing import Tuple

import numpy as np

from msdsim.types.core import ScalarLike, as_float

# ============================================================================
# Exceptions
# ============================================================================


class MSDError(Exception):
    """Base class for all errors raised by msdsim"""
    pass


class ValidationError(MSDError, ValueError):
    """Raised when a caller-supplied value is out of range"""
    pass


class InvalidParameterError(ValidationError):
    """Raised when m, c, k, zeta or wn is out of range"""
    pass


class InvalidTimeWindowError(ValidationError):
    """Raised when t_start < 0 or t_start > t_end"""
    pass


class InvalidStepSizeError(ValidationError):
    """Raised when the integration step size is not strictly positive"""
    pass


class IntegrationSetupError(MSDError, RuntimeError):
    """Raised when integration is requested before it is fully configured"""
    pass


class StateNotInitializedError(IntegrationSetupError):
    """Raised when integrating before set_initial_state()"""
    pass


class TimeWindowNotSetError(IntegrationSetupError):
    """Raised when integrating before set_time_window()"""
    pass


class StepLimitExceededError(IntegrationSetupError):
    """Raised when the requested run needs more steps than max_steps"""
    pass


class UnavailableParameterError(MSDError, LookupError):
    """Raised when a parameter representation was never supplied nor derivable"""
    pass


# ============================================================================
# Scalar Checks
# ============================================================================


def _to_finite_float(name: str, value: ScalarLike, error_cls: type) -> np.float32:
    """Convert to float32 and reject NaN/inf and non-numeric input."""
    try:
        converted = as_float(value)
    except (TypeError, ValueError) as exc:
        raise error_cls(f"{name} must be a real number, got {value!r}") from exc

    if not np.isfinite(converted):
        raise error_cls(f"{name} must be finite, got {value!r}")

    return converted


def validate_positive(name: str, value: ScalarLike) -> np.float32:
    """
    Require a strictly positive, finite parameter.

    Parameters
    ----------
    name : str
        Parameter name used in the error message
    value : ScalarLike
        Value to check

    Returns
    -------
    np.float32
        The value in single precision

    Raises
    ------
    InvalidParameterError
        If value <= 0, is not finite, or is not a real number
    """
    converted = _to_finite_float(name, value, InvalidParameterError)
    if converted <= 0:
        raise InvalidParameterError(f"{name} must be strictly positive, got {value!r}")
    return converted


def validate_non_negative(name: str, value: ScalarLike) -> np.float32:
    """
    Require a non-negative, finite parameter.

    Raises
    ------
    InvalidParameterError
        If value < 0, is not finite, or is not a real number
    """
    converted = _to_finite_float(name, value, InvalidParameterError)
    if converted < 0:
        raise InvalidParameterError(f"{name} must be non-negative, got {value!r}")
    return converted


# ============================================================================
# Integration Setup Checks
# ============================================================================


def validate_time_window(
    t_end: ScalarLike, t_start: ScalarLike = 0.0
) -> Tuple[np.float32, np.float32]:
    """
    Check an integration window, given in (end, start) order.

    Parameters
    ----------
    t_end : ScalarLike
        End time T
    t_start : ScalarLike
        Start time t0 (default 0)

    Returns
    -------
    Tuple[np.float32, np.float32]
        (t_start, t_end) in single precision

    Raises
    ------
    InvalidTimeWindowError
        If t_start < 0 or t_start > t_end, or a bound is not finite

    Examples
    --------
    >>> validate_time_window(10.0)
    (0.0, 10.0)
    >>> validate_time_window(1.0, 2.0)
    Traceback (most recent call last):
        ...
    InvalidTimeWindowError: ...
    """
    end = _to_finite_float("t_end", t_end, InvalidTimeWindowError)
    start = _to_finite_float("t_start", t_start, InvalidTimeWindowError)

    if start < 0 or start > end:
        raise InvalidTimeWindowError(
            "Start time should be non-negative and end time should be greater "
            f"than start time (got t_start={t_start!r}, t_end={t_end!r})."
        )

    return start, end


def validate_step_size(dt: ScalarLike) -> np.float32:
    """
    Require a strictly positive, finite step size.

    Raises
    ------
    InvalidStepSizeError
        If dt <= 0 or is not finite
    """
    step = _to_finite_float("dt", dt, InvalidStepSizeError)
    if step <= 0:
        raise InvalidStepSizeError(f"Step size dt must be strictly positive, got {dt!r}")
    return step


__all__ = [
    "MSDError",
    "ValidationError",
    "InvalidParameterError",
    "InvalidTimeWindowError",
    "InvalidStepSizeError",
    "IntegrationSetupError",
    "StateNotInitializedError",
    "TimeWindowNotSetError",
    "StepLimitExceededError",
    "UnavailableParameterError",
    "validate_positive",
    "validate_non_negative",
    "validate_time_window",
    "validate_step_size",
]
