"""
This module controls the optional NaN sanitization of :class:`.Rotator` and :class:`.Quat` values.

When NaN checking is enabled, every operation that could introduce a NaN or infinite component into a rotation checks
the result and, if any component is not finite, logs a warning and resets the value to the zero rotator/identity
quaternion.  This is a development time safety net which is disabled by default.

Example::

    >>> from gimbal.rotations import Quat, nan_checking
    >>> with nan_checking():
    ...     q = Quat(float('nan'), 0, 0, 0) + Quat()
    >>> q.to_string()
    'w=1 x=0 y=0 z=0'
"""

from contextlib import contextmanager

from dataclasses import dataclass

from typing import Iterator

from gimbal.utilities.options import UserOptions
from gimbal.utilities.mixin_classes.user_option_configured import UserOptionConfigured


__all__ = ['DiagnosticOptions', 'configure_diagnostics', 'reset_diagnostics', 'nan_check_enabled', 'nan_checking']


@dataclass
class DiagnosticOptions(UserOptions):
    """
    Options controlling the runtime diagnostics of the rotation types.
    """

    check_nan: bool = False
    """
    Whether to check rotations for NaN/infinite components after operations that could introduce them and reset them to
    identity.
    """


class _DiagnosticSettings(UserOptionConfigured[DiagnosticOptions], DiagnosticOptions):
    """
    The process wide diagnostic state.
    """

    def __init__(self, options: DiagnosticOptions | None = None):
        super().__init__(DiagnosticOptions, options=options)


_SETTINGS = _DiagnosticSettings()


def configure_diagnostics(options: DiagnosticOptions) -> None:
    """
    Applies ``options`` to the process wide diagnostic settings.

    :param options: the diagnostic options to apply
    """

    options.apply_options(_SETTINGS)


def reset_diagnostics() -> None:
    """
    Restores the default diagnostic settings (NaN checking disabled).
    """

    _SETTINGS.reset_settings()


def nan_check_enabled() -> bool:
    """
    :return: whether NaN checking is currently enabled
    """

    return _SETTINGS.check_nan


@contextmanager
def nan_checking(enabled: bool = True) -> Iterator[None]:
    """
    Context manager that enables (or disables) NaN checking for the duration of the ``with`` block.

    The previous setting is restored on exit.

    :param enabled: whether NaN checking should be enabled inside the block
    """

    previous = _SETTINGS.check_nan
    _SETTINGS.check_nan = enabled
    try:
        yield
    finally:
        _SETTINGS.check_nan = previous
