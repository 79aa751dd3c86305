# -*- coding: utf-8 -*-
"""Utility functions.
"""
import numbers

import numpy as np
import numba as nb


__all__ = ['fov_eval', 'fov_coeffs',
           'traj_complex_to_array', 'traj_array_to_complex']


def _check_positive(**kwargs):
    for name, value in kwargs.items():
        if not value > 0:
            raise ValueError(
                '{name} must be positive, got {value}.'.format(
                    name=name, value=value))


def _check_count(name, value):
    if (isinstance(value, bool) or not isinstance(value, numbers.Integral)
            or value < 1):
        raise ValueError(
            '{name} must be a positive integer, got {value}.'.format(
                name=name, value=value))

    return int(value)


def _check_fov(fov):
    fov = np.atleast_1d(np.asarray(fov, dtype=np.float64))
    if fov.ndim != 1 or fov.size == 0:
        raise ValueError(
            'fov must be a non-empty 1-D sequence of coefficients, '
            'got shape {}.'.format(fov.shape))

    if not fov[0] > 0:
        raise ValueError(
            'fov[0] must be positive, got {}.'.format(fov[0]))

    return fov


def _check_grad(g):
    g = np.asarray(g, dtype=np.float64)
    if g.ndim != 2 or g.shape[-1] != 2:
        raise ValueError(
            'g must have shape [N, 2], got {}.'.format(g.shape))

    return g


@nb.jit(nopython=True, cache=True)  # pragma: no cover
def _fov_eval(fov, kr):
    fovval = 0.0
    dfovdrval = 0.0
    for i in range(fov.shape[0]):
        fovval += fov[i] * kr ** i
        if i > 0:
            dfovdrval += i * fov[i] * kr ** (i - 1)

    return fovval, dfovdrval


def fov_eval(fov, kr):
    r"""Evaluate a polynomial field of view and its radial derivative.

    The field of view is

    .. math::

        F(k_r) = \sum_i f_i k_r^i

    Args:
        fov (array): FOV coefficients in cm, cm^2, ...
        kr (float): k-space radius in 1/cm.

    Returns:
        tuple: (F, dF/dkr) at kr.

    """
    fov = _check_fov(fov)
    return _fov_eval(fov, float(kr))


def fov_coeffs(fov, krmax, vd_factor=1.0):
    """Coefficients of a linearly varying field of view.

    The field of view equals `fov` at the k-space center and falls
    linearly to `vd_factor * fov` at `krmax`.

    Args:
        fov (float): field of view at the k-space center in cm.
        krmax (float): k-space radius at which the design stops, 1/cm.
        vd_factor (float): ratio of the outer to the central field of view.

    Returns:
        array: FOV coefficients, constant first.

    """
    _check_positive(fov=fov, krmax=krmax, vd_factor=vd_factor)
    if vd_factor == 1:
        return np.array([fov], dtype=np.float64)

    return np.array([fov, -fov * (1 - vd_factor) / krmax], dtype=np.float64)


def traj_complex_to_array(k):
    r"""Convert a complex trajectory kx + i ky to an [N, 2] array.

    Args:
        k (complex array): N vector.
    """
    kout = np.zeros((len(k), 2))
    kout[:, 0], kout[:, 1] = np.real(k), np.imag(k)
    return kout


def traj_array_to_complex(k):
    r"""Convert an [N, 2] trajectory to complex kx + i ky.

    Args:
        k (array): [N, 2] array.
    """
    return k[:, 0] + 1j * k[:, 1]
