# -*- coding: utf-8 -*-
"""Spiral k-space trajectory and density compensation.
"""
import numpy as np
from scipy import interpolate
from tqdm.auto import tqdm

from vdspiral import config, util


__all__ = ['calc_traj', 'interp_traj']


def calc_traj(g, ninterleaves, Tgsample, krmax, gamma=config.gamma,
              show_pbar=False):
    r"""Interleaved k-space trajectory and density weights of a gradient.

    The k-space position of sample :math:`j` integrates the gradient up to
    the previous sample, so every interleaf starts at the origin.
    Interleaf :math:`i` is the single interleaf rotated by
    :math:`2 \pi i / N`, normalized by `krmax`. The density weight is

    .. math::

        w = |g| |\sin(\angle g - \angle k)|

    where angles of vectors with a zero x component are taken as
    :math:`\pi / 2`.

    Args:
        g (array): gradient waveform [N, 2] in G/cm.
        ninterleaves (int): number of interleaves.
        Tgsample (float): gradient sample period in s.
        krmax (float): k-space radius used for normalization, in 1/cm.
        gamma (float): gyromagnetic ratio in Hz/G.
        show_pbar (bool): show progress bar over interleaves.

    Returns:
        2-element tuple containing

        - **traj** (*array*): normalized trajectory [ninterleaves * N, 2],
          interleaf by interleaf.
        - **weights** (*array*): density weights [ninterleaves * N].

    """
    g = util._check_grad(g)
    ninterleaves = util._check_count('ninterleaves', ninterleaves)
    util._check_positive(Tgsample=Tgsample, krmax=krmax, gamma=gamma)

    n = g.shape[0]
    k = np.zeros((n, 2))
    k[1:] = np.cumsum(gamma * g[:-1] * Tgsample, axis=0)

    ang_g = np.where(g[:, 0] == 0, np.pi / 2,
                     np.arctan2(g[:, 1], g[:, 0]))
    ang_k = np.where(k[:, 0] == 0, np.pi / 2,
                     np.arctan2(k[:, 1], k[:, 0]))
    w = np.linalg.norm(g, axis=-1) * np.abs(np.sin(ang_g - ang_k))

    traj = np.empty((ninterleaves * n, 2))
    weights = np.empty(ninterleaves * n)
    for i in tqdm(range(ninterleaves), desc='calc_traj',
                  disable=not show_pbar):
        rotation = 2 * np.pi * i / ninterleaves
        c, s = np.cos(rotation), np.sin(rotation)
        traj[i * n:(i + 1) * n, 0] = (k[:, 0] * c + k[:, 1] * s) / krmax
        traj[i * n:(i + 1) * n, 1] = (-k[:, 0] * s + k[:, 1] * c) / krmax
        weights[i * n:(i + 1) * n] = w

    return traj, weights


def interp_traj(traj, Tgsample, Tdsample, nsamples=None):
    """Resample a trajectory from the gradient raster to the data raster.

    Sample :math:`j` of `traj` is at time `j * Tgsample`. The trajectory is
    interpolated with a cubic spline at times `m * Tdsample`.

    Args:
        traj (array): trajectory [..., N, 2], one or more interleaves.
        Tgsample (float): gradient sample period in s.
        Tdsample (float): data sample period in s.
        nsamples (None or int): number of data samples. Defaults to all
            data samples within the gradient duration.

    Returns:
        array: trajectory [..., nsamples, 2].

    """
    traj = np.asarray(traj, dtype=np.float64)
    if traj.ndim < 2 or traj.shape[-1] != 2 or traj.shape[-2] < 2:
        raise ValueError(
            'traj must have shape [..., N, 2] with N > 1, got {}.'.format(
                traj.shape))

    util._check_positive(Tgsample=Tgsample, Tdsample=Tdsample)

    t = np.arange(traj.shape[-2]) * Tgsample
    if nsamples is None:
        nsamples = int(np.floor(t[-1] / Tdsample + 1e-6)) + 1
    else:
        nsamples = util._check_count('nsamples', nsamples)

    cs = interpolate.CubicSpline(t, traj, axis=-2)
    return cs(np.arange(nsamples) * Tdsample)
