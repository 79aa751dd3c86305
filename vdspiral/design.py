# -*- coding: utf-8 -*-
r"""Variable density spiral gradient design.

The spiral traces out

.. math::

    k(t) = k_r(t) e^{i \theta(t)}

with :math:`k_r` and :math:`\theta` chosen so that the gradient stays within
the amplitude and slew rate limits, and the spacing between turns supports
a field of view that can vary with :math:`k_r`:

.. math::

    \frac{d k_r}{d \theta} = \frac{N}{2 \pi F(k_r)}

At each step the spiral is either amplitude limited or slew rate limited.
The second derivatives of :math:`k_r` and :math:`\theta` are solved for in
closed form and integrated twice to advance the spiral.

"""
import math
import warnings

import numpy as np
import numba as nb

from vdspiral import config, util


__all__ = ['calc_thetadotdot', 'calc_vds', 'vds', 'slew_rate']


@nb.jit(nopython=True, cache=True)  # pragma: no cover
def _calc_thetadotdot(slewmax, gradmax, kr, krdot, Tgsample, Tdsample,
                      ninterleaves, fov, gamma):
    fovval, dfovdrval = util._fov_eval(fov, kr)

    # FOV limit on gmax, the Nyquist rate of motion along the trajectory.
    gmaxfov = 1 / gamma / fovval / Tdsample
    if gradmax > gmaxfov:
        gradmax = gmaxfov

    maxkrdot = math.sqrt((gamma * gradmax) ** 2 /
                         (1 + (2 * np.pi * fovval * kr / ninterleaves) ** 2))

    tpf = 2 * np.pi * fovval / ninterleaves
    tpfsq = tpf ** 2

    if krdot > maxkrdot:
        # amplitude limited, bring krdot back in range
        krdotdot = (maxkrdot - krdot) / Tgsample
    else:
        # slew limited, |slew| = slewmax is quadratic in krdotdot
        qdfA = 1 + tpfsq * kr * kr
        qdfB = (2 * tpfsq * kr * krdot * krdot +
                2 * tpfsq / fovval * dfovdrval * kr * kr * krdot * krdot)
        qdfC = ((tpfsq * kr * krdot * krdot) ** 2 +
                4 * tpfsq * krdot ** 4 +
                (tpf * dfovdrval / fovval * kr * krdot * krdot) ** 2 +
                4 * tpfsq * dfovdrval / fovval * kr * krdot ** 4 -
                (gamma * slewmax) ** 2)

        rootparta = -qdfB / (2 * qdfA)
        rootpartb = qdfB * qdfB / (4 * qdfA * qdfA) - qdfC / qdfA

        # roots are real, a negative discriminant is round-off
        if rootpartb < 0:
            krdotdot = rootparta
        else:
            krdotdot = rootparta + math.sqrt(rootpartb)

    thetadotdot = tpf * dfovdrval / fovval * krdot * krdot + tpf * krdotdot

    return thetadotdot, krdotdot


@nb.jit(nopython=True, cache=True)  # pragma: no cover
def _vds_length(slewmax, gradmax, Tgsample, Tdsample, ninterleaves, fov,
                krmax, ngmax, gamma):
    kr = 0.0
    krdot = 0.0
    theta = 0.0
    thetadot = 0.0
    gradcount = 0
    while kr < krmax and gradcount < ngmax:
        thetadotdot, krdotdot = _calc_thetadotdot(
            slewmax, gradmax, kr, krdot, Tgsample, Tdsample,
            ninterleaves, fov, gamma)

        thetadot += thetadotdot * Tgsample
        theta += thetadot * Tgsample

        krdot += krdotdot * Tgsample
        kr += krdot * Tgsample

        gradcount += 1

    return gradcount, kr


@nb.jit(nopython=True, cache=True)  # pragma: no cover
def _vds_fill(slewmax, gradmax, Tgsample, Tdsample, ninterleaves, fov,
              krmax, ngmax, gamma, numgrad):
    g = np.zeros((numgrad, 2))
    r = np.zeros(numgrad)
    q = np.zeros(numgrad)

    kr = 0.0
    krdot = 0.0
    theta = 0.0
    thetadot = 0.0
    lastkx = 0.0
    lastky = 0.0
    gradcount = 0
    while kr < krmax and gradcount < ngmax and gradcount < numgrad:
        thetadotdot, krdotdot = _calc_thetadotdot(
            slewmax, gradmax, kr, krdot, Tgsample, Tdsample,
            ninterleaves, fov, gamma)

        thetadot += thetadotdot * Tgsample
        theta += thetadot * Tgsample

        krdot += krdotdot * Tgsample
        kr += krdot * Tgsample

        kx = kr * math.cos(theta)
        ky = kr * math.sin(theta)
        g[gradcount, 0] = (kx - lastkx) / (gamma * Tgsample)
        g[gradcount, 1] = (ky - lastky) / (gamma * Tgsample)
        r[gradcount] = kr
        q[gradcount] = theta
        lastkx = kx
        lastky = ky

        gradcount += 1

    return g, r, q, gradcount


def _check_params(slewmax, gradmax, Tgsample, Tdsample, ninterleaves, fov,
                  gamma):
    util._check_positive(slewmax=slewmax, gradmax=gradmax,
                         Tgsample=Tgsample, Tdsample=Tdsample, gamma=gamma)
    ninterleaves = util._check_count('ninterleaves', ninterleaves)
    fov = util._check_fov(fov)
    return ninterleaves, fov


def _design(slewmax, gradmax, Tgsample, Tdsample, ninterleaves, fov, krmax,
            ngmax, gamma, verbose):
    ninterleaves, fov = _check_params(slewmax, gradmax, Tgsample, Tdsample,
                                      ninterleaves, fov, gamma)
    util._check_positive(krmax=krmax)
    ngmax = util._check_count('ngmax', ngmax)

    args = (float(slewmax), float(gradmax), float(Tgsample), float(Tdsample),
            ninterleaves, fov, float(krmax), ngmax, float(gamma))

    # The length has no closed form, so find it before allocating.
    numgrad, kr = _vds_length(*args)
    if verbose:
        print('calc_vds: allocating for {} gradient points.'.format(numgrad))

    g, r, q, count = _vds_fill(*args, numgrad)
    if count != numgrad:
        raise RuntimeError(
            'Gradient fill pass stopped at {} samples, '
            'expected {}.'.format(count, numgrad))

    truncated = bool(kr < krmax)
    if verbose:
        if truncated:
            print('calc_vds: stopped at ngmax={} with kr={:.4f} < '
                  'krmax={}.'.format(ngmax, kr, krmax))
        else:
            print('calc_vds: reached kr={:.4f} in {} samples.'.format(
                kr, numgrad))

        _report_slew(g, slew_rate(g, Tgsample), Tgsample, gradmax, slewmax)

    return g, r, q, truncated


def _report_slew(g, s, Tsample, gradmax, slewmax):
    gpeak = np.max(np.linalg.norm(g, axis=-1), initial=0)
    sabs = np.linalg.norm(s, axis=-1)
    print('Peak gradient {:.4f} G/cm (gmax={}), '
          'peak slew {:.1f} G/cm/s (smax={}).'.format(
              gpeak, gradmax, np.max(sabs, initial=0), slewmax))

    # samples of a full-slew ramp up to gmax
    ramppts = int(np.ceil(gradmax / slewmax / Tsample))
    speak = np.max(sabs[ramppts:], initial=0)
    if speak > 1.01 * slewmax:
        warnings.warn(
            'Slew violation after the initial ramp, peak slew '
            '{:.1f} G/cm/s exceeds smax={} G/cm/s.'.format(
                speak, slewmax))


def calc_thetadotdot(slewmax, gradmax, kr, krdot, Tgsample, Tdsample,
                     ninterleaves, fov, gamma=config.gamma):
    r"""Second derivatives of the spiral angle and radius at one step.

    The spiral is amplitude limited when the current radial velocity
    exceeds the largest one the gradient limit allows, in which case
    :math:`\ddot{k}_r` brings it back in one gradient sample.
    Otherwise it is slew rate limited, and :math:`\ddot{k}_r` is the larger
    root of the quadratic equating the slew magnitude to `slewmax`.
    The angular acceleration then follows from

    .. math::

        \ddot{\theta} = \frac{2 \pi}{N} \frac{dF}{dk_r} \dot{k}_r^2 +
        \frac{2 \pi F}{N} \ddot{k}_r

    `gradmax` is lowered to :math:`1 / (\gamma F T_d)` where the field of
    view limits the rate of motion.

    Args:
        slewmax (float): maximum slew rate in G/cm/s.
        gradmax (float): maximum gradient amplitude in G/cm.
        kr (float): current k-space radius in 1/cm.
        krdot (float): current radial velocity in 1/cm/s.
        Tgsample (float): gradient sample period in s.
        Tdsample (float): data sample period in s.
        ninterleaves (int): number of interleaves.
        fov (array): FOV coefficients, see :func:`vdspiral.fov_eval`.
        gamma (float): gyromagnetic ratio in Hz/G.

    Returns:
        tuple: (thetadotdot, krdotdot) in rad/s^2 and 1/cm/s^2.

    """
    ninterleaves, fov = _check_params(slewmax, gradmax, Tgsample, Tdsample,
                                      ninterleaves, fov, gamma)

    thetadotdot, krdotdot = _calc_thetadotdot(
        float(slewmax), float(gradmax), float(kr), float(krdot),
        float(Tgsample), float(Tdsample), ninterleaves, fov, float(gamma))

    return float(thetadotdot), float(krdotdot)


def calc_vds(slewmax, gradmax, Tgsample, Tdsample, ninterleaves, fov, krmax,
             ngmax, gamma=config.gamma, verbose=False):
    r"""Variable density spiral gradient designer.

    Designs a single interleaf whose field of view is the polynomial

    .. math::

        F(k_r) = f_0 + f_1 k_r + \dots + f_{n-1} k_r^{n-1}

    subject to a maximum slew rate and a maximum gradient amplitude.
    The spiral starts at the k-space center and runs until it reaches
    `krmax` or `ngmax` gradient samples, whichever comes first.
    It is recommended to oversample the gradient in the design, i.e. to
    choose `Tgsample` smaller than the hardware raster, to keep the
    integration stable.

    Args:
        slewmax (float): maximum slew rate in G/cm/s.
        gradmax (float): maximum gradient amplitude in G/cm.
        Tgsample (float): gradient sample period in s.
        Tdsample (float): data sample period in s.
        ninterleaves (int): number of interleaves.
        fov (array): FOV coefficients in cm, cm^2, ...
        krmax (float): k-space radius at which to stop, 1/(2 * resolution),
            in 1/cm.
        ngmax (int): maximum number of gradient samples.
        gamma (float): gyromagnetic ratio in Hz/G.
        verbose (bool): print the design length and peak gradient and slew.

    Returns:
        2-element tuple containing

        - **g** (*array*): gradient waveform [N, 2] in G/cm.
        - **truncated** (*bool*): True if `ngmax` was hit before `krmax`.

    References:
        Hargreaves, B. Variable-density spiral design functions.
        http://mrsrl.stanford.edu/~brian/vdspiral/

    """
    g, _, _, truncated = _design(slewmax, gradmax, Tgsample, Tdsample,
                                 ninterleaves, fov, krmax, ngmax, gamma,
                                 verbose)

    return g, truncated


def vds(slewmax, gradmax, Tsample, ninterleaves, fov, krmax, ngmax,
        oversampling=4, gamma=config.gamma, verbose=False):
    r"""Variable density spiral design on a sampling raster.

    The spiral is integrated with period `Tsample / oversampling` and
    then sampled every `oversampling` steps, starting at the k-space center.
    Gradient and slew rate are finite differences on the `Tsample` raster,
    zero padded at the end.

    Args:
        slewmax (float): maximum slew rate in G/cm/s.
        gradmax (float): maximum gradient amplitude in G/cm.
        Tsample (float): sampling period in s, for gradient and acquisition.
        ninterleaves (int): number of interleaves.
        fov (array): FOV coefficients in cm, cm^2, ...
        krmax (float): k-space radius at which to stop, in 1/cm.
        ngmax (int): maximum number of oversampled design steps.
        oversampling (int): design steps per sampling period.
        gamma (float): gyromagnetic ratio in Hz/G.
        verbose (bool): print the design length and peak gradient and slew.

    Returns:
        tuple: (k, g, s, t, r, theta) tuple containing

        - **k** - (array): k-space trajectory [M, 2] in 1/cm.
        - **g** - (array): gradient waveform [M, 2] in G/cm.
        - **s** - (array): slew rate [M, 2] in G/cm/s.
        - **t** - (array): sample times in s.
        - **r** - (array): k-space radius.
        - **theta** - (array): k-space angle.

    """
    oversampling = util._check_count('oversampling', oversampling)
    util._check_positive(Tsample=Tsample)

    Tgsample = Tsample / oversampling
    _, r, q, _ = _design(slewmax, gradmax, Tgsample, Tsample, ninterleaves,
                         fov, krmax, ngmax, gamma, False)

    r = np.concatenate(([0.0], r))[::oversampling]
    theta = np.concatenate(([0.0], q))[::oversampling]
    t = np.arange(len(r)) * Tsample

    k = r * np.exp(1j * theta)
    g = np.diff(k) / (gamma * Tsample)
    g = np.pad(g, (0, 1), 'constant')
    s = np.diff(g) / Tsample
    s = np.pad(s, (0, 1), 'constant')

    k = util.traj_complex_to_array(k)
    g = util.traj_complex_to_array(g)
    s = util.traj_complex_to_array(s)

    if verbose:
        print('vds: {} samples over {:.3f} ms, kr={:.4f}.'.format(
            len(t), t[-1] * 1e3, r[-1]))
        # the last two slew samples ramp down to the zero padding
        _report_slew(g, s[:-2], Tsample, gradmax, slewmax)

    return k, g, s, t, r, theta


def slew_rate(g, Tgsample):
    """Slew rate of a gradient waveform.

    The waveform is assumed to start from zero gradient, so the first
    sample is g[0] / Tgsample.

    Args:
        g (array): gradient waveform [N, 2] in G/cm.
        Tgsample (float): gradient sample period in s.

    Returns:
        array: slew rate [N, 2] in G/cm/s.

    """
    g = util._check_grad(g)
    util._check_positive(Tgsample=Tgsample)
    return np.diff(g, axis=0, prepend=np.zeros((1, 2))) / Tgsample
