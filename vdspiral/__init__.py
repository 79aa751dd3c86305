"""Variable density spiral design for MRI.

vdspiral designs spiral gradient waveforms under gradient amplitude and
slew rate limits, with a field of view that varies with k-space radius.
It expands a designed interleaf into rotated k-space trajectories with
density compensation weights.

"""
from vdspiral import config

from vdspiral import design, traj, util
from vdspiral.design import *  # noqa
from vdspiral.traj import *  # noqa
from vdspiral.util import *  # noqa
from vdspiral.version import __version__  # noqa

__all__ = ['config']
__all__.extend(design.__all__)
__all__.extend(traj.__all__)
__all__.extend(util.__all__)
