# -*- coding: utf-8 -*-
"""Configuration.

This module contains the physical constants used by the designers.
Every designer takes these as keyword defaults, so a different unit
system can be passed in explicitly.

"""

# Gyromagnetic ratio of hydrogen, Hz/G.
gamma = 4258.0
