"""
Campaign Battle
===============
Combat math for the tabletop campaign manager: stat resolution, weapon
helpers, battle skills, and the pairwise battle calculator.
"""

__version__ = "0.1.0"
