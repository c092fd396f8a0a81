"""
Procedural biome and terrain map generation for 2-D sandbox worlds.
"""

__version__ = "0.1.0"
