"""
Layout generators for the BSP dungeon package.
"""
