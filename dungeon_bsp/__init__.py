"""
Procedural dungeon generation by binary space partitioning.

Subpackages:
    generators.bsp: partition tree, rooms, corridors and the generator
    scene: collaborator contracts and an in-memory box scene
    pipeline: seeded, staged generation runs with settings files
    validation: structural checks over generated trees
"""

__version__ = '1.0.0'
