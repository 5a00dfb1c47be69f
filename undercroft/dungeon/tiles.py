# Cell constants centralized for modular imports
WALL = -1  # impassable / not yet assigned

# Lattice step vectors, indexed N, E, S, W
NORTH, EAST, SOUTH, WEST = 0, 1, 2, 3
MOVE_DIRECTIONS = ((0, -1), (1, 0), (0, 1), (-1, 0))

__all__ = ["WALL", "NORTH", "EAST", "SOUTH", "WEST", "MOVE_DIRECTIONS"]
