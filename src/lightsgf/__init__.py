from lightsgf.actions import DEFAULT_MAX_SIZE, build_action_matrix
from lightsgf.algebra import (
    column_space_basis,
    is_solvable,
    null_space_basis,
    solve,
)
from lightsgf.board import BoardState
from lightsgf.errors import (
    DimensionMismatchError,
    FieldElementError,
    LightsError,
    MatrixIndexError,
    NotInvertibleError,
)
from lightsgf.field import GF2, BinaryField, Field, gf2
from lightsgf.generate import create_board, random_lights, solvable_lights
from lightsgf.matrix import Matrix
from lightsgf.rref import invert, is_rref, rank, rref
