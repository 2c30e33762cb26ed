from .errors import MalformedInputError, OutOfBoundsError, RoutingError, UnreachableError
from .Objects import Coord, Direction, Grid, Path, SearchState
from .ConstrainedRouter import MAX_RUN, ConstrainedPathSearch, SearchResult, minimal_cost, search
from .utilities import longest_run, path_cost, path_to_str, path_turns, reconstruct_path
