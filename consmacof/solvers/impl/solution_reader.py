"""
Reader for SCIP solution files written with "write solution".

Example file:

    solution status: optimal solution found
    objective value:                     468.345678663118
    x1                                                 -4 	(obj:0)
    y1                                                  2 	(obj:0)
    x2                                  0.613516669331233 	(obj:0)
    y2                                                 -4 	(obj:0)
    quadobjvar                           468.345678663118 	(obj:1)

When the starting point is already optimal SCIP writes only the two header
lines; read_solution returns None in that case.
"""
from typing import Optional, Tuple, Union
from pathlib import Path
import re
import logging
import numpy as np
from ...errors import ArtifactIOError, SolutionFormatError, UnsupportedDimensionError

logger = logging.getLogger(__name__)

HEADER_LINES = 2
COORD_VAR = re.compile(r"^([xy])(\d+)$")
AXIS = {"x": 0, "y": 1}


def read_solution(path: Union[str, Path],
                  shape: Tuple[int, int]) -> Optional[np.ndarray]:
    """Parse a solution file into an (N, 2) point configuration.

    Args:
        path: Solution file written by the solver
        shape: Expected (N, 2) shape of the configuration

    Returns:
        The configuration, with NaN where the file has no value, or None if
        the file has no data lines after the header.
    """
    if len(shape) != 2 or shape[1] != 2:
        raise UnsupportedDimensionError(
            "We only know how to read solutions that are sets of 2D points")

    try:
        with open(path, "r", encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except OSError as e:
        raise ArtifactIOError(f"Cannot open file {path} to read solution: {e}") from e

    data = [line.split() for line in lines[HEADER_LINES:] if line.strip()]
    if not data:
        logger.debug(f"No variables in {path}, solver did not update the solution")
        return None

    y = np.full(shape, np.nan)
    for tokens in data:
        match = COORD_VAR.match(tokens[0])
        if match is None:
            # quadobjvar and any other auxiliary variables
            continue
        idx = int(match.group(2)) - 1
        if not 0 <= idx < shape[0]:
            raise SolutionFormatError(
                f"Variable {tokens[0]} in {path} is outside the {shape[0]}-point configuration")
        try:
            value = float(tokens[1])
        except (IndexError, ValueError):
            raise SolutionFormatError(f"Cannot read value of {tokens[0]} in {path}")
        y[idx, AXIS[match.group(1)]] = value

    return y
