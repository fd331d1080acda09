"""
Invocation of the SCIP command line binary on a PIP model.
"""
from typing import List, Union
from pathlib import Path
import subprocess
import logging
from ...schemas.options import SCIPOptions
from ...errors import SolverLaunchError

logger = logging.getLogger(__name__)

# option field -> SCIP "set" command, in the order they are sent
SCIP_SETTINGS = [
    ("limits_absgap", "set limits absgap"),
    ("limits_gap", "set limits gap"),
    ("limits_time", "set limits time"),
    ("limits_solutions", "set limits solutions"),
    ("display_verblevel", "set display verblevel"),
]


def _format_value(value) -> str:
    if isinstance(value, int):
        return str(value)
    return "%.10g" % value


def _command_path(path: Union[str, Path]) -> str:
    # SCIP splits -c commands on whitespace
    path = str(path)
    if any(c.isspace() for c in path):
        raise SolverLaunchError(
            f"SCIP cannot read or write {path!r}: the path contains whitespace. "
            "Pass a tmp_root without spaces to SCIPSolver")
    return path


def build_scip_command(problem_path: Union[str, Path],
                       solution_path: Union[str, Path],
                       options: SCIPOptions) -> List[str]:
    """Argument list: read model, apply settings, optimize, write solution, quit."""
    cmd = [options.scipbin]
    if options.quiet:
        cmd.append("-q")
    cmd += ["-c", f"read {_command_path(problem_path)}"]
    for field_name, setting in SCIP_SETTINGS:
        value = getattr(options, field_name)
        if value is not None:
            cmd += ["-c", f"{setting} {_format_value(value)}"]
    cmd += [
        "-c", "optimize",
        "-c", f"write solution {_command_path(solution_path)}",
        "-c", "quit",
    ]
    return cmd


def run_scip(problem_path: Union[str, Path],
             solution_path: Union[str, Path],
             options: SCIPOptions) -> int:
    """Run SCIP and block until it exits.

    The exit code is only logged. Whether the run produced something usable
    is decided by reading the solution file.
    """
    cmd = build_scip_command(problem_path, solution_path, options)
    logger.debug("Running SCIP: %s", " ".join(cmd))

    output = subprocess.DEVNULL if options.quiet else None
    try:
        completed = subprocess.run(cmd, stdout=output, stderr=output, check=False)
    except FileNotFoundError as e:
        raise SolverLaunchError(
            f"SCIP binary {options.scipbin!r} not found. It should be available "
            "in the system path, or scipbin should give its full path") from e
    except PermissionError as e:
        raise SolverLaunchError(f"SCIP binary {options.scipbin!r} is not executable") from e

    if completed.returncode != 0:
        logger.warning(f"SCIP exited with code {completed.returncode}")
    return completed.returncode
