from enum import Enum
from typing import Optional
import sys
from pydantic import BaseModel, Field, validator

from ..errors import UnsupportedPlatformError

SCIP_BINARIES = {
    "linux": "scip-3.0.2.linux.x86_64.gnu.opt.spx",
    "darwin": "scip-3.0.2.darwin.x86_64.gnu.opt.spx",
    "win32": "scip-3.0.2.mingw.x86_64.intel.opt.spx.exe",
}


def default_scip_binary(platform: Optional[str] = None) -> str:
    """Name of the SCIP executable shipped for this operating system."""
    platform = platform or sys.platform
    for prefix, binary in SCIP_BINARIES.items():
        if platform.startswith(prefix):
            return binary
    raise UnsupportedPlatformError(
        f"Operating system not recognized ({platform}): "
        "no default name for the SCIP binary, set scipbin explicitly")


class DisplayMode(str, Enum):
    """How much of the majorization loop is reported"""
    OFF = "off"
    ITER = "iter"


class SmacofOptions(BaseModel):
    """Majorization loop parameters"""
    max_iter: int = Field(100, gt=0, description="Maximum number of majorization iterations")
    epsilon: float = Field(0.0, ge=0, description="Stop when the relative stress improvement is below this value")
    tol_fun: float = Field(1e-12, ge=0, description="Stop when the stress is below this value")
    display: DisplayMode = Field(DisplayMode.OFF, description="'iter' logs one table row per iteration")


class SCIPOptions(BaseModel):
    """Settings passed to the SCIP binary.

    Fields left as None are not sent, so SCIP uses its own defaults
    (absgap 0.0, gap 0.0, time 1e+20, solutions -1, verblevel 4).
    """
    scipbin: str = Field(default_factory=default_scip_binary, description="SCIP executable name or path")
    limits_absgap: Optional[float] = Field(None, ge=0, description="Stop if |primal - dual| is below this value")
    limits_gap: Optional[float] = Field(None, ge=0, description="Stop if |primal - dual|/min(|dual|,|primal|) is below this value")
    limits_time: Optional[float] = Field(None, gt=0, description="Maximal time in seconds for one solve")
    limits_solutions: Optional[int] = Field(None, ge=-1, description="Stop after this many solutions (-1: no limit)")
    display_verblevel: Optional[int] = Field(None, ge=0, le=5, description="SCIP verbosity (0: quiet mode)")

    @validator('scipbin')
    def validate_scipbin(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("scipbin cannot be empty")
        return v

    @property
    def quiet(self) -> bool:
        return self.display_verblevel == 0
