from typing import List, Optional
from pydantic import BaseModel, Field, validator

from .options import SCIPOptions, SmacofOptions


class SmacofRequest(BaseModel):
    """Constrained MDS job submitted over HTTP"""
    distances: List[List[float]] = Field(..., description="(N, N) target distances, 0 = not connected")
    initial_configuration: List[List[float]] = Field(..., description="(N, 2) starting point configuration")
    weights: Optional[List[List[float]]] = Field(None, description="(N, N) weights, default 1 for connected pairs")
    bounds: List[str] = Field(..., description="PIP Bounds block, one line per item")
    constraints: List[str] = Field(..., description="PIP constraints block, one line per item")
    options: SmacofOptions = Field(default_factory=SmacofOptions)
    scip: SCIPOptions = Field(default_factory=SCIPOptions)

    @validator('bounds', 'constraints')
    def validate_block(cls, v):
        """SCIP does not return a solution when either block is empty"""
        if not any(line.strip() for line in v):
            raise ValueError("PIP block cannot be empty")
        return v

    @validator('distances', 'initial_configuration', 'weights')
    def validate_rectangular(cls, v):
        if v is None:
            return v
        if not v:
            raise ValueError("Matrix cannot be empty")
        if len({len(row) for row in v}) != 1:
            raise ValueError("All rows must have the same length")
        return v


class SmacofResponse(BaseModel):
    configuration: List[List[float]]
    stop_conditions: List[str]
    stress: List[float]
    elapsed: List[float]
    iterations: int
    converged: bool
