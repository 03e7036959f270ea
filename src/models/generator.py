"""Pydantic models for the Combination Generator."""

from typing import List, Optional

from pydantic import BaseModel, Field, NonNegativeInt


class GenerateRequest(BaseModel):
    """Request model for generating combinations."""

    items: List[NonNegativeInt] = Field(
        ...,
        min_length=1,
        description="Group sizes; the i-th entry becomes group A, B, C, ... in order"
    )
    length: int = Field(
        ...,
        ge=1,
        description="Number of distinct groups to pick one item from"
    )


class GenerateResponse(BaseModel):
    """Response model for a generation request."""

    id: Optional[int] = Field(
        default=None,
        description="Stored response identifier (null when no combination exists)"
    )
    combination: List[List[str]] = Field(
        default_factory=list,
        description="Generated combinations, each a list of item labels"
    )


class CountResponse(BaseModel):
    """Response model for combination count calculation."""

    total_combinations: int = Field(..., description="Total number of combinations")
    groups: int = Field(..., description="Number of groups in the request")
    non_empty_groups: int = Field(..., description="Number of groups owning at least one item")


class GenerationResult(BaseModel):
    """Result of a generate-and-store run."""

    id: Optional[int] = None
    combination: List[List[str]] = Field(default_factory=list)
