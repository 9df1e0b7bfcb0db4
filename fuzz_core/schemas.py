from __future__ import annotations

from collections.abc import Mapping
from typing import Literal, TypeVar

from pydantic import BaseModel, Field, field_validator

MAX_VARIABLES = 26


TBaseSchema = TypeVar("TBaseSchema", bound="BaseSchema")


class BaseSchema(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    def to_dict(self) -> dict[str, object]:
        return self.model_dump()

    @classmethod
    def from_json(cls: type[TBaseSchema], data: str) -> TBaseSchema:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[TBaseSchema], data: Mapping[str, object]) -> TBaseSchema:
        return cls.model_validate(data)


class SearchConfig(BaseSchema):
    expr1: str
    expr2: str
    conditions: list[str] = Field(default_factory=list)
    num_variables: int = Field(default=6, ge=1, le=MAX_VARIABLES)
    round_mode: bool = True
    seed: int | None = None
    sampling: Literal["uniform", "best"] = "uniform"
    mutation_steps: int = Field(default=3, ge=1)
    mutation_range: float = Field(default=100.0, gt=0)
    # Zero means the two sides must compare exactly equal.
    tolerance: float = Field(default=0.0, ge=0)
    max_iterations: int | None = Field(default=None, ge=1)
    max_attempts: int | None = Field(default=None, ge=1)
    time_limit_s: float | None = Field(default=None, gt=0)
    show_progress: bool = False

    @field_validator("expr1", "expr2")
    @classmethod
    def expression_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("expression must not be empty")
        return value
