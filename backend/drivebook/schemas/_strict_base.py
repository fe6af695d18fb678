"""Schema baselines for engine inputs and outputs."""

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Immutable value object that rejects unexpected fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class SnapshotModel(BaseModel):
    """
    Read-only snapshot of a persisted row.

    Rows carry many columns the engine never looks at, so extras are ignored
    and ORM objects can be validated directly.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, from_attributes=True)
