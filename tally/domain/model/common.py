"""Base model for Tally domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for domain entities.

    Entities are immutable once built; repositories hand out new instances.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # UUID | str identifiers
    )
