"""Domain entity for project types a patent license can be applied for."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Project:
    """A usage category with a fixed credit cost."""

    id: str
    name: str
    cost: int
