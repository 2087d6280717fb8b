"""
Name: Manufacturer Queries

Responsibilities:
  - get(id): manufacturer record or None
  - is_approved(id): True only when the record exists with status APPROVED

Collaborators:
  - domain.repositories.ManufacturerRepository
"""

from __future__ import annotations

from ....domain.entities import Manufacturer
from ....domain.repositories import ManufacturerRepository


class ManufacturerQueries:
    def __init__(self, repository: ManufacturerRepository) -> None:
        self._manufacturers = repository

    def get(self, manufacturer_id: str) -> Manufacturer | None:
        return self._manufacturers.get_manufacturer(manufacturer_id)

    def is_approved(self, manufacturer_id: str) -> bool:
        manufacturer = self._manufacturers.get_manufacturer(manufacturer_id)
        return manufacturer is not None and manufacturer.is_approved
