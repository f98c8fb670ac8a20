"""Site reference entity."""

from enum import Enum

from pydantic import Field

from src.core.entities.common import DomainModel


class SiteType(str, Enum):
    """Kind of site holding stock."""

    CENTRAL_WAREHOUSE = "CENTRAL_WAREHOUSE"
    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    INDUSTRIAL = "INDUSTRIAL"
    SOLAR = "SOLAR"

    @classmethod
    def _missing_(cls, value: object) -> "SiteType | None":
        # Legacy backend code for the central warehouse
        if value == "BODEGA_CENTRAL":
            return cls.CENTRAL_WAREHOUSE
        return None


class Site(DomainModel):
    """A warehouse or project site. Immutable for the session."""

    id: str
    name: str
    type: SiteType
    location: str = ""
    budget: float = Field(default=0.0, ge=0)

    @property
    def is_warehouse(self) -> bool:
        return self.type == SiteType.CENTRAL_WAREHOUSE
