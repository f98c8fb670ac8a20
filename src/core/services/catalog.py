"""
Reference catalog.

Sites, items and users indexed by id. Built once per snapshot and passed
explicitly to every engine function.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from src.core.entities.item import Item
from src.core.entities.site import Site
from src.core.entities.user import User
from src.core.exceptions import SiteNotFoundError


@dataclass(frozen=True)
class ReferenceCatalog:
    """Lookup tables for reference data. Treated as read-only."""

    sites: dict[str, Site] = field(default_factory=dict)
    items: dict[str, Item] = field(default_factory=dict)
    users: dict[str, User] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        sites: Iterable[Site] = (),
        items: Iterable[Item] = (),
        users: Iterable[User] = (),
    ) -> "ReferenceCatalog":
        return cls(
            sites={s.id: s for s in sites},
            items={i.id: i for i in items},
            users={u.id: u for u in users},
        )

    def site(self, site_id: str) -> Site | None:
        return self.sites.get(site_id)

    def item(self, item_id: str) -> Item | None:
        return self.items.get(item_id)

    def require_site(self, site_id: str) -> Site:
        site = self.sites.get(site_id)
        if site is None:
            raise SiteNotFoundError(site_id)
        return site

    def site_name(self, site_id: str, default: str = "Unknown") -> str:
        site = self.sites.get(site_id)
        return site.name if site else default

    def item_cost(self, item_id: str) -> float:
        """Unit cost, 0 for items missing from the catalog."""
        item = self.items.get(item_id)
        return item.cost if item else 0.0

    def item_by_sku(self, sku: str) -> Item | None:
        wanted = sku.strip().lower()
        for item in self.items.values():
            if item.sku.lower() == wanted:
                return item
        return None
