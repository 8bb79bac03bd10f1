"""Inventory tab constants and configuration."""


class InventoryPage:
    """Inventory tab PageId mappings from game logs."""

    GEAR = 100  # Equipped gear - never tracked
    SKILL = 101  # Skills and skill-related items
    COMMODITY = 102  # Consumables, currency, crafting materials
    MISC = 103  # Miscellaneous items

    NAMES = {
        GEAR: "Gear",
        SKILL: "Skill",
        COMMODITY: "Commodity",
        MISC: "Misc",
    }


# Pages to exclude from tracking
EXCLUDED_PAGES = frozenset([InventoryPage.GEAR])


def page_name(page_id: int) -> str:
    """Display name for a PageId."""
    return InventoryPage.NAMES.get(page_id, f"Page {page_id}")
