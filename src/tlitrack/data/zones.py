"""Zone display helpers."""

from tlitrack.parser.patterns import HUB_ZONE_PATTERNS


def get_zone_display_name(zone_path: str) -> str:
    """
    Get a display name for a zone path.

    Args:
        zone_path: Slash-delimited level path
            (e.g., "/Game/Art/Maps/02KD/KD_YuanSuKuangDong000/KD_YuanSuKuangDong000")

    Returns:
        The final path segment (the whole path if it has no segments)
    """
    return zone_path.rstrip("/").rsplit("/", 1)[-1] or zone_path


def is_hub_zone(zone: str) -> bool:
    """
    Check if a zone is a hub/town/hideout.

    Args:
        zone: Zone display name (final path segment)

    Returns:
        True if this is a hub zone
    """
    return any(pattern.search(zone) for pattern in HUB_ZONE_PATTERNS)
