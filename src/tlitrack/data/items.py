"""Item name lookup (ConfigBaseId -> English name)."""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

BUNDLED_ITEMS_PATH = Path(__file__).parent / "items_en.json"


class ItemNameResolver:
    """
    Immutable ConfigBaseId -> display name table.

    Unknown ids resolve to ``"Unknown <id>"`` so callers never need to
    handle a missing name.
    """

    def __init__(self, names: Optional[Mapping[str, str]] = None) -> None:
        self._names = MappingProxyType({str(k): v for k, v in (names or {}).items()})

    @classmethod
    def from_json(cls, path: Path) -> "ItemNameResolver":
        """
        Load a name table from a JSON object of ``{"<id>": "<name>"}``.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is not a JSON object
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Item table must be a JSON object: {path}")
        return cls(data)

    @classmethod
    def bundled(cls) -> "ItemNameResolver":
        """Name table shipped with the package."""
        return cls.from_json(BUNDLED_ITEMS_PATH)

    def resolve(self, config_base_id: str) -> str:
        name = self._names.get(config_base_id)
        if name:
            return name
        return f"Unknown {config_base_id}"

    def __contains__(self, config_base_id: object) -> bool:
        return config_base_id in self._names

    def __len__(self) -> int:
        return len(self._names)


def build_resolver(items_file: Optional[Path] = None) -> ItemNameResolver:
    """
    Name table for a configured items file, or the bundled one.

    Raises:
        OSError: If the items file cannot be read
        ValueError: If the items file is not a JSON object
    """
    if items_file:
        return ItemNameResolver.from_json(items_file)
    return ItemNameResolver.bundled()
