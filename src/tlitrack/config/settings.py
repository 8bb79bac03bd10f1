"""Configuration and settings management."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from tlitrack.config.paths import get_data_dir
from tlitrack.data.inventory import EXCLUDED_PAGES
from tlitrack.parser.patterns import (
    FE_CONFIG_BASE_ID,
    PICK_ITEMS_LABEL,
    RESET_ITEMS_LAYOUT_LABEL,
)


# Common game installation locations (Steam and standalone client)
GAME_PATHS = [
    Path("C:/Program Files (x86)/Steam/steamapps/common/Torchlight Infinite"),
    Path("C:/Program Files/Steam/steamapps/common/Torchlight Infinite"),
    Path("D:/Steam/steamapps/common/Torchlight Infinite"),
    Path("D:/SteamLibrary/steamapps/common/Torchlight Infinite"),
    Path("E:/Steam/steamapps/common/Torchlight Infinite"),
    Path("E:/SteamLibrary/steamapps/common/Torchlight Infinite"),
    Path("F:/SteamLibrary/steamapps/common/Torchlight Infinite"),
    Path("C:/Program Files (x86)/Torchlight Infinite"),
    Path("C:/Program Files/Torchlight Infinite"),
    Path("D:/Torchlight Infinite"),
    Path.home() / ".steam/steam/steamapps/common/Torchlight Infinite",
    Path.home() / ".local/share/Steam/steamapps/common/Torchlight Infinite",
]

# Relative paths to log file within game directory
# Steam version uses UE_Game directly, standalone client has Game/UE_game
LOG_RELATIVE_PATHS = [
    Path("UE_Game/Torchlight/Saved/Logs/UE_game.log"),  # Steam
    Path("Game/UE_game/Torchlight/Saved/Logs/UE_game.log"),  # Standalone client
]

LOG_FILE_NAME = "UE_game.log"

DEFAULT_POLL_INTERVAL = 3.0


@dataclass(frozen=True)
class EngineConfig:
    """Identifiers the parsing engine depends on."""

    excluded_pages: frozenset = EXCLUDED_PAGES
    pickup_label: str = PICK_ITEMS_LABEL
    sort_label: str = RESET_ITEMS_LAYOUT_LABEL
    # Only consumed by session tracking and presentation
    primary_item_id: str = FE_CONFIG_BASE_ID

    @classmethod
    def create(
        cls,
        excluded_pages: Optional[Iterable[int]] = None,
        pickup_label: Optional[str] = None,
        sort_label: Optional[str] = None,
        primary_item_id: Optional[str] = None,
    ) -> "EngineConfig":
        """Build a config, keeping defaults for anything not given."""
        defaults = cls()
        return cls(
            excluded_pages=(
                frozenset(int(p) for p in excluded_pages)
                if excluded_pages is not None
                else defaults.excluded_pages
            ),
            pickup_label=pickup_label or defaults.pickup_label,
            sort_label=sort_label or defaults.sort_label,
            primary_item_id=str(primary_item_id) if primary_item_id else defaults.primary_item_id,
        )


def get_game_path_for_log(log_path: Path) -> Optional[Path]:
    """Walk back from a detected log file to the game installation root."""
    for relative_path in LOG_RELATIVE_PATHS:
        parts = relative_path.parts
        if tuple(p.lower() for p in log_path.parts[-len(parts):]) == tuple(
            p.lower() for p in parts
        ):
            return Path(*log_path.parts[: -len(parts)])
    return None


def resolve_log_path(user_path: str) -> Optional[Path]:
    """
    Resolve a user-provided path to the log file.

    Handles various user inputs:
    - Direct path to UE_game.log (or any existing file)
    - Path to Logs directory
    - Path to any parent directory (Saved, Torchlight, UE_Game, game root, etc.)

    Args:
        user_path: Any path the user provides

    Returns:
        Path to log file if found, None otherwise
    """
    path = Path(user_path)

    if not path.exists():
        return None

    if path.is_file():
        return path

    direct_log = path / LOG_FILE_NAME
    if direct_log.exists():
        return direct_log

    # User pointed to game root
    for relative_path in LOG_RELATIVE_PATHS:
        log_path = path / relative_path
        if log_path.exists():
            return log_path

    # User pointed to an intermediate directory, append the rest
    for relative_path in LOG_RELATIVE_PATHS:
        parts = relative_path.parts
        for i, part in enumerate(parts[:-1]):
            if path.name.lower() == part.lower():
                log_path = path / Path(*parts[i + 1:])
                if log_path.exists():
                    return log_path

    return None


def find_log_file(custom_game_dir: Optional[str] = None) -> Optional[Path]:
    """
    Auto-detect the game log file location.

    Checks custom directory first (if provided), then common Steam library
    and standalone install locations.

    Args:
        custom_game_dir: Custom path to check first (game root, log dir, or log file)

    Returns:
        Path to log file if found, None otherwise
    """
    if custom_game_dir:
        resolved = resolve_log_path(custom_game_dir)
        if resolved:
            return resolved

    for game_path in GAME_PATHS:
        for relative_path in LOG_RELATIVE_PATHS:
            log_path = game_path / relative_path
            if log_path.exists():
                return log_path
    return None


def validate_game_directory(game_dir: str) -> tuple[bool, Optional[Path]]:
    """
    Validate that a path can be resolved to the game log file.

    Returns:
        Tuple of (is_valid, log_path)
    """
    log_path = resolve_log_path(game_dir)
    if log_path:
        return True, log_path
    return False, None


@dataclass
class Settings:
    """Application settings."""

    # Path to game log file
    log_path: Optional[Path] = None

    # Sessions, preferences and app log live here
    data_dir: Path = field(default_factory=get_data_dir)

    # Re-scan interval for the log monitor (seconds)
    poll_interval: float = DEFAULT_POLL_INTERVAL

    # Custom ConfigBaseId -> name table (JSON)
    items_file: Optional[Path] = None

    engine: EngineConfig = field(default_factory=EngineConfig)

    # Skip log auto-detection (tests, explicit "no log" setups)
    auto_detect: bool = True

    def __post_init__(self) -> None:
        if self.log_path is None and self.auto_detect:
            self.log_path = find_log_file()

    @property
    def sessions_path(self) -> Path:
        return self.data_dir / "sessions.json"

    @classmethod
    def from_args(
        cls,
        log_path: Optional[str] = None,
        data_dir: Optional[str] = None,
        items_file: Optional[str] = None,
    ) -> "Settings":
        """
        Create settings from CLI arguments, layered over saved preferences.

        Args:
            log_path: Override log file path (file or game directory)
            data_dir: Override data directory
            items_file: Path to an item name table
        """
        from tlitrack.config.preferences import load_preferences

        resolved_data_dir = get_data_dir(Path(data_dir) if data_dir else None)
        prefs = load_preferences(resolved_data_dir)

        resolved_log = None
        if log_path:
            resolved_log = resolve_log_path(log_path) or Path(log_path)
        elif prefs.log_directory:
            resolved_log = find_log_file(custom_game_dir=prefs.log_directory)

        return cls(
            log_path=resolved_log,
            data_dir=resolved_data_dir,
            poll_interval=prefs.poll_interval,
            items_file=Path(items_file) if items_file else None,
            engine=prefs.engine_config(),
        )

    def validate(self) -> list[str]:
        """
        Validate settings.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if self.log_path is None:
            errors.append(f"{LOG_FILE_NAME} not found")
        elif not self.log_path.exists():
            errors.append(f"Log file not found: {self.log_path}")

        if self.items_file and not self.items_file.exists():
            errors.append(f"Item table not found: {self.items_file}")

        if self.poll_interval <= 0:
            errors.append(f"Poll interval must be positive: {self.poll_interval}")

        return errors
