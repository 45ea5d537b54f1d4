"""
User preferences for paint matching.
Manages settings like the default number of matches and logging options.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

PREFERENCES_FILENAME = "preferences.json"


@dataclass
class SearchPreferences:
    """Preferences for catalog searches."""
    default_top_k: int = 10  # Matches returned when the caller does not ask for a number
    debounce_seconds: float = 0.1  # Wait before searching so rapid picks collapse into one
    max_workers: int = 2  # Threads used for searches dispatched from async hosts


@dataclass
class LoggingPreferences:
    """Preferences for log output."""
    level: str = "INFO"
    log_dir: str = ""  # Empty means use default


@dataclass
class MatcherPreferences:
    """Main preferences container."""
    search_prefs: SearchPreferences
    logging_prefs: LoggingPreferences

    def __init__(self, search_prefs: Optional[SearchPreferences] = None,
                 logging_prefs: Optional[LoggingPreferences] = None):
        self.search_prefs = search_prefs or SearchPreferences()
        self.logging_prefs = logging_prefs or LoggingPreferences()


def get_base_dir() -> Path:
    """Directory holding preferences and logs, overridable with PAINTMATCH_HOME."""
    home = os.getenv('PAINTMATCH_HOME')
    if home:
        return Path(home)
    return Path.home() / '.paintmatch'


def _positive_int(value: Any, default: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        logger.warning(f"Invalid {name} {value!r} in preferences, using {default}")
        return default
    return value


def _non_negative_float(value: Any, default: float, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        logger.warning(f"Invalid {name} {value!r} in preferences, using {default}")
        return default
    return float(value)


class PreferencesManager:
    """Manages preferences with persistent storage."""

    def __init__(self, prefs_file: Optional[Union[str, Path]] = None):
        self.preferences = MatcherPreferences()
        self.prefs_file = Path(prefs_file) if prefs_file else get_base_dir() / PREFERENCES_FILENAME
        self.load_preferences()

    def load_preferences(self) -> bool:
        """Load preferences from file. Missing or unreadable files keep the defaults."""
        if not self.prefs_file.exists():
            return False

        try:
            with open(self.prefs_file, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read preferences from {self.prefs_file}: {e}")
            return False

        defaults = SearchPreferences()
        if 'search_prefs' in data:
            search_data = data['search_prefs']
            self.preferences.search_prefs = SearchPreferences(
                default_top_k=_positive_int(search_data.get('default_top_k', defaults.default_top_k),
                                            defaults.default_top_k, 'default_top_k'),
                debounce_seconds=_non_negative_float(search_data.get('debounce_seconds', defaults.debounce_seconds),
                                                     defaults.debounce_seconds, 'debounce_seconds'),
                max_workers=_positive_int(search_data.get('max_workers', defaults.max_workers),
                                          defaults.max_workers, 'max_workers'),
            )

        if 'logging_prefs' in data:
            logging_data = data['logging_prefs']
            self.preferences.logging_prefs = LoggingPreferences(
                level=str(logging_data.get('level', 'INFO')).upper(),
                log_dir=logging_data.get('log_dir', ''),
            )

        logger.debug(f"Loaded preferences from {self.prefs_file}")
        return True

    def save_preferences(self) -> bool:
        """Save preferences to file, preserving any existing sections we do not manage."""
        try:
            self.prefs_file.parent.mkdir(parents=True, exist_ok=True)

            existing_data: Dict[str, Any] = {}
            if self.prefs_file.exists():
                try:
                    with open(self.prefs_file, 'r') as f:
                        existing_data = json.load(f)
                except json.JSONDecodeError:
                    existing_data = {}

            existing_data.update({
                'search_prefs': asdict(self.preferences.search_prefs),
                'logging_prefs': asdict(self.preferences.logging_prefs),
            })

            with open(self.prefs_file, 'w') as f:
                json.dump(existing_data, f, indent=2)
            return True
        except OSError as e:
            logger.error(f"Error saving preferences to {self.prefs_file}: {e}")
            return False

    def get_default_top_k(self) -> int:
        return self.preferences.search_prefs.default_top_k

    def set_default_top_k(self, k: int) -> bool:
        """Set the default number of matches. Returns False for invalid values."""
        if isinstance(k, bool) or not isinstance(k, int) or k < 1:
            return False
        self.preferences.search_prefs.default_top_k = k
        return self.save_preferences()

    def get_log_dir(self) -> Path:
        log_dir = self.preferences.logging_prefs.log_dir
        return Path(log_dir) if log_dir else get_base_dir() / 'logs'


# Global instance for easy access
_prefs_manager = None


def get_preferences_manager() -> PreferencesManager:
    """Get the global preferences manager instance."""
    global _prefs_manager
    if _prefs_manager is None:
        _prefs_manager = PreferencesManager()
    return _prefs_manager
