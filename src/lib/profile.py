"""
Profile loader for codesweep.

A profile is a YAML file bundling the settings of one kind of source file,
so that a project can keep e.g. a ``js.yaml`` and an ``html.yaml``:

    delimiters:
      start: "/* <"
      end: "> */"
    time_limited:
      tag_name: time-limited
      time_offset: "+09:00"
    removal_marker:
      tag_name: removal-marker
      targets: [feature1, feature2]
    attributes:
      unwrap_block: unwrap-block
      skip: skip

Every key is optional. Quote offsets such as ``"+10:00"``, which YAML would
otherwise read as a number.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..config.settings import AppSettings

# profile key -> AppSettings field
PROFILE_FIELDS: Dict[str, str] = {
    "delimiters.start": "delimiter_start",
    "delimiters.end": "delimiter_end",
    "time_limited.tag_name": "time_limited_tag_name",
    "time_limited.time_offset": "time_limited_time_offset",
    "time_limited.current": "time_limited_current",
    "removal_marker.tag_name": "removal_marker_tag_name",
    "removal_marker.targets": "removal_marker_targets",
    "attributes.unwrap_block": "unwrap_block_attribute",
    "attributes.skip": "skip_attribute",
}


class ProfileError(Exception):
    """Raised when profile or target list loading fails"""
    pass


class Profile:
    """
    Represents a codesweep profile.

    Loaded from a YAML file and applied on top of AppSettings.
    """

    def __init__(self, profile_path: str | Path):
        """
        Load a profile from disk.

        Args:
            profile_path: Path to the YAML profile

        Raises:
            ProfileError: If the file doesn't exist or isn't a YAML mapping
        """
        self.path = Path(profile_path)

        if not self.path.exists():
            raise ProfileError(f"Profile not found: {self.path}")

        self.config = self._config_load()

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse the profile YAML"""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ProfileError(f"Failed to parse {self.path.name}: {e}")
        except Exception as e:
            raise ProfileError(f"Failed to load {self.path.name}: {e}")

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ProfileError(f"Profile {self.path.name} must contain a mapping")
        return config

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from the profile.

        Supports nested keys with dot notation:
          profile.config_get('delimiters.start', '<!-- <')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def settings_apply(self, settings: AppSettings) -> AppSettings:
        """
        Overlay this profile on ``settings``.

        Returns:
            New AppSettings; ``settings`` is left untouched

        Raises:
            ProfileError: If a profile value has the wrong type
        """
        missing = object()
        updates: Dict[str, Any] = {}
        for key, field_name in PROFILE_FIELDS.items():
            value: Any = self.config_get(key, missing)
            if value is not missing:
                updates[field_name] = value

        try:
            return type(settings)(**{**settings.model_dump(), **updates})
        except ValidationError as e:
            raise ProfileError(f"Invalid value in {self.path.name}: {e}")

    def __repr__(self) -> str:
        return f"Profile(path='{self.path}')"


def targets_load(targets_path: Optional[str | Path]) -> List[str]:
    """
    Read removal-marker target names, one per line.

    Blank lines are ignored and surrounding whitespace is stripped.

    Args:
        targets_path: Path to the target list, or None

    Returns:
        Target names in file order (empty when no path is given)

    Raises:
        ProfileError: If the file cannot be read
    """
    if targets_path is None:
        return []
    try:
        text: str = Path(targets_path).read_text(encoding='utf-8')
    except OSError as e:
        raise ProfileError(f"Failed to read target list {targets_path}: {e}")
    return [line.strip() for line in text.splitlines() if line.strip()]
