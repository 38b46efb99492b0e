"""
Configuration Loader - YAML Loading with Validation.

Builds an ExtractionConfig from up to three layers, merged in order:
    1. A YAML config file (or a plain dictionary)
    2. A named profile
    3. Explicit overrides, typically from the command line

Profiles are looked up next to the config file first, then under
``<base_path>/config/profiles``, then among the profiles bundled with the
package.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from sample_extractor.config.models import ExtractionConfig

BUNDLED_PROFILES = Path(__file__).parent / "profiles"


class ConfigLoader:
    """Loads and validates configuration from YAML files."""

    def __init__(self, base_path: Optional[Path] = None) -> None:
        """
        Initialize config loader.

        Args:
            base_path: Base path for relative config and profile paths
        """
        self._base_path = base_path or Path(".")

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> ExtractionConfig:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file
            profile: Optional profile name to merge
            overrides: Optional values merged last (e.g. from the CLI)

        Returns:
            Validated ExtractionConfig object

        Raises:
            FileNotFoundError: If config or profile file doesn't exist
            ValidationError: If config is invalid
        """
        path = self._resolve_path(config_path)
        config_dict = self._load_yaml(path)
        return self._build(config_dict, profile, overrides, path.parent / "profiles")

    def load_from_dict(
        self,
        config_dict: Dict[str, Any],
        profile: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> ExtractionConfig:
        """Load configuration from a dictionary, with the same layering as load()."""
        return self._build(dict(config_dict), profile, overrides)

    def profile_dirs(self, config_dir: Optional[Path] = None) -> List[Path]:
        """Directories searched for ``<profile>.yaml``, in priority order."""
        dirs = [self._base_path / "config" / "profiles", BUNDLED_PROFILES]
        if config_dir is not None and config_dir not in dirs:
            dirs.insert(0, config_dir)
        return dirs

    def _build(
        self,
        config_dict: Dict[str, Any],
        profile: Optional[str],
        overrides: Optional[Dict[str, Any]],
        config_dir: Optional[Path] = None,
    ) -> ExtractionConfig:
        if profile:
            profile_dict = self._load_profile(profile, self.profile_dirs(config_dir))
            config_dict = self._merge_configs(config_dict, profile_dict)
        if overrides:
            config_dict = self._merge_configs(config_dict, overrides)
        return ExtractionConfig.model_validate(config_dict)

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        if p.is_absolute():
            return p
        return self._base_path / p

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _load_profile(self, profile: str, search_dirs: List[Path]) -> Dict[str, Any]:
        for directory in search_dirs:
            profile_path = directory / f"{profile}.yaml"
            if profile_path.is_file():
                return self._load_yaml(profile_path)
        searched = ", ".join(str(d) for d in search_dirs)
        raise FileNotFoundError(f"Profile not found: {profile} (searched {searched})")

    def _merge_configs(
        self,
        base: Dict[str, Any],
        overlay: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Deep merge overlay into base config."""
        result = dict(base)
        for key, value in overlay.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value
        return result


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
    base_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ExtractionConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to YAML config file
        profile: Optional profile name
        base_path: Base path for resolving relative paths
        overrides: Optional values merged last

    Returns:
        Validated ExtractionConfig object
    """
    loader = ConfigLoader(base_path=base_path)
    return loader.load(config_path, profile, overrides)
