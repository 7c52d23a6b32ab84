# filehound/config/loader.py
"""
Handles loading, merging, and saving of search options from/to TOML files.
"""
import toml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import asdict, fields as dataclass_fields, MISSING
import structlog

from filehound.exceptions import ConfigError

from .settings import SearchOptions

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".filehound.toml", "filehound.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "filehound"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_OPTIONS_ATTR_MAP: Dict[str, str] = {
    "paths": "paths",
    "ext": "extensions",
    "glob": "globs",
    "discard": "discard_patterns",
    "size": "size",
    "modified": "modified",
    "accessed": "accessed",
    "changed": "changed",
    "empty": "empty",
    "socket": "socket",
    "ignore_hidden_files": "ignore_hidden_files",
    "ignore_hidden_dirs": "ignore_hidden_directories",
    "directory": "directories_only",
    "not": "negate",
    "depth": "max_depth",
    "follow_symlinks": "follow_symlinks",
    "sync": "sync",
    "null": "null_separated",
    "summary": "summary",
}

LIST_ATTRS = ("paths", "extensions", "globs", "discard_patterns")
ATTRS_NOT_SAVED = ("output_file", "save_profile_name")

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"could not read config file {file_path}: {e}") from e
    return data.get("tool", {}).get("filehound", {}) if file_path.name == "pyproject.toml" else data

def load_and_merge_configs(project_dir: Optional[Path] = None) -> Dict[str, Any]:
    # user-global config first, then the first project config found in project_dir (default: cwd).
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    base_dir = project_dir or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        user_profiles = merged_toml_data.get("profiles", {})
        project_profiles = project_settings.pop("profiles", {})
        if isinstance(user_profiles, dict) and isinstance(project_profiles, dict):
            user_profiles.update(project_profiles)
            merged_toml_data["profiles"] = user_profiles
        elif isinstance(project_profiles, dict):
            merged_toml_data["profiles"] = project_profiles
        merged_toml_data.update(project_settings)
        break

    if not merged_toml_data:
        log.debug("no_configuration_files_loaded")
    return merged_toml_data

def _coerce_value(attr: str, value: Any) -> Any:
    # toml gives strings/ints/lists; normalize them to what SearchOptions expects.
    if attr in LIST_ATTRS:
        if isinstance(value, (str, int)):
            return [str(value)]
        if isinstance(value, list):
            return [str(v) for v in value]
        raise ConfigError(f"config key for {attr!r} must be a string or a list, got {type(value).__name__}")
    if attr == "max_depth":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"depth must be a non-negative integer, got {value!r}")
        return value
    if attr == "size":
        return None if value is None else str(value)
    return value

def options_from_toml_section(section: Dict[str, Any]) -> Dict[str, Any]:
    # maps toml keys of one section (top level or a profile) onto SearchOptions attribute values.
    values: Dict[str, Any] = {}
    for toml_key, attr in CONFIG_KEY_TO_OPTIONS_ATTR_MAP.items():
        if toml_key in section:
            values[attr] = _coerce_value(attr, section[toml_key])
    return values

def resolve_config_values(raw_config: Dict[str, Any], profile_name: Optional[str] = None) -> Dict[str, Any]:
    # top-level values, overlaid with the named profile when given.
    values = options_from_toml_section(raw_config)
    if profile_name:
        profile_section = raw_config.get("profiles", {}).get(profile_name)
        if profile_section is None:
            raise ConfigError(f"profile {profile_name!r} not found in config files")
        log.info("applying_profile_settings", profile=profile_name)
        values.update(options_from_toml_section(profile_section))
    return values

def save_options_to_profile(options: SearchOptions, profile_name: str, project_dir: Optional[Path] = None) -> bool:
    base_dir = project_dir or Path.cwd()
    target_toml_path = base_dir / ".filehound.toml"
    if not target_toml_path.exists():
        alt_path = base_dir / "filehound.toml"
        if alt_path.exists():
            target_toml_path = alt_path
    log.info("attempting_to_save_profile", profile=profile_name, path=str(target_toml_path))

    profile_data: Dict[str, Any] = {}
    option_values = asdict(options)
    for field_def in dataclass_fields(SearchOptions):
        attr = field_def.name
        if attr in ATTRS_NOT_SAVED:
            continue
        toml_key = next((k for k, v in CONFIG_KEY_TO_OPTIONS_ATTR_MAP.items() if v == attr), None)
        if not toml_key:
            continue
        default_val = field_def.default_factory() if field_def.default_factory is not MISSING else field_def.default
        value = option_values[attr]
        if value == default_val or value is None:
            continue
        profile_data[toml_key] = value

    if not profile_data:
        log.info("no_options_to_save_for_profile", profile=profile_name)
        return False

    existing_data: Dict[str, Any] = {}
    if target_toml_path.exists():
        try:
            existing_data = toml.load(target_toml_path)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"could not read existing TOML {target_toml_path} to save profile: {e}") from e

    if profile_name.upper() == "DEFAULT":
        profiles_bak = existing_data.pop("profiles", None)
        existing_data.update(profile_data)
        if profiles_bak is not None:
            existing_data["profiles"] = profiles_bak
    else:
        existing_data.setdefault("profiles", {})[profile_name] = profile_data

    try:
        with target_toml_path.open("w", encoding="utf-8") as f:
            toml.dump(existing_data, f)
    except OSError as e:
        raise ConfigError(f"error writing profile {profile_name!r} to {target_toml_path}: {e}") from e
    log.info("profile_saved_successfully", profile=profile_name, path=str(target_toml_path))
    return True
