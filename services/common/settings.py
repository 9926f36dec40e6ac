"""
Environment-driven settings for the scheduling services.

A settings class declares typed fields with ``Field``. Each value comes
from a keyword argument, then the process environment, then the ``.env``
file named in ``model_config``, then the field default.

Usage:
    class Settings(BaseSettings):
        log_level: str = Field("INFO", env="LOG_LEVEL")
        strict: bool = Field(False, env="SCHEDULING_STRICT")

        model_config = SettingsConfigDict(env_file=".env")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, get_type_hints

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


@dataclass(frozen=True)
class FieldInfo:
    """Default, description and environment key of one settings field."""

    default: Any
    description: str = ""
    env: Optional[str] = None


def Field(default: Any, *, description: str = "", env: Optional[str] = None) -> Any:
    """Declare a field read from ``env``, or from the upper-cased field name."""
    return FieldInfo(default=default, description=description, env=env)


@dataclass(frozen=True)
class SettingsConfigDict:
    env_file: Optional[str] = None
    env_file_encoding: str = "utf-8"
    case_sensitive: bool = False


def read_env_file(path: str, encoding: str = "utf-8") -> Dict[str, str]:
    """Parse ``KEY=value`` lines, skipping blanks and ``#`` comments."""
    env_path = Path(path)
    if not env_path.is_file():
        return {}

    values: Dict[str, str] = {}
    for line in env_path.read_text(encoding=encoding).splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip("\"'")
    return values


def parse_value(raw: str, field_type: Any) -> Any:
    """Convert an environment string to ``bool``, ``int`` or leave it as ``str``."""
    if field_type is bool:
        return raw.strip().lower() in TRUE_VALUES
    if field_type is int:
        return int(raw)
    return raw


def _find(source: Mapping[str, str], key: str, case_sensitive: bool) -> Optional[str]:
    if case_sensitive:
        return source.get(key)
    wanted = key.upper()
    for name, value in source.items():
        if name.upper() == wanted:
            return value
    return None


class BaseSettings:
    """Base class whose typed fields are filled from the environment."""

    model_config: SettingsConfigDict = SettingsConfigDict()

    def __init__(self, **overrides: Any) -> None:
        config = self.model_config
        file_values = (
            read_env_file(config.env_file, config.env_file_encoding)
            if config.env_file
            else {}
        )
        fields = {
            name: field_type
            for name, field_type in get_type_hints(type(self)).items()
            if name != "model_config" and not name.startswith("_")
        }

        unknown = set(overrides) - set(fields)
        if unknown:
            raise TypeError(f"Unknown settings: {', '.join(sorted(unknown))}")

        for name, field_type in fields.items():
            info = getattr(type(self), name, None)
            if not isinstance(info, FieldInfo):
                info = FieldInfo(default=info)

            if name in overrides:
                setattr(self, name, overrides[name])
                continue

            key = info.env or name.upper()
            raw = _find(os.environ, key, config.case_sensitive)
            if raw is None:
                raw = _find(file_values, key, config.case_sensitive)
            setattr(
                self,
                name,
                info.default if raw is None else parse_value(raw, field_type),
            )
