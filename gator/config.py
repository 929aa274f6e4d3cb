"""Reading and writing the JSON configuration file in the user's home directory."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILE_NAME = ".gatorconfig.json"

_FIELDS = ("db_url", "current_user_name")

# Characters the JSON encoder escapes so output is safe to embed in HTML.
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Config:
    """Connection string and the name of the user currently logged in."""

    db_url: str = ""
    current_user_name: str = ""
    path: Path | None = field(default=None, repr=False, compare=False)

    def set_user(self, user_name: str) -> None:
        """Make ``user_name`` the current user and save the configuration."""
        self.current_user_name = user_name
        write(self, self.path)


def config_file_path() -> Path:
    """Return the location of the configuration file in the home directory."""
    return Path.home() / CONFIG_FILE_NAME


def _resolve(path: str | Path | None) -> Path:
    return Path(path) if path is not None else config_file_path()


def _from_mapping(data: Any, path: Path) -> Config:
    if not isinstance(data, dict):
        raise ValueError("configuration must be a JSON object")
    values = {name: "" for name in _FIELDS}
    for key, value in data.items():
        name = next((f for f in _FIELDS if f == key), None)
        if name is None:
            name = next((f for f in _FIELDS if f.lower() == key.lower()), None)
        if name is None or value is None:
            continue
        if not isinstance(value, str):
            raise ValueError(f"configuration field {key!r} must be a string")
        values[name] = value
    return Config(path=path, **values)


def read(path: str | Path | None = None) -> Config:
    """Load the configuration; the first JSON value in the file is used."""
    target = _resolve(path)
    text = target.read_text(encoding="utf-8")
    data, _ = json.JSONDecoder().raw_decode(text.lstrip())
    return _from_mapping(data, target)


def write(cfg: Config, path: str | Path | None = None) -> None:
    """Save the configuration as a single line of compact JSON."""
    target = _resolve(path)
    payload = {name: getattr(cfg, name) for name in _FIELDS}
    encoded = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    for char, escape in _HTML_ESCAPES.items():
        encoded = encoded.replace(char, escape)
    target.write_text(encoded + "\n", encoding="utf-8")