"""
vdf-beacon configuration.

This file defines the typed configuration object for processes embedding the
VDF core (CLI runs, provers, verifiers):
- VDF parameters (modulus, iterations, delta) as a :class:`VDFParams`
- Logging level
- Prometheus textfile output path

It provides:
- Dataclass-based config with validation
- Loading from environment variables (prefix configurable)
- Loading from a JSON or YAML file (YAML via PyYAML)

The config is a plain value; pass it (or its ``vdf`` params) into the calls
that need it rather than stashing it in module state.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError, InvalidParameters
from .vdf.params import REFERENCE, VDFParams, from_dict as params_from_dict, get_params

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class BeaconConfig:
    """
    vdf:               parameters for evaluate/prove/verify
    log_level:         stdlib logging level name
    metrics_textfile:  if set, the CLI writes Prometheus metrics here on exit
    """

    vdf: VDFParams = field(default_factory=lambda: REFERENCE)
    log_level: str = "INFO"
    metrics_textfile: Optional[str] = None

    def validate(self) -> None:
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {sorted(_LOG_LEVELS)} (got {self.log_level!r})")
        if self.metrics_textfile is not None and not str(self.metrics_textfile).strip():
            raise ConfigError("metrics_textfile must be a non-empty path when set")
        try:
            self.vdf.validate()
        except InvalidParameters as e:
            raise ConfigError(f"invalid vdf parameters: {e}") from e

    # -------------------------
    # Serialization helpers
    # -------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vdf": {
                "name": self.vdf.name,
                "iterations": self.vdf.iterations,
                "delta": self.vdf.delta,
                "modulus_hex": self.vdf.modulus_hex,
                "description": self.vdf.description,
            },
            "log_level": self.log_level,
            "metrics_textfile": self.metrics_textfile,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    # -------------------------
    # Loaders
    # -------------------------

    @staticmethod
    def from_env(prefix: str = "VDF_BEACON_", env: Optional[Mapping[str, str]] = None) -> "BeaconConfig":
        """
        Load configuration from environment variables. All variables are optional.

        Supported keys (examples):
          - VDF_BEACON_PROFILE=reference
          - VDF_BEACON_ITERATIONS=1048576
          - VDF_BEACON_DELTA=9
          - VDF_BEACON_MODULUS_HEX=C196...
          - VDF_BEACON_LOG_LEVEL=DEBUG
          - VDF_BEACON_METRICS_TEXTFILE=/var/lib/node_exporter/vdf.prom
        """
        env = os.environ if env is None else env

        def _get(name: str) -> Optional[str]:
            return env.get(prefix + name)

        # Reuse the params loader's override logic on the prefixed keys.
        overrides = {
            f"VDF_{k}": v
            for k in ("PROFILE", "ITERATIONS", "DELTA", "MODULUS_HEX")
            if (v := _get(k)) is not None
        }
        try:
            vdf = get_params(env=overrides)
        except InvalidParameters as e:
            raise ConfigError(f"invalid {prefix}* environment: {e}") from e

        cfg = BeaconConfig(
            vdf=vdf,
            log_level=(_get("LOG_LEVEL") or "INFO").upper(),
            metrics_textfile=_get("METRICS_TEXTFILE") or None,
        )
        cfg.validate()
        return cfg

    @staticmethod
    def from_file(path: str) -> "BeaconConfig":
        """
        Load configuration from a JSON or YAML file. Example (YAML):

            log_level: INFO
            vdf:
              name: reference
              iterations: 1048576
              delta: 9
              modulus_hex: "C196BA6B..."
        """
        data = _parse_json_or_yaml(_read_text(path), path)

        vdf_d = data.get("vdf") or {}
        if not isinstance(vdf_d, dict):
            raise ConfigError(f"{path}: 'vdf' must be a mapping")
        try:
            vdf = params_from_dict(vdf_d)
        except (InvalidParameters, TypeError, ValueError) as e:
            raise ConfigError(f"{path}: invalid vdf section: {e}") from e

        cfg = BeaconConfig(
            vdf=vdf,
            log_level=str(data.get("log_level", "INFO")).upper(),
            metrics_textfile=_opt_str(data.get("metrics_textfile")),
        )
        cfg.validate()
        return cfg

    def with_vdf(self, **changes: Any) -> "BeaconConfig":
        """Copy with selected VDF parameters replaced (validated)."""
        cfg = replace(self, vdf=replace(self.vdf, **changes))
        cfg.validate()
        return cfg


# -------------------------
# Logging
# -------------------------


def configure_logging(level: str = "INFO") -> None:
    """Basic logging if the caller hasn't configured it."""
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=getattr(logging, level.upper(), logging.INFO),
            format=LOG_FORMAT,
        )
    else:
        logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))


# -------------------------
# Utilities
# -------------------------


def _opt_str(v: Any) -> Optional[str]:
    return None if v is None else str(v)


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e


def _parse_json_or_yaml(text: str, path_hint: str) -> Dict[str, Any]:
    if path_hint.endswith((".yaml", ".yml")):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path_hint}: invalid YAML: {e}") from e
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path_hint}: invalid JSON: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path_hint}: top-level config must be a mapping")
    return data


__all__ = [
    "BeaconConfig",
    "configure_logging",
    "LOG_FORMAT",
]
