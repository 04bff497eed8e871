from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional
import json
import os

import yaml

from .sinks.interface import SampleFormat

ENV_VAR = "RTTY_CFG"

# words per minute -> milliseconds per bit (45 / 50 / 57 / 74 baud)
WPM_BIT_MS: Dict[int, int] = {60: 22, 66: 20, 75: 18, 100: 13}
SHIFTS = (170, 425, 850)

_RANGES = {
    "sample_rate": (5000, 48000),
    "freq_low": (500, 3000),
    "volume": (0, 100),
    "table_size": (2, 65536),
}
_POSITIVE = ("buffer_time_us", "period_time_us", "column_max", "poll_timeout_ms", "keepalive_ms")
_NON_NEGATIVE = ("lead_in_ms", "trailer_nulls")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class RttyConfig:
    sample_rate: int = 44100
    bits: int = 16                      # 8 = unsigned, 16 = signed little-endian
    wpm: int = 60
    shift: int = 170
    freq_low: int = 950
    volume: int = 100
    table_size: int = 8192
    output: str = "default"             # device name/index, "-", *.wav, *.raw, "memory"
    buffer_time_us: int = 500_000
    period_time_us: int = 100_000
    lead_in_ms: int = 500
    trailer_nulls: int = 10
    column_max: int = 76
    poll_timeout_ms: int = 100
    keepalive_ms: int = 150
    terminator: str = "\x04"

    def __post_init__(self) -> None:
        self.validate()

    @property
    def freq_high(self) -> int:
        return self.freq_low + self.shift

    @property
    def bit_ms(self) -> int:
        return WPM_BIT_MS[self.wpm]

    @property
    def sample_format(self) -> SampleFormat:
        return SampleFormat.from_bits(self.bits)

    def validate(self) -> None:
        for name, (lo, hi) in _RANGES.items():
            value = getattr(self, name)
            if not lo <= value <= hi:
                raise ConfigError(f"{name} should be in the range {lo}..{hi}, got {value}")
        for name in _POSITIVE:
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be > 0")
        for name in _NON_NEGATIVE:
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0")
        if self.bits not in (8, 16):
            raise ConfigError(f"bits should be 8 or 16, got {self.bits}")
        if self.wpm not in WPM_BIT_MS:
            raise ConfigError(f"wpm should be one of {sorted(WPM_BIT_MS)}, got {self.wpm}")
        if self.shift not in SHIFTS:
            raise ConfigError(f"shift should be one of {list(SHIFTS)}, got {self.shift}")
        if 2 * self.freq_high >= self.sample_rate:
            raise ConfigError(
                f"high tone {self.freq_high}Hz is above the Nyquist limit of {self.sample_rate}Hz"
            )
        if len(self.terminator) != 1:
            raise ConfigError("terminator must be a single character")

    def with_changes(self, **changes: Any) -> "RttyConfig":
        return replace(self, **changes)


def config_from_dict(d: Mapping[str, Any]) -> RttyConfig:
    known = {f.name: f for f in fields(RttyConfig)}
    unknown = sorted(set(d) - set(known))
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")

    kwargs: Dict[str, Any] = {}
    for name, value in d.items():
        if value is None:
            continue
        try:
            kwargs[name] = str(value) if known[name].type in ("str", str) else int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"invalid value for {name}: {value!r}") from exc
    return RttyConfig(**kwargs)


def _merged_env_cfg(base: Dict[str, Any], env: Mapping[str, str]) -> Dict[str, Any]:
    """Merge base cfg with optional JSON in RTTY_CFG."""
    cfg = dict(base)
    raw = env.get(ENV_VAR)
    if raw:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{ENV_VAR} is not valid JSON: {exc}") from exc
        if not isinstance(parsed, dict):
            raise ConfigError(f"{ENV_VAR} must hold a JSON object")
        cfg.update(parsed)
    return cfg


def load_config(path: Optional[str] = None,
                overrides: Optional[Mapping[str, Any]] = None,
                env: Optional[Mapping[str, str]] = None) -> RttyConfig:
    """
    Build the configuration from defaults, a YAML file, the RTTY_CFG
    environment variable and explicit overrides, in rising precedence.
    """
    cfg: Dict[str, Any] = {}
    if path:
        try:
            with open(path, "r", encoding="utf-8") as fp:
                loaded = yaml.safe_load(fp) or {}
        except OSError as exc:
            raise ConfigError(f"cannot read config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"{path} must contain a mapping")
        cfg.update(loaded)

    cfg = _merged_env_cfg(cfg, os.environ if env is None else env)
    if overrides:
        cfg.update({k: v for k, v in overrides.items() if v is not None})
    return config_from_dict(cfg)


__all__ = [
    "ConfigError",
    "ENV_VAR",
    "RttyConfig",
    "SHIFTS",
    "WPM_BIT_MS",
    "config_from_dict",
    "load_config",
]
