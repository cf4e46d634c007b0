"""JSON serialization and deserialization for generator configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import from_dict, Config as DaciteConfig

from hggen.config.parameters import GeneratorConfig

_DACITE_CONFIG = DaciteConfig(
    cast=[tuple],
    check_types=True,
    strict=True,
)


def config_to_json(config: GeneratorConfig) -> str:
    """Serialize a GeneratorConfig to a JSON string.

    Uses sorted keys and 2-space indent for human readability and diffability.
    """
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> GeneratorConfig:
    """Deserialize a JSON string to a GeneratorConfig.

    Uses dacite with strict=True to reject unknown keys (catches schema drift)
    and cast=[tuple] to convert JSON arrays back to tuples for tags.
    Integer literals are accepted for float fields ("k_bar": 10).
    """
    return config_from_dict(json.loads(json_str))


def config_to_dict(config: GeneratorConfig) -> dict[str, Any]:
    """Convert a GeneratorConfig to a plain dictionary."""
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> GeneratorConfig:
    """Reconstruct a GeneratorConfig from a plain dictionary."""
    return from_dict(
        data_class=GeneratorConfig,
        data=_coerce_floats(d),
        config=_DACITE_CONFIG,
    )


_FLOAT_FIELDS = {
    "graph": ("k_bar", "gamma", "temperature", "zeta_eta"),
    "calibration": ("tolerance", "lambda_tolerance"),
}


def _coerce_floats(d: dict[str, Any]) -> dict[str, Any]:
    """Convert JSON integers to floats for float-typed fields.

    dacite's check_types rejects an int where a float is declared.
    """
    out = dict(d)
    for section, names in _FLOAT_FIELDS.items():
        if isinstance(out.get(section), dict):
            sub = dict(out[section])
            for name in names:
                value = sub.get(name)
                if isinstance(value, int) and not isinstance(value, bool):
                    sub[name] = float(value)
            out[section] = sub
    return out
