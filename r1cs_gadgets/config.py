"""
Backend configuration and JSON loader.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BackendConfig:
    """
    Reference backend configuration.

    Attributes:
        capacity: Maximum number of multiplication gates a constraint system
            may allocate; exceeding it raises AllocationFailure
        check_satisfaction: Refuse to prove a witness that violates a constraint
            instead of emitting a proof the verifier will reject
    """
    capacity: int = 1 << 16
    check_satisfaction: bool = False

    def __post_init__(self):
        if self.capacity < 1:
            raise ValueError(f"capacity must be positive, got {self.capacity}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["BackendConfig"] = None) -> "BackendConfig":
        """Overlay `data` on `base` (or the defaults); unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown config keys: {sorted(unknown)}")
        merged = asdict(base if base is not None else DEFAULT_CONFIG)
        merged.update(data)
        return cls(**merged)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = BackendConfig()


def load_config(path: str, base: Optional[BackendConfig] = None) -> BackendConfig:
    """
    Load a JSON config file and merge it into base (shallow merge).

    :param path: path to JSON config file
    :param base: configuration to update (if None use DEFAULT_CONFIG)
    :return: merged configuration
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"config file must hold a JSON object: {path}")
    return BackendConfig.from_dict(data, base=base)
