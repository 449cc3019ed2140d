# src/resource_packer/containers.py
from __future__ import annotations

# (compute units, storage units) per container
CONTAINER_PRESETS: dict[str, tuple[int, int]] = {
    "SMALL":    (4, 100),
    "STANDARD": (10, 200),
    "LARGE":    (32, 1000),
    "STORAGE":  (8, 4000),
    "COMPUTE":  (64, 500),
}


def get_container_capacity(preset: str) -> tuple[int, int]:
    key = preset.strip().upper()
    if key not in CONTAINER_PRESETS:
        valid = sorted(k.lower() for k in CONTAINER_PRESETS)
        raise ValueError(f"Unknown container_preset '{preset}'. Valid: {valid}")
    return CONTAINER_PRESETS[key]
