"""
Deep merge for tsconfig / package.json overrides.

Mappings merge key-wise, recursively. Any other override value
(lists included) replaces the base value outright. Inputs are never
mutated; the result shares no containers with either argument.
"""
from __future__ import annotations

import copy
from typing import Any, Mapping


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict:
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
