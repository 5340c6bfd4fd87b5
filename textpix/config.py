#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Dict, Optional

from textpix.container import DEFAULT_MODE, MODE_BYTES_PER_CELL
from textpix.dictionary import DEFAULT_MIN_FREQUENCY, DEFAULT_MIN_LENGTH, MAX_DICTIONARY_SIZE
from textpix.errors import ConfigError


@dataclass(frozen=True)
class CodecConfig:
    min_frequency: int = DEFAULT_MIN_FREQUENCY
    min_length: int = DEFAULT_MIN_LENGTH
    max_dictionary_size: int = MAX_DICTIONARY_SIZE
    pixel_mode: str = DEFAULT_MODE
    preserve_case: bool = False

    def validate(self) -> "CodecConfig":
        if int(self.min_frequency) < 1:
            raise ConfigError("min_frequency must be >= 1")
        if int(self.min_length) < 0:
            raise ConfigError("min_length must be >= 0")
        if not 0 <= int(self.max_dictionary_size) <= MAX_DICTIONARY_SIZE:
            raise ConfigError(f"max_dictionary_size must be within 0..{MAX_DICTIONARY_SIZE}")
        if self.pixel_mode not in MODE_BYTES_PER_CELL:
            raise ConfigError(f"pixel_mode must be one of {sorted(MODE_BYTES_PER_CELL)}")
        return self

    def with_overrides(self, **overrides: object) -> "CodecConfig":
        """Return a copy with non-None overrides applied (CLI flags)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes).validate()


def config_from_dict(data: Dict[str, object]) -> CodecConfig:
    known = {f.name for f in fields(CodecConfig)}
    values: Dict[str, object] = {}
    for key, value in data.items():
        if key not in known:
            raise ConfigError(f"unknown config key: {key}")
        if key == "pixel_mode":
            values[key] = str(value)
        elif key == "preserve_case":
            if not isinstance(value, bool):
                raise ConfigError("preserve_case must be true or false")
            values[key] = value
        else:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{key} must be an integer")
            values[key] = value
    return CodecConfig(**values).validate()


def load_config(path: Optional[str]) -> CodecConfig:
    if not path or not os.path.isfile(path):
        return CodecConfig()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except ValueError as e:
        raise ConfigError(f"config is not valid JSON: {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a JSON object: {path}")
    return config_from_dict(data)


def save_config(path: str, cfg: CodecConfig) -> None:
    tmp = path + ".tmp"
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(asdict(cfg), f, ensure_ascii=False, indent=2, sort_keys=True)
    os.replace(tmp, path)
