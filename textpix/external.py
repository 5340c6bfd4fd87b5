#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

try:
    import zstandard as _zstd  # type: ignore
except Exception:
    _zstd = None  # declared dependency; a broken install only disables the zstd path

DEFAULT_ZSTD_LEVEL = 10


@dataclass(frozen=True)
class ExternalResult:
    ok: bool
    data: bytes = b""
    error: str = ""


class ZstdCompressor:
    """Whole-buffer zstd compressor used as an alternate path to the codec.

    The zstandard module is injected (defaults to the installed one) so
    callers and tests decide what backs it. When nothing does, every call
    reports "unavailable" instead of raising.
    """

    name = "zstd"

    def __init__(self, module: Optional[Any] = None, level: int = DEFAULT_ZSTD_LEVEL) -> None:
        self._module = module if module is not None else _zstd
        self.level = int(level)

    def available(self) -> bool:
        return self._module is not None

    def compress(self, data: bytes) -> ExternalResult:
        if self._module is None:
            return ExternalResult(ok=False, error="zstandard is not installed")
        try:
            cctx = self._module.ZstdCompressor(level=self.level)
            return ExternalResult(ok=True, data=cctx.compress(bytes(data)))
        except Exception as e:
            return ExternalResult(ok=False, error=f"zstd compress failed: {e}")

    def decompress(self, data: bytes) -> ExternalResult:
        if self._module is None:
            return ExternalResult(ok=False, error="zstandard is not installed")
        try:
            dctx = self._module.ZstdDecompressor()
            return ExternalResult(ok=True, data=dctx.decompress(bytes(data)))
        except Exception as e:
            return ExternalResult(ok=False, error=f"zstd decompress failed: {e}")
