#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations


class TextPixError(ValueError):
    pass


class FramingError(TextPixError):
    pass


class TokenCollisionError(TextPixError):
    pass


class StreamFormatError(TextPixError):
    pass


class ContainerError(TextPixError):
    pass


class ConfigError(TextPixError):
    pass
