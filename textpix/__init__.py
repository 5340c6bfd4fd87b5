#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
textpix package

Dictionary + run-length text codec that stores its payload as raw pixel
bytes of a PNG image. pixTool.py is the command line entrypoint; the modules
here are the testable units it is built from.
"""

from __future__ import annotations

__version__ = "0.3.0"
