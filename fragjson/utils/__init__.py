# -*- coding: utf-8 -*-
"""Location: ./fragjson/utils/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Utility helpers for fragjson.
"""
