# -*- coding: utf-8 -*-
"""Location: ./fragjson/__main__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Allow ``python -m fragjson``.
"""

# Standard
import sys

# First-Party
from fragjson.cli import main

sys.exit(main())
