#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import sys

from .configure import main

sys.exit(main())
