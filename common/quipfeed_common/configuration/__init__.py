"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
