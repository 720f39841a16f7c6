# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Test suite for NodeAlchemy.

This package contains tests for all components of NodeAlchemy:
- Definition-time validation and registries
- Record layout and introspection
- Generated association getters and mutators
- End-to-end schema scenarios
"""
