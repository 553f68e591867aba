# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Configuration, constants, exceptions and logging shared across mhskills."""
