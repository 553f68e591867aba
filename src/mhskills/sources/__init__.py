# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Source string classification."""

from mhskills.sources.classifier import RECOGNIZERS, parse_source, source_identifier

__all__ = ["RECOGNIZERS", "parse_source", "source_identifier"]
