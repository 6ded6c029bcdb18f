#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility functions shared by the parser and the document emitter."""
