"""Aggregation helpers.

Grouped sums, array-size metrics and threshold filters over record dicts.
"""
