"""Normalization utilities.

Turns raw date-like seed values into comparable UTC timestamps.
"""
