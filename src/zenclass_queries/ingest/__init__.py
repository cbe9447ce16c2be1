"""Seed reading and collection loading."""
