"""Query primitives: predicates, joins and two-stage filters.

Each primitive works on plain record dicts so it can be tested without a
live database; only `compose.filter_then_intersect` talks to a store.
"""
