"""
Test Suite for lazybar

Unit tests for the interval math, range cache, estimators, scroll controller
and list host, plus property-based tests of the cache invariants.
"""
