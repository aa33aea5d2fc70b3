"""
Test suite for ReForester

Unit tests for the environment pipeline, recommendation generator and
projection engine, plus end-to-end engine and CLI smoke tests. External
APIs are replaced by fakes in ``tests/fakes.py``; no network access is needed.
"""
