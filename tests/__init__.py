"""
Test Suite

Contains unit tests for the quote heatmap backend.

Structure:
- tests/unit/: Tests for individual components (parsing, cache, sources, scheduler, HTTP)

Uses pytest with pytest-asyncio for testing async functionality. Upstream
sources are faked; no test touches the network.
"""
