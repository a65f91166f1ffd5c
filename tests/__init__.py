"""Test package for WenWen.

Provides test coverage for all components with unit tests for isolated logic
and integration tests for the HTTP workflows.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end API workflow tests
    - data/: Sample pinyin dataset

The remote completion endpoint is always faked with httpx.MockTransport.
Leverages pytest with pytest-check for soft assertions.
"""
