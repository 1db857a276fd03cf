"""Pytest configuration: shared fixtures.

Run pytest from the project root; pythonpath in pyproject.toml puts src/
and the root on sys.path so ``tests.lint_test_utils`` imports resolve.
"""

import pytest

from impl_trait_linter.infrastructure.gateways.rust_gateway import RustGateway


@pytest.fixture(scope="session")
def rust_gateway() -> RustGateway:
    """One parser per session; loading the grammar is the slow part."""
    return RustGateway()
