import pytest
from tests.test_utils import GameScenario


@pytest.fixture
def scenario():
    """Factory fixture to create scenarios."""

    def _builder(layout, **kwargs):
        return GameScenario(layout, **kwargs)

    return _builder
