"""BDD tests for inventory analytics."""

from pytest_bdd import scenarios

scenarios("features/inventory_analytics.feature")
