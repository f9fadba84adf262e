"""
Pytest configuration file for isdacds library tests
Provides common fixtures and test configuration
"""
import os
import sys
import pytest

# Add the isdacds package to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Import key modules for fixtures
from isdacds.utils.date import Date
from isdacds.utils.currency import CurrencyTypes
from isdacds.utils.global_types import ProtectionTypes
from isdacds.models.models import CreditModel
from isdacds.trades.credit.cds import CDS


@pytest.fixture(scope="session")
def standard_value_date():
    """Standard valuation date for tests (a Wednesday)"""
    return Date(15, 5, 2024)


@pytest.fixture(scope="session")
def discount_tenors():
    return ["6M", "1Y", "2Y", "5Y", "10Y"]


@pytest.fixture(scope="session")
def discount_zero_rates():
    """Continuously compounded USD zero rates (decimal)"""
    return [0.050, 0.048, 0.045, 0.042, 0.041]


@pytest.fixture(scope="session")
def survival_tenors():
    return ["1Y", "3Y", "5Y", "7Y"]


@pytest.fixture(scope="session")
def survival_zero_rates():
    """Zero hazard rates of the reference entity (decimal)"""
    return [0.010, 0.012, 0.015, 0.017]


@pytest.fixture
def credit_model(standard_value_date, discount_tenors, discount_zero_rates,
                 survival_tenors, survival_zero_rates):
    """USD discount curve, ACME survival curve and a 40% recovery"""
    model = CreditModel(standard_value_date)
    model.build_discount_curve(CurrencyTypes.USD, discount_tenors,
                               discount_zero_rates)
    model.build_survival_curve("ACME", CurrencyTypes.USD, survival_tenors,
                               survival_zero_rates)
    model.set_recovery_rate("ACME", 0.40)
    return model


@pytest.fixture
def standard_cds_params():
    """Standard 5Y CDS on ACME paying 100bp quarterly"""
    return {
        'accrual_start_dt': Date(20, 3, 2024),
        'maturity_dt_or_tenor': Date(20, 6, 2029),
        'running_coupon': 0.01,
        'notional': 10_000_000.0,
        'protection_type': ProtectionTypes.BUY,
        'currency': CurrencyTypes.USD,
        'legal_entity': "ACME",
    }


@pytest.fixture
def standard_cds(standard_cds_params):
    return CDS(**standard_cds_params)


@pytest.fixture
def short_cds(standard_cds_params):
    """Single coupon CDS maturing in June 2024"""
    params = dict(standard_cds_params)
    params['maturity_dt_or_tenor'] = Date(20, 6, 2024)
    return CDS(**params)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom test markers"""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "numerical: marks tests with numerical precision requirements")


# Pytest collection hooks
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add default markers"""
    for item in items:
        # Add 'unit' marker to all tests by default
        if not any(item.iter_markers()):
            item.add_marker(pytest.mark.unit)

        # Mark integration tests
        if "integration" in item.name or item.fspath.basename.startswith("test_integration"):
            item.add_marker(pytest.mark.integration)


# Utility functions for tests
@pytest.fixture
def tolerance():
    """Standard numerical tolerance for floating point comparisons"""
    return 1e-6


@pytest.fixture
def strict_tolerance():
    """Strict numerical tolerance for high precision tests"""
    return 1e-10
