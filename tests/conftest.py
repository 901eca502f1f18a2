"""
Shared fixtures for the bank management test suite
"""

import logging

import pytest

from bank_management.config import BankConfig
from bank_management.customers import Customer


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so later tests can capture records with caplog"""
    yield
    logger = logging.getLogger("bank_management")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "bank_data.txt"


@pytest.fixture
def config(data_file):
    return BankConfig(storage_path=data_file)


@pytest.fixture
def asha():
    return Customer("Asha", "12 Oak St", "9876543210")
