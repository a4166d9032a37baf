import pytest

from helpers import SetHolidays


@pytest.fixture
def no_holidays():
    return SetHolidays()
