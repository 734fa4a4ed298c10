"""
Test application startup checks and the shared JSON logger.
"""
import json
import logging
import sys

import pytest

from tradesupply import create_app
from tradesupply.utils.logger import BASE_LOGGER_NAME, JsonFormatter, get_logger


def test_app_config_defaults(app):
    assert app.config['INVENTORY_QUANTITY_TOLERANCE'] == 0.01
    assert app.config['DEFAULT_FEET_PER_LAYER'] == 100
    assert app.config['DEFAULT_LAYERS_PER_PALLET'] == 10
    assert app.config['ENABLE_HTTPS'] is False


def test_missing_secret_key_refuses_to_start():
    with pytest.raises(RuntimeError, match="SECRET_KEY"):
        create_app({'SECRET_KEY': None})


def test_negative_tolerance_refuses_to_start():
    with pytest.raises(RuntimeError, match="INVENTORY_QUANTITY_TOLERANCE"):
        create_app({'INVENTORY_QUANTITY_TOLERANCE': -0.5})


def test_get_logger_nests_under_base_logger():
    """Test module loggers share the base logger's handlers"""
    assert get_logger().name == BASE_LOGGER_NAME
    assert get_logger("trade_supply.routes.inventory").name == "trade_supply.routes.inventory"
    assert get_logger("reports").name == "trade_supply.reports", "Foreign names should be nested"
    assert get_logger("reports").parent is get_logger()


def test_json_formatter_output():
    formatter = JsonFormatter({"level": "levelname", "logger": "name", "message": "message"})
    record = logging.LogRecord(
        name="trade_supply.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Stock for %s below threshold",
        args=("v1",),
        exc_info=None,
    )
    data = json.loads(formatter.format(record))
    assert data == {
        "level": "WARNING",
        "logger": "trade_supply.test",
        "message": "Stock for v1 below threshold",
    }


def test_json_formatter_includes_exception():
    formatter = JsonFormatter()
    try:
        raise ValueError("bad layer count")
    except ValueError:
        record = logging.LogRecord("trade_supply.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    data = json.loads(formatter.format(record))
    assert data["message"] == "failed"
    assert "bad layer count" in data["exc_info"]
