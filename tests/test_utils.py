import json
from datetime import date

import pytest

from utils import app_config
from utils.currency import format_currency, format_signed, masked_currency, parse_amount
from utils.date_helpers import (
    format_display_date, month_range, months_between, next_month,
    parse_display_date, prev_month, window_start,
)


@pytest.mark.parametrize("text, expected", [
    ("12", 12.0),
    ("12.50", 12.5),
    ("12,50", 12.5),
    ("1,234.56", 1234.56),
    (" 7 ", 7.0),
    ("", None),
    ("abc", None),
    ("nan", None),
    ("inf", None),
])
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


def test_currency_formatting():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_signed(-3) == "-$3.00"
    assert format_signed(3, "R$ ") == "+R$ 3.00"


def test_hidden_values_mask_every_amount():
    assert masked_currency(1234.5) == "$1,234.50"
    hidden = {masked_currency(v, visible=False) for v in (0, 1234.5, -80)}
    assert hidden == {"$ ••••"}


def test_month_helpers():
    assert prev_month("2025-01") == "2024-12"
    assert next_month("2024-12") == "2025-01"
    assert month_range("2024-02") == ("2024-02-01", "2024-02-29")
    assert months_between("2024-11", "2025-02") == ["2024-11", "2024-12", "2025-01", "2025-02"]
    assert window_start(date(2025, 3, 31), 30) == date(2025, 3, 2)
    with pytest.raises(ValueError):
        month_range("2025-13")


def test_display_dates():
    assert format_display_date("2025-03-09", "MM/DD/YYYY") == "03/09/2025"
    assert parse_display_date("09/03/2025", "DD/MM/YYYY") == date(2025, 3, 9)
    assert parse_display_date("2025-03-09", "DD/MM/YYYY") == date(2025, 3, 9)
    assert parse_display_date("garbage", "DD/MM/YYYY") is None


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(app_config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "config.json")
    return tmp_path


def test_config_missing_or_corrupt(config_dir):
    assert app_config.load_config() == {}
    (config_dir / "config.json").write_text("{not json", encoding="utf-8")
    assert app_config.load_config() == {}
    assert app_config.get_log_level() == "INFO"


def test_config_round_trip(config_dir):
    app_config.set_db_folder("/data/equilibra")
    assert app_config.get_db_folder() == "/data/equilibra"
    app_config.set_db_folder(None)
    assert app_config.get_db_folder() is None


def test_log_level_validation(config_dir):
    (config_dir / "config.json").write_text(json.dumps({"log_level": "debug"}), encoding="utf-8")
    assert app_config.get_log_level() == "DEBUG"
    (config_dir / "config.json").write_text(json.dumps({"log_level": "loud"}), encoding="utf-8")
    assert app_config.get_log_level() == "INFO"
