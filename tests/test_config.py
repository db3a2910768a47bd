from unittest.mock import patch

import pytest

from config import DevelopmentConfig, ProductionConfig, get_config, parse_dimensions


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, {}),
        ("", {}),
        ("env=prod", {"env": "prod"}),
        ("env=prod, region = eu-west ", {"env": "prod", "region": "eu-west"}),
        ("env=prod,broken,=x,host=", {"env": "prod", "host": ""}),
    ],
)
def test_parse_dimensions(raw, expected):
    assert parse_dimensions(raw) == expected


def test_get_config_prefers_flask_env():
    with patch.dict("os.environ", {"FLASK_ENV": "development", "FLASK_DEBUG": "0"}):
        assert get_config() is DevelopmentConfig


def test_get_config_defaults_to_production():
    with patch.dict("os.environ", {"FLASK_ENV": "", "FLASK_DEBUG": "0"}):
        assert get_config() is ProductionConfig
