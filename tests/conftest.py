from __future__ import annotations

import json

import pytest

from locator_healing.config.loader import ConfigLoader
from locator_healing.core.history import HealingHistory
from tests.helpers import RecordingReporter


@pytest.fixture()
def history():
    return HealingHistory()


@pytest.fixture()
def reporter():
    return RecordingReporter()


@pytest.fixture()
def suite_config(tmp_path):
    config_path = tmp_path / "suite.json"
    config_path.write_text(
        json.dumps(
            {
                "healing": {"healing_enabled": True, "learning_enabled": True},
                "elements": [
                    {
                        "key": "login_button",
                        "locator": "id=login-btn",
                        "description": "Login button",
                    },
                    {
                        "key": "email_input",
                        "locator": "css=#email",
                        "description": "Email address",
                    },
                ],
            }
        ),
        encoding="utf-8",
    )
    return ConfigLoader.load(config_path, environ={})
