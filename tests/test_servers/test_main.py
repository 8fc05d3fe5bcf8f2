"""
Process entry point tests. uvicorn is never started and logging is left as
pytest configured it.
"""

from unittest.mock import patch

import pytest

from paymaster_signer import __main__ as entrypoint
from paymaster_signer.config import Settings
from paymaster_signer.engine.exceptions import StartupConfigurationMissing

from test_mocks import MOCK_SIGNER_ADDRESS, create_mock_env


@pytest.fixture
def run():
    with patch.object(entrypoint, "setup_logging"), patch.object(entrypoint.uvicorn, "run") as run:
        yield run


class TestMain:

    def test_missing_configuration_exits_non_zero(self, run):
        error = StartupConfigurationMissing("PAYMASTER_SIGNER_PRIVATE_KEY not found in environment")
        with patch.object(entrypoint.Settings, "from_env", side_effect=error):
            assert entrypoint.main() == 1
        run.assert_not_called()

    def test_invalid_key_exits_before_binding(self, run):
        settings = Settings.from_env(create_mock_env(PAYMASTER_SIGNER_PRIVATE_KEY="0x1234"))
        with patch.object(entrypoint.Settings, "from_env", return_value=settings):
            assert entrypoint.main() == 1
        run.assert_not_called()

    def test_serves_configured_app(self, run):
        settings = Settings.from_env(create_mock_env(PORT="4000", HOST="127.0.0.1"))
        with patch.object(entrypoint.Settings, "from_env", return_value=settings):
            assert entrypoint.main() == 0

        app = run.call_args.args[0]
        assert app.identity.address == MOCK_SIGNER_ADDRESS
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        assert run.call_args.kwargs["port"] == 4000
