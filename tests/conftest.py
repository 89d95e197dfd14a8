"""
Shared test config
"""
# Standard
from unittest import mock

# Third Party
import pytest

# Local
from appcontroller.test_helpers.helpers import configure_logging, override_config

configure_logging()


@pytest.fixture(autouse=True)
def no_local_kubeconfig():
    """This fixture makes sure the tests run as if KUBECONFIG is not exported in
    the environment, even if it is
    """
    with mock.patch(
        "kubernetes.config.new_client_from_config", side_effect=RuntimeError
    ):
        yield


@pytest.fixture(autouse=True)
def probe_stateful_sets():
    """Make sure the stateful set generation is always probed from the client
    unless a test overrides it
    """
    with override_config(stateful_set_api_enabled=None):
        yield
