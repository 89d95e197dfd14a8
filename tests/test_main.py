"""
Tests for the __main__.py entrypoint to the library as an executable
"""

# Standard
from unittest import mock

# Third Party
import pytest
import yaml

# Local
from appcontroller.__main__ import main
from appcontroller.config import library_config
from appcontroller.exceptions import ConfigError, NotFoundError
from appcontroller.test_helpers.helpers import (
    MockClusterClient,
    configure_logging,
    make_job,
    make_pod,
    make_replica_set,
    make_service,
)

## Helpers #####################################################################


@pytest.fixture(autouse=True)
def restore_library_config():
    """main writes every library config value, so put them all back"""
    saved = {
        key: val for key, val in library_config.items() if not isinstance(val, dict)
    }
    saved_api_versions = dict(library_config.api_versions)
    yield
    library_config.update(saved)
    library_config.api_versions.update(saved_api_versions)
    configure_logging()


@pytest.fixture
def definitions_file(tmp_path):
    def write(*docs):
        path = tmp_path / "resources.yaml"
        path.write_text(yaml.safe_dump_all(docs))
        return str(path)

    return write


def patched_client(*objects):
    client = MockClusterClient(list(objects))
    return client, mock.patch("appcontroller.cmd.base.make_client", return_value=client)


## Tests #######################################################################


def test_command_required():
    with pytest.raises(SystemExit):
        main([])


def test_create_dry_run(definitions_file, capsys):
    path = definitions_file({"service": make_service("web")})
    main(["create", "-f", path, "--dry_run"])
    assert capsys.readouterr().out.strip() == "service/web created"
    assert library_config.dry_run


def test_create_plain_manifest(definitions_file, capsys):
    """A file can hold plain manifests routed by their kind"""
    path = definitions_file(make_job("migrate"))
    main(["create", "--file", path, "--dry_run"])
    assert capsys.readouterr().out.strip() == "job/migrate created"


def test_create_by_name(definitions_file, capsys):
    path = definitions_file(
        {"service": make_service("web")},
        [{"pod": make_pod("web-0")}, make_job("migrate")],
    )
    main(["create", "-f", path, "-n", "web-0", "--dry_run"])
    assert capsys.readouterr().out.strip() == "pod/web-0 created"


def test_create_name_not_in_file(definitions_file):
    path = definitions_file({"service": make_service("web")})
    with pytest.raises(ConfigError):
        main(["create", "-f", path, "-n", "db", "--dry_run"])


def test_create_ambiguous_file(definitions_file):
    path = definitions_file({"service": make_service("web")}, make_pod("web-0"))
    with pytest.raises(ConfigError):
        main(["create", "-f", path, "--dry_run"])


def test_no_resource_selected():
    with pytest.raises(ConfigError):
        main(["create", "--dry_run"])


def test_file_and_existing(definitions_file):
    path = definitions_file({"service": make_service("web")})
    with pytest.raises(ConfigError):
        main(["create", "-f", path, "-e", "service/web", "--dry_run"])


def test_create_existing_is_noop(capsys):
    client, patch = patched_client()
    with patch:
        main(["create", "-e", "service/web"])
    assert capsys.readouterr().out.strip() == "service/web created"
    client.create_object.assert_not_called()


def test_delete_existing(capsys):
    client, patch = patched_client(make_pod("web-0"))
    with patch:
        main(["delete", "-e", "pod/web-0"])
    assert capsys.readouterr().out.strip() == "pod/web-0 deleted"
    client.delete_object.assert_called_once()


def test_status_ready(capsys):
    _, patch = patched_client(
        make_service("web", selector={"app": "web"}),
        make_pod("web-0", labels={"app": "web"}),
    )
    with patch:
        main(["status", "-e", "service/web"])
    assert capsys.readouterr().out.strip() == "service/web: ready"


def test_status_not_ready(capsys):
    _, patch = patched_client(
        make_service("web", selector={"app": "web"}),
        make_pod("web-0", labels={"app": "web"}, ready=False),
    )
    with patch:
        with pytest.raises(SystemExit) as exc_info:
            main(["status", "-e", "service/web"])
    assert exc_info.value.code == 1
    assert capsys.readouterr().out.strip() == "service/web: not ready"


def test_status_meta(capsys):
    _, patch = patched_client(make_replica_set("web-rs", replicas=4, ready=2))
    with patch:
        main(["status", "-e", "replicaset/web-rs", "--meta", "success_factor=50"])
    assert capsys.readouterr().out.strip() == "replicaset/web-rs: ready"


def test_status_missing_dry_run():
    with pytest.raises(NotFoundError):
        main(["status", "-e", "pod/web-0", "--dry_run"])


def test_library_config_overrides(capsys):
    client, patch = patched_client()
    with patch:
        main(
            [
                "create",
                "-e",
                "service/web",
                "--namespace",
                "elsewhere",
                "--stateful_set_api_enabled",
                "false",
                "--api_versions.stateful_set",
                "apps/v1beta2",
            ]
        )
    capsys.readouterr()
    assert library_config.namespace == "elsewhere"
    assert library_config.stateful_set_api_enabled is False
    assert library_config.api_versions.stateful_set == "apps/v1beta2"


def test_invalid_optional_bool():
    with pytest.raises(SystemExit):
        main(["create", "-e", "service/web", "--stateful_set_api_enabled", "maybe"])


def test_json_logging(capsys):
    _, patch = patched_client()
    with patch:
        main(["create", "-e", "service/web", "--log_json", "--log_level", "debug"])
    assert "service/web created" in capsys.readouterr().out
