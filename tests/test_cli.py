"""Tests for the clustermetrics CLI."""

from unittest.mock import MagicMock, patch

import pytest
from clustermetrics import cli
from clustermetrics.config import Settings
from clustermetrics.core.errors import ExitCode
from kubernetes.client.exceptions import ApiException


@pytest.fixture
def settings():
    """Settings isolated from the environment file."""
    return Settings(_env_file=None, port=9999, host="127.0.0.1", watch_timeout_seconds=30)


@pytest.fixture
def custom_api():
    """Mock CustomObjectsApi returning the hub ClusterVersion."""
    api = MagicMock()
    api.get_cluster_custom_object.return_value = {"spec": {"clusterID": "hub-123"}}
    return api


@pytest.fixture
def patched_kube(custom_api):
    """Patch client construction to return custom_api."""
    with patch.object(cli, "create_api_client") as mock_client:
        with patch.object(cli, "custom_objects_api", return_value=custom_api):
            yield mock_client


class TestBuildParser:
    """Tests for argument parsing."""

    def test_serve_flags(self):
        """serve accepts global and serve-only flags."""
        args = cli.build_parser().parse_args(
            ["--kubeconfig", "/tmp/kc", "serve", "--port", "9100", "--watch-timeout", "60"]
        )

        assert args.command == "serve"
        assert args.kubeconfig == "/tmp/kc"
        assert args.port == 9100
        assert args.watch_timeout_seconds == 60

    def test_hub_id(self):
        """hub-id accepts the kube context flag."""
        args = cli.build_parser().parse_args(["--context", "hub", "hub-id"])

        assert args.command == "hub-id"
        assert args.kube_context == "hub"


class TestResolveSettings:
    """CLI flags override environment settings."""

    def test_flags_override(self, settings):
        """Given flags replace settings values."""
        args = cli.build_parser().parse_args(["--apiserver", "https://api:6443", "serve", "--port", "9100"])

        resolved = cli.resolve_settings(args, base=settings)

        assert resolved.apiserver == "https://api:6443"
        assert resolved.port == 9100
        assert resolved.host == "127.0.0.1"

    def test_unset_flags_keep_settings(self, settings):
        """Flags that are not given keep settings values."""
        args = cli.build_parser().parse_args(["hub-id"])

        resolved = cli.resolve_settings(args, base=settings)

        assert resolved.port == 9999
        assert resolved.kubeconfig is None


class TestHubIdCommand:
    """Tests for hub-id."""

    def test_prints_hub_id(self, settings, patched_kube, capsys):
        """hub-id prints the resolved id."""
        assert cli.hub_id_command(settings) == 0
        assert capsys.readouterr().out.strip() == "hub-123"

    def test_not_found_exits_with_config_error(self, settings, patched_kube, custom_api, capsys):
        """A missing ClusterVersion exits with the configuration code and reports on stderr."""
        custom_api.get_cluster_custom_object.side_effect = ApiException(status=404)

        assert cli.hub_id_command(settings) == ExitCode.CONFIG_ERROR

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Error getting cluster version (status=404" in captured.err


class TestServeCommand:
    """Tests for serve."""

    def test_serves_and_watches(self, settings, patched_kube):
        """serve starts the endpoint and hands the store to the watch loop."""
        with patch.object(cli, "start_http_server") as mock_server:
            with patch.object(cli, "run_watch") as mock_watch:
                assert cli.serve_command(settings) == 0

        mock_server.assert_called_once()
        assert mock_server.call_args.args == (9999,)
        assert mock_server.call_args.kwargs["addr"] == "127.0.0.1"

        list_watch, store = mock_watch.call_args.args
        assert list_watch.timeout_seconds == 30
        assert len(store) == 0

    def test_fatal_configuration_stops_before_serving(self, settings, patched_kube, custom_api):
        """Nothing is served when the hub id cannot be resolved."""
        custom_api.get_cluster_custom_object.side_effect = ApiException(status=404)

        with patch.object(cli, "start_http_server") as mock_server:
            with patch.object(cli, "run_watch") as mock_watch:
                assert cli.serve_command(settings) == ExitCode.CONFIG_ERROR

        mock_server.assert_not_called()
        mock_watch.assert_not_called()


class TestMain:
    """Tests for main()."""

    def test_exit_code_propagates(self, settings, patched_kube, custom_api):
        """main() exits with the command's exit code."""
        custom_api.get_cluster_custom_object.side_effect = ApiException(status=404)

        with patch.object(cli, "get_settings", return_value=settings):
            with patch.object(cli, "configure_logging"):
                with pytest.raises(SystemExit) as exc_info:
                    cli.main(["hub-id"])

        assert exc_info.value.code == ExitCode.CONFIG_ERROR

    def test_no_command_prints_help(self, capsys):
        """Without a command main() prints help and exits 0."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 0
        assert "clustermetrics" in capsys.readouterr().out
