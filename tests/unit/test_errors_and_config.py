from pathlib import Path

import httpx

from explorer_harness.config import DEFAULT_SCHEMA_PATH, ExplorerConfig, get_config, set_config
from explorer_harness.errors import (
    ErrorCode,
    ExplorerClientError,
    ExplorerError,
    ExplorerLaunchError,
    GraphQlClientError,
    HarnessError,
    classify_transport_error,
)


class TestErrors:
    def test_to_dict(self):
        err = ExplorerClientError(ErrorCode.CLIENT_TIMEOUT, "too slow", details={"uri": "http://x/"})
        assert err.to_dict() == {
            "code": "CLIENT_002",
            "message": "too slow",
            "details": {"uri": "http://x/"},
        }
        assert str(err) == "[CLIENT_002] too slow"

    def test_launch_error_is_not_a_query_error(self):
        err = ExplorerLaunchError(ErrorCode.LAUNCH_BINARY_NOT_FOUND, "missing")
        assert isinstance(err, HarnessError)
        assert not isinstance(err, ExplorerError)

    def test_classify_transport_error(self):
        request = httpx.Request("POST", "http://127.0.0.1:1/")
        assert classify_transport_error(httpx.ConnectError("x", request=request)) is ErrorCode.CLIENT_CONNECTION_FAILED
        assert classify_transport_error(httpx.ConnectTimeout("x", request=request)) is ErrorCode.CLIENT_TIMEOUT
        assert classify_transport_error(httpx.RemoteProtocolError("x", request=request)) is ErrorCode.CLIENT_PROTOCOL_ERROR
        assert classify_transport_error(httpx.UnsupportedProtocol("x", request=request)) is ErrorCode.CLIENT_REQUEST_FAILED

        wrapped = GraphQlClientError("http://127.0.0.1:1/", httpx.ReadTimeout("x", request=request))
        assert classify_transport_error(wrapped) is ErrorCode.CLIENT_TIMEOUT


class TestConfig:
    def test_defaults(self):
        cfg = ExplorerConfig()
        assert cfg.binary == "explorer"
        assert cfg.graphql_path == "/explorer/graphql"
        assert cfg.bootstrap.interval == 1.0
        assert cfg.bootstrap.max_attempts == 10
        assert cfg.bootstrap.strict is False
        assert cfg.logs_dir is None
        assert cfg.schema_path == DEFAULT_SCHEMA_PATH

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("EXPLORER_BIN", "/usr/local/bin/explorer")
        monkeypatch.setenv("EXPLORER_BOOTSTRAP_INTERVAL", "0.25")
        monkeypatch.setenv("EXPLORER_BOOTSTRAP_ATTEMPTS", "40")
        monkeypatch.setenv("EXPLORER_STRICT_BOOTSTRAP", "true")
        monkeypatch.setenv("EXPLORER_PRINT_LOG", "false")
        monkeypatch.setenv("EXPLORER_LOGS_DIR", str(tmp_path))

        cfg = ExplorerConfig.from_env()

        assert cfg.binary == "/usr/local/bin/explorer"
        assert cfg.bootstrap.interval == 0.25
        assert cfg.bootstrap.max_attempts == 40
        assert cfg.bootstrap.strict is True
        assert cfg.print_log is False
        assert cfg.logs_dir == Path(tmp_path)

    def test_set_config_replaces_singleton(self):
        previous = get_config()
        custom = ExplorerConfig(binary="custom")
        try:
            set_config(custom)
            assert get_config() is custom
        finally:
            set_config(previous)

    def test_default_schema_path_is_relative_to_working_directory(self):
        assert not DEFAULT_SCHEMA_PATH.is_absolute()
        assert DEFAULT_SCHEMA_PATH.parts[:3] == ("resources", "explorer", "graphql")

    def test_default_schema_copy_is_checked_in(self):
        checked_in = Path(__file__).resolve().parents[2] / DEFAULT_SCHEMA_PATH
        assert checked_in.is_file()
        assert "allStakePools" in checked_in.read_text()
