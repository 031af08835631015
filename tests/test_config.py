# test_config.py
import logging
import os
import pytest
import yaml
from src.config.explorer_config import ExplorerConfig
from src.exceptions import ConfigError
from src.monitoring.logging_config import LogConfig
from src.utils.logger import parse_level

class TestExplorerConfig:
    @pytest.fixture
    def config_path(self, tmp_path):
        return str(tmp_path / "config" / "explorer.yaml")

    def test_default_file_created(self, config_path):
        config = ExplorerConfig(config_path)

        assert os.path.exists(config_path)
        assert config.get("node.url") == "http://0.0.0.0:8545"
        assert config.get("server.port") == 5051
        assert config.get("explorer.blocks_per_page") == 10
        assert config.get("missing.key", "fallback") == "fallback"

    def test_partial_file_keeps_defaults(self, config_path):
        os.makedirs(os.path.dirname(config_path))
        with open(config_path, "w") as f:
            yaml.dump({"node": {"url": "http://127.0.0.1:7545"}}, f)

        config = ExplorerConfig(config_path)
        assert config.get("node.url") == "http://127.0.0.1:7545"
        assert config.get("node.request_timeout") == 15
        assert config.get("explorer.receipt_workers") == 1

    def test_invalid_yaml(self, config_path):
        os.makedirs(os.path.dirname(config_path))
        with open(config_path, "w") as f:
            f.write("node: [unclosed")

        with pytest.raises(ConfigError):
            ExplorerConfig(config_path)

    def test_update_persists(self, config_path):
        ExplorerConfig(config_path).update("explorer.receipt_workers", 4)
        assert ExplorerConfig(config_path).get("explorer.receipt_workers") == 4

    def test_override_is_not_persisted(self, config_path):
        config = ExplorerConfig(config_path)
        config.override("server.port", 8080)
        config.override("server.host", None)

        assert config.get("server.port") == 8080
        assert config.get("server.host") == "0.0.0.0"
        assert ExplorerConfig(config_path).get("server.port") == 5051

class TestLogging:
    def test_parse_level(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("WARNING") == logging.WARNING
        assert parse_level("nonsense") == logging.INFO

    def test_setup_logging_writes_file(self, tmp_path):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            log_config = LogConfig(log_dir=str(tmp_path / "logs"), level=logging.WARNING)
            log_config.setup_logging()
            logging.getLogger("src.test").warning("page build failed")
            for handler in root.handlers:
                handler.flush()

            with open(log_config.log_file()) as f:
                assert "page build failed" in f.read()
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)

    def test_log_config_from_explorer_config(self, tmp_path):
        config = ExplorerConfig(str(tmp_path / "explorer.yaml"))
        config.override("monitoring.log_dir", str(tmp_path / "var"))
        config.override("monitoring.log_level", "debug")

        log_config = LogConfig.from_config(config)
        assert log_config.level == logging.DEBUG
        assert os.path.isdir(tmp_path / "var")
        assert log_config.log_file().startswith(str(tmp_path / "var"))

    def test_console_handler_honours_level(self, tmp_path):
        log_config = LogConfig(log_dir=str(tmp_path), level=logging.ERROR)
        file_handler = log_config.file_handler()
        try:
            assert file_handler.level == logging.DEBUG
        finally:
            file_handler.close()
        assert log_config.console_handler().level == logging.ERROR
