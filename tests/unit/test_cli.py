"""Tests for the development server launcher."""

import sys
from unittest.mock import patch

from say2text import cli


class TestStreamlitArgv:
    def test_binds_host_and_port(self):
        argv = cli.streamlit_argv("127.0.0.1", 4000)

        assert argv[:3] == ["streamlit", "run", str(cli.APP_PATH)]
        assert argv[argv.index("--server.address") + 1] == "127.0.0.1"
        assert argv[argv.index("--server.port") + 1] == "4000"
        assert "--server.headless" not in argv

    def test_headless(self):
        argv = cli.streamlit_argv("0.0.0.0", 3000, headless=True)
        assert argv[-2:] == ["--server.headless", "true"]

    def test_app_path_exists(self):
        assert cli.APP_PATH.is_file()


class TestMain:
    def test_hands_off_to_streamlit(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["say2text"])
        with patch("streamlit.web.cli.main", return_value=0) as st_main:
            assert cli.main(["--host", "127.0.0.1", "--port", "4321"]) == 0

        st_main.assert_called_once_with()
        assert sys.argv == cli.streamlit_argv("127.0.0.1", 4321)

    def test_port_defaults_to_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "5173")
        monkeypatch.setattr(sys, "argv", ["say2text"])
        with patch("streamlit.web.cli.main", return_value=0):
            cli.main([])

        assert sys.argv[sys.argv.index("--server.port") + 1] == "5173"
