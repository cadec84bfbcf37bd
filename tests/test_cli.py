from pathlib import Path

import pytest

from inventory import cli


class TestCli:
    def test_parses_options(self, tmp_path):
        args = cli.build_parser().parse_args(
            ["-H", "0.0.0.0", "-p", "8080", "-c", str(tmp_path / "cache")]
        )
        assert args.host == "0.0.0.0"
        assert args.port == 8080
        assert args.cache == tmp_path / "cache"

    def test_prepare_cache_dir(self, tmp_path):
        target = tmp_path / "a" / "b"
        assert cli.prepare_cache_dir(target) == target
        assert target.is_dir()
        assert cli.prepare_cache_dir(target) == target

    def test_main_runs_uvicorn(self, tmp_path, monkeypatch):
        calls = {}

        def fake_run(app, host, port, log_level):
            calls.update(app=app, host=host, port=port)

        monkeypatch.setattr(cli.uvicorn, "run", fake_run)
        cli.main(["--host", "localhost", "--port", "9000", "--cache", str(tmp_path / "c")])

        assert calls["host"] == "localhost"
        assert calls["port"] == 9000
        assert Path(tmp_path / "c" / "inventory.json").exists()

    def test_cache_dir_is_required(self, monkeypatch):
        monkeypatch.setattr(cli.config, "CACHE_DIR", None)
        monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: None)
        with pytest.raises(SystemExit) as excinfo:
            cli.main([])
        assert excinfo.value.code == 2

    def test_cache_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setattr(cli.config, "CACHE_DIR", tmp_path / "env-cache")
        assert cli.build_parser().parse_args([]).cache == tmp_path / "env-cache"
