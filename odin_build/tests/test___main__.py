import json
import os
import subprocess
from unittest.mock import patch

import pytest

from odin_build import __main__, __version__


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=["tsc"], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SETTINGS_FILENAME", raising=False)
    return tmp_path


def write_settings(project, data, name="odin.dev.json"):
    (project / name).write_text(json.dumps(data), encoding="utf-8")


def fake_tsc(out_dir):
    """Simulate tsc emitting into the output directory."""

    def run(command, **kwargs):
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / "index.js").write_text("export {};\n")
        return completed()

    return run


class TestCreateParser:
    def test_defaults(self):
        args = __main__.create_parser().parse_args(["dev"])
        assert args.build_type == "dev"
        assert args.debug is False
        assert args.no_clear is False

    def test_debug_flag(self):
        args = __main__.create_parser().parse_args(["prod", "--debug"])
        assert args.build_type == "prod"
        assert args.debug is True

    def test_no_build_type(self):
        args = __main__.create_parser().parse_args([])
        assert args.build_type is None

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            __main__.create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    @patch("subprocess.run")
    def test_no_build_type(self, mock_run, project, capsys):
        (project / "dist").mkdir()

        result = __main__.main(["--no-clear"])

        assert result == 1
        assert "No build type provided." in capsys.readouterr().err
        assert (project / "dist").exists()
        mock_run.assert_not_called()

    @patch("subprocess.run")
    def test_unknown_build_type(self, mock_run, project, capsys):
        result = __main__.main(["staging", "--no-clear"])

        assert result == 1
        assert "Unknown build type 'staging'" in capsys.readouterr().err
        mock_run.assert_not_called()

    @patch("subprocess.run")
    def test_settings_not_found(self, mock_run, project, capsys):
        (project / "dist").mkdir()
        (project / "dist" / "old.js").write_text("old")

        result = __main__.main(["dev", "--no-clear"])

        assert result == 1
        captured = capsys.readouterr()
        assert "Settings file not found" in captured.out
        assert "No settings file found (odin.dev.json)" in captured.err
        assert (project / "dist" / "old.js").exists()
        mock_run.assert_not_called()

    @patch("subprocess.run")
    def test_wrong_field_type_is_settings_not_found(self, mock_run, project, capsys):
        write_settings(project, {"files": 5})

        result = __main__.main(["dev", "--no-clear"])

        assert result == 1
        err = capsys.readouterr().err
        assert "No settings file found (odin.dev.json)" in err
        assert "Unexpected error" not in err
        mock_run.assert_not_called()

    @patch("subprocess.run")
    def test_empty_build_type_means_dev(self, mock_run, project):
        write_settings(project, {})
        mock_run.return_value = completed()

        assert __main__.main(["", "--no-clear"]) == 0
        mock_run.assert_called_once()

    @patch("subprocess.run")
    def test_full_build(self, mock_run, project, capsys):
        out = project / "out"
        (project / "src").mkdir()
        (project / "src" / "README.md").write_text("# readme\n")
        out.mkdir()
        (out / "stale.js").write_text("stale")
        write_settings(project, {"src": "src", "dist": "out", "files": ["README.md"]})
        mock_run.side_effect = fake_tsc(out)

        result = __main__.main(["dev", "--no-clear"])

        assert result == 0
        assert (out / "README.md").read_text() == "# readme\n"
        assert (out / "index.js").exists()
        assert not (out / "stale.js").exists()
        assert "Build completed successfully" in capsys.readouterr().out

    @patch("subprocess.run")
    def test_compile_failure(self, mock_run, project, capsys):
        (project / "src").mkdir()
        (project / "src" / "README.md").write_text("# readme\n")
        (project / "dist").mkdir()
        write_settings(project, {"files": ["README.md"]})
        mock_run.return_value = completed(returncode=2, stderr="error TS5058")

        result = __main__.main(["dev", "--no-clear"])

        assert result == 1
        assert not (project / "dist").exists()
        assert "error TS5058" in capsys.readouterr().err

    @patch("subprocess.run")
    def test_copy_failure_exits_nonzero(self, mock_run, project, capsys):
        (project / "src").mkdir()
        write_settings(project, {"files": ["missing.txt"]})
        mock_run.side_effect = fake_tsc(project / "dist")

        result = __main__.main(["dev", "--no-clear"])

        assert result == 1
        assert "missing.txt" in capsys.readouterr().err

    @patch("subprocess.run")
    def test_prod_with_debug(self, mock_run, project, capsys):
        write_settings(project, {"npx": True, "explicitParams": True}, name="odin.prod.json")
        mock_run.return_value = completed(stdout="TSFILE: dist/index.js")

        result = __main__.main(["prod", "--debug", "--no-clear"])

        assert result == 0
        args, _ = mock_run.call_args
        assert args[0][:2] == ["npx", "tsc"]
        assert "--listFiles" in args[0]
        out = capsys.readouterr().out
        assert "Debug mode enabled" in out
        assert "TSFILE: dist/index.js" in out

    @patch("subprocess.run")
    def test_settings_filename_from_env(self, mock_run, project, monkeypatch):
        monkeypatch.setenv("SETTINGS_FILENAME", "myapp")
        write_settings(project, {}, name="myapp.dev.json")
        mock_run.return_value = completed()

        assert __main__.main(["dev", "--no-clear"]) == 0

    @patch("subprocess.run")
    def test_settings_filename_from_dotenv(self, mock_run, project):
        (project / ".env").write_text("SETTINGS_FILENAME=fromdotenv\n")
        write_settings(project, {}, name="fromdotenv.dev.json")
        mock_run.return_value = completed()

        with patch.dict(os.environ):
            assert __main__.main(["dev", "--no-clear"]) == 0

    @patch("odin_build.__main__.build")
    def test_unexpected_error_is_logged(self, mock_build, project, capsys):
        write_settings(project, {})
        mock_build.side_effect = RuntimeError("kaboom")

        result = __main__.main(["dev", "--no-clear"])

        assert result == 1
        err = capsys.readouterr().err
        assert "Unexpected error: kaboom" in err
        assert "Traceback" not in err

    @patch("odin_build.__main__.build")
    def test_keyboard_interrupt(self, mock_build, project, capsys):
        write_settings(project, {})
        mock_build.side_effect = KeyboardInterrupt()

        assert __main__.main(["dev", "--no-clear"]) == 130
        assert "Build interrupted." in capsys.readouterr().err

    @patch("odin_build.__main__.clear_console")
    @patch("subprocess.run")
    def test_clears_console_by_default(self, mock_run, mock_clear, project):
        __main__.main([])
        mock_clear.assert_called_once()
