"""Tests for CLI commands."""

import io
import json
from pathlib import Path

from spacewx.cli import main


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        result = main([])
        assert result == 1

    def test_parse_prints_json(self, bulletin_path: Path, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main(["--config", str(config_path), "parse", str(bulletin_path)])
        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["kp"]["meta"]["issued"] == "2025 Oct 23 0030 UTC"
        assert len(data["kp"]["kpSeries"]) == 24

    def test_parse_stdin(self, sample_bulletin: str, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(sample_bulletin))
        result = main(["parse", "-"])
        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["probabilities"]["solarByDay"]["2025-10-23"] == 1

    def test_summary(self, bulletin_path: Path, capsys):
        result = main(["summary", str(bulletin_path)])
        assert result == 0
        assert "2025-10-25" in capsys.readouterr().out

    def test_missing_file(self, tmp_path: Path, capsys):
        result = main(["parse", str(tmp_path / "missing.txt")])
        assert result == 1
        assert "Error" in capsys.readouterr().out

    def test_non_utf8_file(self, tmp_path: Path, capsys):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b":Issued: 2025 Oct 23 \xff\xfe\n")
        result = main(["parse", str(path)])
        assert result == 1
        assert "Error" in capsys.readouterr().out

    def test_override(self, bulletin_path: Path, capsys):
        result = main([
            "--set", "parser.sort_series=false", "parse", str(bulletin_path),
        ])
        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert [p["dayIndex"] for p in data["kp"]["kpSeries"][:8]] == [0] * 8
        assert data["kp"]["kpSeries"][8]["dayIndex"] == 1

    def test_bad_override(self, capsys):
        result = main(["--set", "parser.nope=1", "config", "show"])
        assert result == 1
        assert "Error" in capsys.readouterr().out

    def test_invalid_config(self, tmp_path: Path, capsys):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("parser:\n  triplet_window: 0\n")
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 1

    def test_config_show(self, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 0
        assert "NOAA" in capsys.readouterr().out

    def test_config_get(self, capsys):
        result = main(["config", "get", "parser.triplet_window"])
        assert result == 0
        assert capsys.readouterr().out.strip() == "20"

    def test_config_get_missing(self, capsys):
        result = main(["config", "get", "parser.nope"])
        assert result == 1
