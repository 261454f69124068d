"""Tests for the everglow command line."""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from everglow.config.loader import load_settings
from everglow.storage.high_score import HighScoreStore
from everglow.ui.cli.main import build_parser, main


class TestCli:
    def test_parse_simulate(self):
        args = build_parser().parse_args(["simulate", "--policy", "stay", "--sims", "2"])
        assert args.command == "simulate"
        assert args.policy == "stay"
        assert args.sims == 2

    def test_high_score_show_and_reset(self, tmp_path, capsys):
        settings_dir = tmp_path / "data"
        main(["high-score", "--data-dir", str(settings_dir)])
        assert "High score: 0" in capsys.readouterr().out

        HighScoreStore(settings_dir / "everglow_prefs.json").save(17)
        main(["high-score", "--data-dir", str(settings_dir)])
        assert "High score: 17" in capsys.readouterr().out

        main(["high-score", "--reset", "--data-dir", str(settings_dir)])
        main(["high-score", "--data-dir", str(settings_dir)])
        assert "High score: 0" in capsys.readouterr().out

    def test_high_score_reset_failure_is_reported(self, tmp_path, capsys):
        settings_dir = tmp_path / "data"
        (settings_dir / "everglow_prefs.json").mkdir(parents=True)
        main(["high-score", "--reset", "--data-dir", str(settings_dir)])
        out = capsys.readouterr().out
        assert "Could not reset" in out
        assert "Reset (" not in out

    def test_doctor(self, tmp_path, capsys):
        main(["doctor", "--data-dir", str(tmp_path)])
        out = capsys.readouterr().out
        assert "[OK] numpy" in out
        assert "checks passing" in out

    def test_report_missing(self, tmp_path, capsys):
        main(["report", "--data-dir", str(tmp_path)])
        assert "[report] Missing results" in capsys.readouterr().out

    def test_simulate_then_report(self, tmp_path, capsys):
        main(["simulate", "--data-dir", str(tmp_path), "--policy", "greedy", "--sims", "2", "--workers", "1"])
        main(["report", "--data-dir", str(tmp_path)])
        out = capsys.readouterr().out
        assert "policy: greedy" in out
        assert "n_sims: 2" in out

    def test_report_unreadable_results(self, tmp_path, capsys):
        settings = load_settings(data_dir=tmp_path)
        settings.paths.results_file.write_text(json.dumps({"avg_alive": 3}))
        main(["report", "--data-dir", str(tmp_path)])
        assert "[report] Unreadable results" in capsys.readouterr().out
