"""Tests for everglow.simulation.runner and everglow.core.results."""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from everglow.config.loader import load_settings
from everglow.core.results import SCHEMA_VERSION, SUMMARY_KEYS, load_summary_json, save_summary_json
from everglow.simulation.runner import _chunked, aggregate_runs, run_simulations, save_summary


@pytest.fixture
def settings(tmp_path):
    return load_settings(data_dir=tmp_path).with_overrides(sim_workers=1, max_sim_seconds=2.0)


class TestChunked:
    def test_chunks(self):
        assert list(_chunked([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            list(_chunked([1], 0))


class TestAggregate:
    def test_aggregate(self):
        runs = [
            {"alive_time": 2.0, "score": 4, "level": 1},
            {"alive_time": 4.0, "score": 10, "level": 2},
        ]
        summary = aggregate_runs(runs)
        assert summary["n_sims"] == 2
        assert summary["avg_alive"] == pytest.approx(3.0)
        assert summary["std_alive"] == pytest.approx(1.0)
        assert summary["min_alive"] == 2.0
        assert summary["max_score"] == 10
        assert summary["avg_level"] == pytest.approx(1.5)

    def test_aggregate_empty(self):
        with pytest.raises(ValueError):
            aggregate_runs([])


class TestRunSimulations:
    def test_run_in_process(self, settings):
        results = run_simulations(settings, "stay", seeds=[1, 2, 3], batch_size=2)
        assert results["policy"] == "stay"
        assert results["n_sims"] == 3
        assert [r["seed"] for r in results["runs"]] == [1, 2, 3]
        assert results["max_alive"] <= 2.0 + 1e-6

    def test_save_summary_drops_frames(self, settings):
        results = run_simulations(settings, "greedy", seeds=[7], batch_size=1)
        path = save_summary(settings.paths.results_file, results)
        data = load_summary_json(path)
        assert data["schema_version"] == SCHEMA_VERSION
        assert "runs" not in data
        assert data["seeds"] == [7]
        assert len(data["alive_times"]) == 1


class TestSummaryJson:
    SUMMARY = {"policy": "stay", "n_sims": 2, "avg_alive": 1.5, "std_alive": 0.5, "max_alive": 2.0,
               "avg_score": 1.0, "max_score": 2, "avg_level": 1.0}

    def test_save_adds_schema(self, tmp_path):
        path = save_summary_json(tmp_path / "out" / "r.json", self.SUMMARY)
        assert load_summary_json(path) == {"schema_version": SCHEMA_VERSION, **self.SUMMARY}

    def test_save_rejects_incomplete_summary(self, tmp_path):
        with pytest.raises(ValueError, match="avg_level"):
            save_summary_json(tmp_path / "r.json", {k: v for k, v in self.SUMMARY.items() if k != "avg_level"})
        assert not (tmp_path / "r.json").exists()

    def test_load_rejects_unversioned_file(self, tmp_path):
        path = tmp_path / "old.json"
        path.write_text(json.dumps(self.SUMMARY))
        with pytest.raises(ValueError, match="schema_version"):
            load_summary_json(path)

    def test_load_rejects_missing_keys(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"schema_version": SCHEMA_VERSION, "policy": "stay"}))
        with pytest.raises(ValueError, match="missing"):
            load_summary_json(path)

    def test_load_rejects_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_summary_json(path)

    def test_runner_summary_has_every_key(self, settings):
        results = run_simulations(settings, "stay", seeds=[4], batch_size=1)
        data = load_summary_json(save_summary(settings.paths.results_file, results))
        assert set(SUMMARY_KEYS) <= set(data)
