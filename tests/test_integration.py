"""
Integration tests for full pipeline.
"""

import os
import json
import tempfile

import pandas as pd
import pytest

from lotto_exclusion.config import Config
from lotto_exclusion.data.sample_data import generate_sample_draws, validate_sample_data
from lotto_exclusion.data.loader import DrawLoader
from lotto_exclusion.data.validation import DrawValidationError
from lotto_exclusion.evaluation.backtest import BacktestEngine, replay, run_quick_backtest
from lotto_exclusion.run_backtest import main


def _temp_config(tmpdir):
    config = Config()
    config.base_dir = tmpdir
    config.ensure_dirs()
    return config


def test_full_pipeline_with_sample_data():
    """Test complete pipeline from data generation to artifacts."""
    draws = generate_sample_draws(n_draws=250, seed=42)

    validation = validate_sample_data(draws)
    assert validation["contiguous"]

    with tempfile.TemporaryDirectory() as tmpdir:
        config = _temp_config(tmpdir)
        engine = BacktestEngine(draws, config, verbose=False)
        results = engine.run()

        report = results["report"]
        assert report.total_draws == 46
        assert results["prediction"].draw_no == 1250
        assert results["guard_report"]["status"] == "CLEAN"
        assert results["metrics"]["accuracy"]["avg_success_rate"] == report.avg_success_rate

        paths = engine.save_artifacts(results)

        assert set(paths) == {"results", "summary", "success_rate_plot"}
        for path in paths.values():
            assert os.path.exists(path)
            assert os.path.dirname(path) == config.eval_dir

        saved = pd.read_csv(paths["results"])
        assert len(saved) == 46
        assert saved["draw_no"].iloc[0] == 1249

        with open(paths["summary"]) as f:
            summary = json.load(f)
        assert summary["total_draws"] == 46
        assert summary["next_draw"]["draw_no"] == 1250
        assert len(summary["next_draw"]["exclusion_list"]) == 10


def test_pipeline_with_insufficient_history():
    """Test that an empty report still runs and skips the plot."""
    draws = generate_sample_draws(n_draws=50, start_draw_no=1)

    with tempfile.TemporaryDirectory() as tmpdir:
        config = _temp_config(tmpdir)
        engine = BacktestEngine(draws, config, verbose=False)
        results = engine.run()

        assert results["report"].is_empty
        assert results["prediction"].draw_no == 51

        paths = engine.save_artifacts(results)
        assert "success_rate_plot" not in paths
        assert os.path.exists(paths["summary"])


def test_run_quick_backtest():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _temp_config(tmpdir)
        results = run_quick_backtest(generate_sample_draws(n_draws=215), config)

        assert results["report"].total_draws == 11
        assert any(name.startswith("results_") for name in os.listdir(config.eval_dir))


def test_save_and_reload_draws():
    """Test that saved draws can be reloaded from the raw data dir."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _temp_config(tmpdir)
        draws = generate_sample_draws(n_draws=100)

        loader = DrawLoader(config)
        save_path = loader.save_to_raw(draws)
        assert os.path.exists(save_path)

        loaded, meta = loader.load()

        assert meta["source"] == "file"
        assert meta["path"] == save_path
        assert meta["n_draws"] == 100
        assert meta["draw_range"] == (1000, 1099)
        assert list(loaded) == draws


def test_loader_picks_most_recently_modified_file():
    """Test that the raw dir search goes by modification time, not file name."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _temp_config(tmpdir)
        loader = DrawLoader(config)
        draws = generate_sample_draws(n_draws=30)

        older = loader.save_to_raw(draws[:20])
        newer = os.path.join(config.raw_dir, "all.json")
        with open(newer, "w") as f:
            json.dump([d.to_dict() for d in draws], f)

        # "draws_<ts>.json" sorts after "all.json" by name
        os.utime(older, (1_000_000_000, 1_000_000_000))
        os.utime(newer, (2_000_000_000, 2_000_000_000))

        loaded, meta = loader.load()

        assert meta["path"] == newer
        assert len(loaded) == 30


def test_load_all_json_export():
    """Test loading the all.json format with string numbers, unordered."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "all.json")
        records = [
            {"draw_no": 2, "numbers": ["3", "11", "19", "27", "35", "43"]},
            {"draw_no": 1, "numbers": ["1", "2", "3", "4", "5", "6"]},
        ]
        with open(path, "w") as f:
            json.dump(records, f)

        loaded, meta = DrawLoader(_temp_config(tmpdir)).load(path=path)

        assert [d.draw_no for d in loaded] == [1, 2]
        assert loaded[1].numbers == (3, 11, 19, 27, 35, 43)


def test_load_csv_and_excel():
    """Test tabular draw files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _temp_config(tmpdir)
        draws = generate_sample_draws(n_draws=20)
        df = pd.DataFrame([
            {"draw_no": d.draw_no, **{f"num{i + 1}": n for i, n in enumerate(d.numbers)}}
            for d in draws
        ])

        csv_path = os.path.join(config.raw_dir, "draws.csv")
        df.to_csv(csv_path, index=False)
        xlsx_path = os.path.join(config.raw_dir, "draws.xlsx")
        df.to_excel(xlsx_path, index=False)

        loader = DrawLoader(config)
        from_csv, csv_meta = loader.load(prefer="csv")
        from_xlsx, xlsx_meta = loader.load(prefer="xlsx")

        assert csv_meta["path"] == csv_path
        assert xlsx_meta["path"] == xlsx_path
        assert list(from_csv) == draws
        assert list(from_xlsx) == draws


def test_loader_falls_back_to_sample():
    with tempfile.TemporaryDirectory() as tmpdir:
        loaded, meta = DrawLoader(_temp_config(tmpdir)).load()

        assert meta["source"] == "sample"
        assert meta["path"] is None
        assert len(loaded) == 250


def test_loader_rejects_malformed_file():
    """Test that one bad record fails the whole load."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "bad.json")
        records = [d.to_dict() for d in generate_sample_draws(n_draws=5)]
        records[2]["numbers"].append(44)
        with open(path, "w") as f:
            json.dump(records, f)

        loader = DrawLoader(_temp_config(tmpdir))
        with pytest.raises(DrawValidationError):
            loader.load(path=path)
        with pytest.raises(FileNotFoundError):
            loader.load(path=os.path.join(tmpdir, "missing.json"))


def test_replay_matches_after_round_trip_through_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _temp_config(tmpdir)
        draws = generate_sample_draws(n_draws=230)
        loader = DrawLoader(config)
        loaded, _ = loader.load(path=loader.save_to_raw(draws))

        assert replay(loaded) == replay(draws)


def test_cli_json_output(capsys):
    """Test the CLI on sample data with JSON output."""
    code = main(["--use-sample", "--no-save", "--json", "--start-draw", "1240"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["report"]["total_draws"] == 10
    assert out["next_draw"]["draw_no"] == 1250
    assert len(out["report"]["results"]) == 10


def test_cli_saves_artifacts():
    with tempfile.TemporaryDirectory() as tmpdir:
        code = main(["--use-sample", "--base-dir", tmpdir])

        assert code == 0
        produced = os.listdir(os.path.join(tmpdir, "eval"))
        assert any(name.startswith("summary_") for name in produced)


def test_cli_reports_invalid_data(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "bad.json")
        with open(path, "w") as f:
            json.dump([{"draw_no": 1, "numbers": [1, 2, 3, 4, 5, 6, 7]}], f)

        code = main(["--data", path, "--no-save", "--base-dir", tmpdir])

    assert code == 1
    assert "Invalid draw data" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["--use-sample", "--no-save", "--n-draws", "-5"],
    ["--use-sample", "--no-save", "--n-draws", "many"],
    ["--use-sample", "--no-save", "--start-draw", "0"],
    ["--use-sample", "--no-save", "--start-draw", "-1204"],
])
def test_cli_rejects_bad_counts(argv, capsys):
    """Test that bad numeric flags are usage errors, not tracebacks."""
    with pytest.raises(SystemExit) as exc:
        main(argv)

    assert exc.value.code == 2
    err = capsys.readouterr().err
    assert "must be" in err or "expected an integer" in err


def test_cli_zero_sample_draws(capsys):
    """Test that an empty sample history runs to completion."""
    code = main(["--use-sample", "--no-save", "--json", "--n-draws", "0"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["report"]["total_draws"] == 0
    assert out["next_draw"] is None


if __name__ == "__main__":
    print("Running integration tests...")

    test_full_pipeline_with_sample_data()
    print("✓ test_full_pipeline_with_sample_data")

    test_save_and_reload_draws()
    print("✓ test_save_and_reload_draws")

    test_load_all_json_export()
    print("✓ test_load_all_json_export")

    print("\nAll integration tests passed!")
