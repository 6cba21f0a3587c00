import json
from pathlib import Path

import pytest

from scientific_polarization.run_simulation import _as_flag, _as_float, _as_int, main


def _summary(capsys: pytest.CaptureFixture[str]) -> dict[str, object]:
    return json.loads(capsys.readouterr().out)


def test_main_prints_json_summary(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--dim", "3", "--max-steps", "2", "--seed", "1"])
    summary = _summary(capsys)

    assert summary["run_id"] == "dim3_deg9_p0.7_n10_m1.5_g20_s1"
    assert summary["output_mode"] == "correct"
    assert isinstance(summary["result"], float)
    assert summary["status"] in {"stable_converged", "max_steps_reached"}
    assert summary["outcome"] in {"correct_consensus", "incorrect_consensus", "polarized"}


def test_main_config_file_with_cli_override(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"dim": 2, "max_steps": 1, "output": "map", "seed": 3}))

    main(["--config", str(config)])
    assert len(_summary(capsys)["result"]) == 2

    main(["--config", str(config), "--dim", "3"])
    result = _summary(capsys)["result"]
    assert len(result) == 3 and all(len(row) == 3 for row in result)


def test_main_reads_initial_grid_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    grid_file = tmp_path / "grid.json"
    grid_file.write_text(json.dumps([[0.1, 0.2], [0.3, 0.4]]))

    main(["--dim", "2", "--max-steps", "5", "--initial-grid", str(grid_file), "--output", "map"])
    summary = _summary(capsys)

    assert summary["status"] == "stable_converged"
    assert summary["steps_executed"] == 1
    assert summary["result"] == [[0.1, 0.2], [0.3, 0.4]]


def test_main_writes_artifacts(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_dir = tmp_path / "out"
    main(
        [
            "--dim",
            "2",
            "--max-steps",
            "2",
            "--seed",
            "4",
            "--out-dir",
            str(out_dir),
            "--log-credences",
        ]
    )
    run_id = _summary(capsys)["run_id"]

    assert (out_dir / "runs" / f"{run_id}.json").exists()
    assert (out_dir / "logs" / "step_metrics.parquet").exists()
    assert (out_dir / "logs" / "credence_log.parquet").exists()


def test_main_rejects_out_of_range_parameter() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--dim", "3", "--p", "0.95"])
    assert excinfo.value.code == 2


def test_main_rejects_unknown_output_mode() -> None:
    with pytest.raises(SystemExit):
        main(["--output", "histogram"])


def test_main_credence_log_requires_out_dir() -> None:
    with pytest.raises(SystemExit):
        main(["--dim", "2", "--log-credences"])


def test_main_rejects_non_object_config(tmp_path: Path) -> None:
    config = tmp_path / "config.json"
    config.write_text("[1, 2, 3]")
    with pytest.raises(SystemExit):
        main(["--config", str(config)])


def test_main_rejects_boolean_dim_in_config(tmp_path: Path) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"dim": True}))
    with pytest.raises(SystemExit):
        main(["--config", str(config)])


@pytest.mark.parametrize(("raw", "expected"), [(3, 3), ("12", 12), (4.0, 4)])
def test_as_int_accepts_lossless_values(raw: object, expected: int) -> None:
    assert _as_int(raw, "dim") == expected


@pytest.mark.parametrize("raw", [True, 2.5, "2.5", "ten", None, float("inf")])
def test_as_int_rejects_lossy_or_foreign_values(raw: object) -> None:
    with pytest.raises(ValueError, match="dim"):
        _as_int(raw, "dim")


def test_as_float_rejects_booleans_and_nan() -> None:
    assert _as_float("0.65", "p") == 0.65
    with pytest.raises(ValueError):
        _as_float(False, "p")
    with pytest.raises(ValueError):
        _as_float(float("nan"), "p")


@pytest.mark.parametrize(("raw", "expected"), [(True, True), ("yes", True), (" Off ", False)])
def test_as_flag_words(raw: object, expected: bool) -> None:
    assert _as_flag(raw, "log_credences") is expected


def test_as_flag_rejects_other_values() -> None:
    with pytest.raises(ValueError):
        _as_flag(1, "log_credences")
