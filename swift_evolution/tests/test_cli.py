from __future__ import annotations

import json
from pathlib import Path

import pytest

from swift_evolution.scripts import analyze_proposals


def test_scan_aborts_on_parse_failure(sandbox: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        analyze_proposals.main(["--root", str(sandbox), "scan"])
    assert excinfo.value.code == 1
    assert not (sandbox / "proposals" / "_index" / "proposals.jsonl").exists()


def test_scan_keep_going_then_render(sandbox: Path) -> None:
    analyze_proposals.main(["--root", str(sandbox), "scan", "--keep-going", "--workers", "2"])
    index_dir = sandbox / "proposals" / "_index"
    lines = (index_dir / "proposals.jsonl").read_text(encoding="utf-8").splitlines()
    numbers = [json.loads(line)["se_number"] for line in lines]
    assert numbers == ["SE-0001", "SE-0042", "SE-0068", "SE-0100"]
    report = json.loads((index_dir / "scan_report.json").read_text(encoding="utf-8"))
    assert report["counts"] == {"files": 5, "parsed": 4, "errors": 1}
    assert report["target"] == "proposals"

    analyze_proposals.main(["--root", str(sandbox), "render"])
    summary = (index_dir / "SUMMARY.md").read_text(encoding="utf-8")
    assert "**Total proposals:** 4" in summary
    assert "0068-universal-self.md" in summary


def test_render_requires_scan(sandbox: Path) -> None:
    with pytest.raises(SystemExit, match="Run 'scan' first"):
        analyze_proposals.main(["--root", str(sandbox), "render"])


def test_check_prints_status_table(sandbox: Path, capsys: pytest.CaptureFixture[str]) -> None:
    analyze_proposals.main(["--root", str(sandbox), "check", "--header-lines", "12"])
    output = capsys.readouterr().out
    assert "proposals/0001-sample.md" in output
    assert "SE-0001" in output
    assert "Errors:" in output
    assert "Pending Design Review" in output


def test_missing_target_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Target directory not found"):
        analyze_proposals.main(["--root", str(tmp_path), "scan"])


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    analyze_proposals.main([])
    assert "Analyze Swift Evolution proposals" in capsys.readouterr().out


def test_custom_index_dir_inside_target_is_not_rescanned(sandbox: Path) -> None:
    target = sandbox / "proposals"
    (target / "0099-broken.md").unlink()
    report_dir = target / "report"
    args = ["--root", str(sandbox), "--index-dir", str(report_dir)]
    analyze_proposals.main([*args, "scan"])
    analyze_proposals.main([*args, "render"])
    assert (report_dir / "SUMMARY.md").exists()
    analyze_proposals.main([*args, "scan"])
    report = json.loads((report_dir / "scan_report.json").read_text(encoding="utf-8"))
    assert report["counts"] == {"files": 4, "parsed": 4, "errors": 0}
    assert "proposals/report/SUMMARY.md" not in report["files"]
