from __future__ import annotations

from pathlib import Path

from jumparc.__main__ import main
from jumparc.state import load_state


def test_headless_smoke_prints_arc_report(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("JUMPARC_STATE_DIR", str(tmp_path / "state"))

    main(["--smoke", "--rise-speed", "4", "--jump-height", "2"])

    out = capsys.readouterr().out
    assert "ascent gravity scale: 0.407747" in out
    assert "arc | jumps=1" in out
    assert "error:" not in out


def test_save_persists_cli_overrides(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("JUMPARC_STATE_DIR", str(tmp_path / "state"))

    main(["--smoke", "--jump-height", "3", "--save"])
    capsys.readouterr()

    assert load_state().tuning_overrides == {"max_jump_height": 3.0}
