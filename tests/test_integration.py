"""Integration tests — CLI entry points against the sample config."""

import sys
from pathlib import Path

import pytest

from pelada import draw, nextgame, scan
from pelada.config import load_config
from pelada.sorter import sort_teams

CONFIG = Path(__file__).resolve().parent.parent / "config.yaml"


def _run(monkeypatch, module, *argv):
    monkeypatch.setattr(sys, "argv", [module.__name__, *argv])
    module.main()


class TestNextGame:
    def test_active_game(self, monkeypatch, capsys):
        _run(monkeypatch, nextgame, str(CONFIG), "--now", "2026-03-09T21:30")
        out = capsys.readouterr().out
        assert "Game 2026-03-09 (segunda)" in out
        assert "in progress" in out
        assert "Confirmed players:   13" in out
        assert "Equipment:           Ana" in out

    def test_next_game_after_grace(self, monkeypatch, capsys):
        _run(monkeypatch, nextgame, str(CONFIG), "--now", "2026-03-10T23:00")
        assert "Game 2026-03-11 (quarta)" in capsys.readouterr().out

    def test_now_with_utc_offset(self, monkeypatch, capsys):
        _run(monkeypatch, nextgame, str(CONFIG), "--now", "2026-03-09T21:30-03:00")
        out = capsys.readouterr().out
        assert "Game 2026-03-09 (segunda)" in out
        assert "in progress" in out

    def test_missing_config(self, monkeypatch, tmp_path):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, nextgame, str(tmp_path / "nope.yaml"))
        assert exc.value.code == 1

    def test_bad_now(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, nextgame, str(CONFIG), "--now", "yesterday")
        assert exc.value.code == 1
        assert "invalid --now" in capsys.readouterr().out


class TestDraw:
    def test_draw_writes_files(self, monkeypatch, capsys, tmp_path):
        out_dir = tmp_path / "tonight"
        _run(monkeypatch, draw, str(CONFIG), "--seed", "42", "-o", str(out_dir))
        out = capsys.readouterr().out
        assert "Team A" in out
        assert "Team B" in out
        assert "Next Up (3)" in out
        assert "TEAM BALANCE" in out
        assert (out_dir / "teams.txt").exists()
        assert (out_dir / "teams.csv").exists()

    def test_override_players_per_team(self, monkeypatch, capsys):
        _run(monkeypatch, draw, str(CONFIG), "--seed", "1", "-p", "4")
        out = capsys.readouterr().out
        assert "Team C" in out
        assert "Next Up (1)" in out

    def test_invalid_players_per_team(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, draw, str(CONFIG), "-p", "0")
        assert exc.value.code == 1
        assert "players_per_team" in capsys.readouterr().out

    def test_same_seed_same_teams(self):
        config = load_config(CONFIG)
        players = [config["players"][pid] for pid in config["confirmed"]]
        r1 = sort_teams(players, 5, seed=9)
        r2 = sort_teams(players, 5, seed=9)
        assert [[p.id for p in t] for t in r1.teams] == [[p.id for p in t] for t in r2.teams]


class TestScan:
    def test_scan_seeds(self, monkeypatch, capsys):
        _run(monkeypatch, scan, str(CONFIG), "-n", "5")
        out = capsys.readouterr().out
        assert "Scanning seeds 0..4" in out
        assert "Best spread" in out

    def test_scan_rejects_zero_seeds(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, scan, str(CONFIG), "-n", "0")
        assert exc.value.code == 1
        assert "--max-seed" in capsys.readouterr().out

    def test_scan_seed_summary(self):
        config = load_config(CONFIG)
        players = [config["players"][pid] for pid in config["confirmed"]]
        r = scan.scan_seed(players, 5, seed=0)
        assert r["teams"] == 2
        assert r["leftovers"] == 3
        assert r["spread"] == max(r["sums"]) - min(r["sums"])
