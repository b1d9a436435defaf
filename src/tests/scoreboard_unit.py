# src/tests/scoreboard_unit.py
import json
import tempfile
from pathlib import Path

from src.game.scoreboard import BestScoreStore
from src.game.simulation import Simulation
from src.game.level import Pillar


def test_missing_file_is_zero(tmp_path: Path):
    assert BestScoreStore(tmp_path / "nope.json").load() == 0


def test_corrupt_file_is_zero(tmp_path: Path):
    path = tmp_path / "best.json"
    path.write_text("{not json", encoding="utf-8")
    assert BestScoreStore(path).load() == 0
    path.write_text("[1, 2]", encoding="utf-8")
    assert BestScoreStore(path).load() == 0


def test_record_keeps_max(tmp_path: Path):
    store = BestScoreStore(tmp_path / "sub" / "best.json")
    assert store.record(7) == 7
    assert store.record(3) == 7
    assert store.load() == 7
    assert json.loads(store.path.read_text(encoding="utf-8")) == {"best_score": 7}
    assert store.record(12) == 12
    assert store.load() == 12


def test_unwritable_location_does_not_raise(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    store = BestScoreStore(blocker / "best.json")  # parent is a file
    assert store.record(5) == 0, "an unsaved score is not reported as the best"
    assert store.load() == 0


def test_game_over_feeds_store(tmp_path: Path):
    store = BestScoreStore(tmp_path / "best.json")
    sim = Simulation(1000, 600, seed=1, spawn_interval=10**9, on_game_over=store.record)
    sim.start_if_needed()
    sim.state.score = 9
    sim.player.lives = 1
    sim.pillars.append(Pillar(x=sim.player.x, y=0.0, w=100.0, h=sim.ground_y))
    sim.tick()
    assert store.load() == 9


def main():
    with tempfile.TemporaryDirectory() as d:
        for i, fn in enumerate((test_missing_file_is_zero, test_corrupt_file_is_zero,
                                test_record_keeps_max, test_unwritable_location_does_not_raise,
                                test_game_over_feeds_store)):
            sub = Path(d) / str(i)
            sub.mkdir()
            fn(sub)
    print("✓ scoreboard unit checks passed")


if __name__ == "__main__":
    main()
