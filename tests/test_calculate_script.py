import importlib.util
import json
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "calculate_difficulty.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("calculate_difficulty", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write_beatmap(directory: Path) -> Path:
    objects = [{"type": "circle", "x": 60 * i % 512, "y": 40 * i % 384, "time": 200 * i} for i in range(10)]
    objects[4] = {"type": "slider", "x": 240, "y": 160, "time": 800, "path": [[400, 160]], "span_duration": 150}
    path = directory / "stream.json"
    path.write_text(json.dumps({"circle_size": 4, "approach_rate": 9, "hit_objects": objects}), encoding="utf8")
    return path


def test_script_prints_ratings_and_dumps_frames(tmp_path, capsys):
    script = _load_script()
    beatmap = _write_beatmap(tmp_path)
    dump = tmp_path / "out" / "frames.json"

    assert script.main([str(beatmap), "--rate", "1.5", "--dump", str(dump)]) == 0

    out = capsys.readouterr().out
    assert "stream: 10 objects at 1.5x" in out
    assert "aim" in out and "speed" in out

    payload = json.loads(dump.read_text(encoding="utf8"))
    assert payload["rate"] == 1.5
    assert len(payload["frames"]) == 9
    assert set(payload["frames"][0]["strains"]) == {"aim", "speed"}


def test_script_rejects_non_positive_rate(tmp_path, capsys):
    script = _load_script()
    assert script.main([str(_write_beatmap(tmp_path)), "--rate", "0"]) == 2
    assert "--rate must be positive" in capsys.readouterr().err
