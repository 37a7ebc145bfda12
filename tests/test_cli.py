import json
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from roomdetector.cli import app

WALLS = {
    "walls": [
        {"id": "bottom", "points": [[0, 0], [20, 0]]},
        {"id": "right", "points": [[20, 0], [20, 10]]},
        {"id": "top", "points": [[20, 10], [0, 10]]},
        {"id": "left", "points": [[0, 10], [0, 0]]},
        {"id": "divider", "path": "M 10,0 L 10,10", "story": "ground"},
    ]
}


class CliTests(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.walls = self.dir / "walls.json"
        self.walls.write_text(json.dumps(WALLS), encoding="utf-8")

    def tearDown(self):
        self.tmp.cleanup()

    def test_detect(self):
        result = self.runner.invoke(app, ["detect", "--walls", str(self.walls)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Loaded 5 walls", result.output)
        self.assertIn("2 rooms, total area 200.00", result.output)

    def test_detect_writes_json(self):
        out = self.dir / "rooms.json"
        result = self.runner.invoke(app, ["detect", "-w", str(self.walls), "-o", str(out)])
        self.assertEqual(result.exit_code, 0, result.output)

        data = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(len(data["rooms"]), 2)
        self.assertEqual(sum(r["area"] for r in data["rooms"]), 200.0)
        self.assertIn("diagnostics", data)

    def test_detect_with_config(self):
        config = self.dir / "config.json"
        config.write_text(json.dumps({"max_room_area": 50}), encoding="utf-8")
        result = self.runner.invoke(app, ["detect", "-w", str(self.walls), "-c", str(config)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No closed rooms found", result.output)

    def test_detect_by_story(self):
        out = self.dir / "rooms.json"
        result = self.runner.invoke(app, ["detect", "-w", str(self.walls), "--by-story", "-o", str(out)])
        self.assertEqual(result.exit_code, 0, result.output)
        # The divider sits on its own story, leaving one undivided room
        data = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(len(data["rooms"]), 1)
        self.assertAlmostEqual(data["rooms"][0]["area"], 200.0)
        self.assertEqual(data["rooms"][0]["id"], "room-node-0-node-1-node-2-node-3")
        stories = {d["story_id"] for d in data["diagnostics"]}
        self.assertEqual(stories, {None})

    def test_missing_file(self):
        result = self.runner.invoke(app, ["detect", "-w", str(self.dir / "missing.json")])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("File not found", result.output)

    def test_invalid_json(self):
        broken = self.dir / "broken.json"
        broken.write_text("{walls", encoding="utf-8")
        result = self.runner.invoke(app, ["detect", "-w", str(broken)])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Invalid JSON", result.output)

    def test_invalid_walls(self):
        bad = self.dir / "bad.json"
        bad.write_text(json.dumps({"walls": [{"id": "a"}]}), encoding="utf-8")
        result = self.runner.invoke(app, ["detect", "-w", str(bad)])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Invalid wall data", result.output)

    def test_inspect(self):
        result = self.runner.invoke(app, ["inspect", "-w", str(self.walls), "-v"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Components", result.output)
        self.assertIn("node-5", result.output)


if __name__ == "__main__":
    unittest.main()
