"""Smoke tests for the click CLI with a stubbed HTTP session."""

import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PlantProxy.cli.ui import cli

# Field ids match config/default.yml, which is merged underneath when present.
CONFIG_YAML = """
log:
  level: WARNING
  to_file: false
airtable:
  base_id: appTest
  table: Plants
  token_env: PLANT_PROXY_SMOKE_TOKEN
  return_fields_by_id: true
  fields: []
  field_map:
    fldNameEnglish000: name_en
    fldNameLatin00000: name_latin
    fldFeatureImage00: feature_image
    fldUses0000000000: uses
archive:
  page_size: 12
  sort: name_asc
  base_url: /plants/
cache:
  backend: memory
  ttl: 60
"""

CEDAR = {
    "id": "recCedar",
    "fields": {
        "fldNameEnglish000": "Western Red Cedar",
        "fldNameLatin00000": "Thuja plicata",
        "fldFeatureImage00": [{"url": "https://img.example/cedar.jpg", "type": "image/jpeg"}],
        "fldUses0000000000": ["Food", "Medicine"],
    },
}


def _session(status: int, body) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = body
    session = MagicMock()
    session.get.return_value = resp
    return session


class TestCliSmoke(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "config.yml"
        self.config_path.write_text(CONFIG_YAML, encoding="utf-8")
        self.runner = CliRunner()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _invoke(self, session: MagicMock, args: list[str], token: str = "pat_smoke"):
        env = {"PLANT_PROXY_SMOKE_TOKEN": token}
        with patch.dict(os.environ, env, clear=False), patch(
            "PlantProxy.sources.airtable.client.requests.Session", return_value=session
        ):
            return self.runner.invoke(cli, ["--config", str(self.config_path), *args])

    def test_archive_renders_cards_and_next_link(self) -> None:
        session = _session(200, {"records": [CEDAR], "offset": "c1"})
        result = self._invoke(session, ["archive", "--search", "Cedar", "--page-size", "500"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('data-plant-id="recCedar"', result.output)
        self.assertIn("trail=c1", result.output)
        self.assertNotIn("plants-page-prev", result.output)

        params = session.get.call_args.kwargs["params"]
        self.assertIn(("pageSize", "100"), params)
        self.assertIn(("returnFieldsByFieldId", "true"), params)
        session.close.assert_called_once_with()

    def test_archive_trail_sends_last_cursor(self) -> None:
        session = _session(200, {"records": [CEDAR]})
        result = self._invoke(session, ["archive", "--trail", "c1,c2"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(("offset", "c2"), session.get.call_args.kwargs["params"])
        self.assertIn("plants-page-prev", result.output)

    def test_archive_upstream_failure_renders_error_block(self) -> None:
        session = _session(500, {"error": "SERVER_ERROR"})
        result = self._invoke(session, ["archive"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('<div class="plants-error">Error loading plants:', result.output)

    def test_archive_json_failure_aborts(self) -> None:
        session = _session(500, {"error": "SERVER_ERROR"})
        result = self._invoke(session, ["archive", "--format", "json"])
        self.assertNotEqual(result.exit_code, 0)

    def test_archive_json_payload(self) -> None:
        session = _session(200, {"records": [CEDAR], "offset": "c1"})
        result = self._invoke(session, ["archive", "--format", "json"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('"success": true', result.output)
        self.assertIn('"next_cursor": "c1"', result.output)

    def test_plant_prints_normalized_json(self) -> None:
        session = _session(200, {"records": [CEDAR]})
        result = self._invoke(session, ["plant", "recCedar"])

        self.assertEqual(result.exit_code, 0, result.output)
        start = result.output.index("{")
        plant = json.loads(result.output[start : result.output.rindex("}") + 1])
        self.assertEqual(plant["id"], "recCedar")
        self.assertEqual(plant["feature_image"], "https://img.example/cedar.jpg")
        self.assertIn(("filterByFormula", "RECORD_ID()='recCedar'"), session.get.call_args.kwargs["params"])

    def test_field_widgets_share_one_fetch(self) -> None:
        session = _session(200, {"records": [CEDAR]})
        result = self._invoke(session, ["field", "recCedar", "uses", "feature_image", "name_latin"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("<li>Food</li><li>Medicine</li>", result.output)
        self.assertIn('src="https://img.example/cedar.jpg"', result.output)
        self.assertIn("Thuja plicata", result.output)
        self.assertEqual(session.get.call_count, 1)

    def test_field_lookup_failure_renders_default(self) -> None:
        session = _session(200, {"records": []})
        result = self._invoke(session, ["field", "recMissing", "uses", "--default", "n/a"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("n/a", result.output)

    def test_missing_token_aborts(self) -> None:
        session = _session(200, {"records": []})
        result = self._invoke(session, ["archive"], token="")
        self.assertNotEqual(result.exit_code, 0)
        session.get.assert_not_called()


if __name__ == "__main__":
    unittest.main()
