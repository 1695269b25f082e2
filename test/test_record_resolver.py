"""Tests for single plant lookups."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PlantProxy.core.errors import InvalidInputError, InvalidRecordError, NotFoundError
from PlantProxy.services.plants import PlantRecordResolver
from PlantProxy.sources.airtable.mapper import FieldMap, RecordMapper

MAPPER = RecordMapper(
    FieldMap(
        {
            "fldEn": "name_en",
            "fldImage": "feature_image",
            "fldSound": "soundbite_halq",
            "fldUses": "uses",
        }
    )
)

RECORD = {
    "id": "recCedar",
    "fields": {
        "fldEn": "Western Red Cedar",
        "fldImage": [
            {"url": "https://img/1.jpg", "filename": "1.jpg", "type": "image/jpeg", "size": 10},
            {"url": "https://img/2.jpg"},
        ],
        "fldUses": ["Food", "Medicine"],
    },
}


class _StubSource:
    def __init__(self, records) -> None:
        self.records = records
        self.queries = []

    def list_records(self, query):
        self.queries.append(query)
        return {"records": self.records}


class TestRecordResolver(unittest.TestCase):
    def test_empty_id_rejected_without_fetch(self) -> None:
        source = _StubSource([RECORD])
        resolver = PlantRecordResolver(source=source, mapper=MAPPER)
        for plant_id in ("", "   ", None):
            with self.subTest(plant_id=plant_id):
                with self.assertRaises(InvalidInputError):
                    resolver.get_by_id(plant_id)
        self.assertEqual(source.queries, [])

    def test_unknown_attachment_mode_rejected_without_fetch(self) -> None:
        source = _StubSource([RECORD])
        with self.assertRaises(InvalidInputError):
            PlantRecordResolver(source=source, mapper=MAPPER).get_by_id("recCedar", "thumbnail")
        self.assertEqual(source.queries, [])

    def test_lookup_query_targets_one_record(self) -> None:
        source = _StubSource([RECORD])
        PlantRecordResolver(source=source, mapper=MAPPER, fields=["fldEn"]).get_by_id(" recCedar ")
        query = source.queries[0]
        self.assertEqual(query.page_size, 1)
        self.assertEqual(query.formula, "RECORD_ID()='recCedar'")
        self.assertEqual(tuple(query.fields), ("fldEn",))

    def test_no_records_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            PlantRecordResolver(source=_StubSource([]), mapper=MAPPER).get_by_id("recMissing")

    def test_record_without_fields_is_invalid(self) -> None:
        with self.assertRaises(InvalidRecordError):
            PlantRecordResolver(source=_StubSource([{"id": "recX"}]), mapper=MAPPER).get_by_id("recX")

    def test_url_mode_keeps_first_attachment_url(self) -> None:
        plant = PlantRecordResolver(source=_StubSource([RECORD]), mapper=MAPPER).get_by_id("recCedar")
        self.assertEqual(plant["id"], "recCedar")
        self.assertEqual(plant["name_en"], "Western Red Cedar")
        self.assertEqual(plant["feature_image"], "https://img/1.jpg")
        self.assertIsNone(plant["soundbite_halq"])
        self.assertEqual(plant["uses"], ["Food", "Medicine"])

    def test_object_mode_keeps_attachment_metadata(self) -> None:
        plant = PlantRecordResolver(source=_StubSource([RECORD]), mapper=MAPPER).get_by_id(
            "recCedar", attachment_mode="object"
        )
        self.assertEqual(
            plant["feature_image"],
            [
                {"url": "https://img/1.jpg", "filename": "1.jpg", "type": "image/jpeg", "size": 10},
                {"url": "https://img/2.jpg", "filename": None, "type": None, "size": None},
            ],
        )
        self.assertEqual(plant["soundbite_halq"], [])


if __name__ == "__main__":
    unittest.main()
