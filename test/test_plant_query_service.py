"""Tests for archive page fetching."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PlantProxy.core.errors import UpstreamHttpError
from PlantProxy.core.query import SortSpec, build_plant_filter
from PlantProxy.services.plants import PlantQueryService
from PlantProxy.sources.airtable.mapper import FieldMap, RecordMapper

MAPPER = RecordMapper(
    FieldMap(
        {
            "fldEn": "name_en",
            "fldLatin": "name_latin",
            "fldHalq": "name_halq",
            "fldImage": "feature_image",
            "fldSound": "soundbite_halq",
        }
    )
)


class _StubSource:
    def __init__(self, payload=None, error: Exception | None = None) -> None:
        self.payload = payload if payload is not None else {"records": []}
        self.error = error
        self.queries = []

    def list_records(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.payload


class TestPageSizeClamping(unittest.TestCase):
    def test_page_size_reaches_source_clamped(self) -> None:
        cases = {0: 1, -5: 1, 12: 12, 101: 100, 1000: 100}
        for requested, expected in cases.items():
            with self.subTest(requested=requested):
                source = _StubSource()
                PlantQueryService(source=source, mapper=MAPPER).fetch_page(
                    build_plant_filter(page_size=requested)
                )
                self.assertEqual(source.queries[0].page_size, expected)


class TestFetchPage(unittest.TestCase):
    def test_cedar_request_end_to_end(self) -> None:
        source = _StubSource()
        service = PlantQueryService(source=source, mapper=MAPPER)
        service.fetch_page(build_plant_filter(search="Cedar", sort="latin_desc", page_size=200))

        query = source.queries[0]
        self.assertEqual(query.page_size, 100)
        self.assertEqual(query.cursor, "")
        self.assertEqual(query.sort, SortSpec("Plant Name (Latin)", "desc"))
        self.assertEqual(
            query.formula,
            "AND(OR(SEARCH('cedar', LOWER({Plant Name (English)})), "
            "SEARCH('cedar', LOWER({Plant Name (Halq'eméylem) and Meaning})), "
            "SEARCH('cedar', LOWER({Plant Name (Latin)}))))",
        )

    def test_no_filters_sends_no_formula_and_default_sort(self) -> None:
        source = _StubSource()
        PlantQueryService(source=source, mapper=MAPPER).fetch_page(build_plant_filter())
        query = source.queries[0]
        self.assertIsNone(query.formula)
        self.assertEqual(query.sort, SortSpec("Plant Name (English)", "asc"))

    def test_unknown_sort_falls_back_to_name_asc(self) -> None:
        source = _StubSource()
        PlantQueryService(source=source, mapper=MAPPER).fetch_page(build_plant_filter(sort="bogus"))
        self.assertEqual(source.queries[0].sort, SortSpec("Plant Name (English)", "asc"))

    def test_cursor_and_fields_are_forwarded(self) -> None:
        source = _StubSource()
        service = PlantQueryService(source=source, mapper=MAPPER, fields=["fldEn", "fldLatin"])
        service.fetch_page(build_plant_filter(cursor="itr123/rec9"))
        self.assertEqual(source.queries[0].cursor, "itr123/rec9")
        self.assertEqual(tuple(source.queries[0].fields), ("fldEn", "fldLatin"))

    def test_maps_cards_and_next_cursor(self) -> None:
        source = _StubSource(
            {
                "records": [
                    {
                        "id": "rec1",
                        "fields": {
                            "fldEn": "Western Red Cedar",
                            "fldLatin": "Thuja plicata",
                            "fldImage": [{"url": "https://img/cedar.jpg"}],
                        },
                    },
                    {"id": "rec2", "fields": {"fldEn": "Salal"}},
                ],
                "offset": "itr2/rec2",
            }
        )
        page = PlantQueryService(source=source, mapper=MAPPER).fetch_page(build_plant_filter())

        self.assertEqual(page.count, 2)
        self.assertTrue(page.has_more)
        self.assertEqual(page.next_cursor, "itr2/rec2")
        self.assertEqual([card.id for card in page.plants], ["rec1", "rec2"])
        self.assertEqual(page.plants[0].name_latin, "Thuja plicata")
        self.assertEqual(page.plants[0].feature_image, "https://img/cedar.jpg")
        self.assertIsNone(page.plants[1].feature_image)

    def test_empty_offset_means_last_page(self) -> None:
        for payload in ({"records": []}, {"records": [], "offset": ""}, {"records": [], "offset": None}):
            with self.subTest(payload=payload):
                page = PlantQueryService(source=_StubSource(payload), mapper=MAPPER).fetch_page(
                    build_plant_filter()
                )
                self.assertFalse(page.has_more)
                self.assertIsNone(page.next_cursor)
                self.assertEqual(page.count, 0)

    def test_malformed_records_are_skipped(self) -> None:
        source = _StubSource(
            {
                "records": [
                    {"id": "recBad"},
                    "not-a-record",
                    {"fields": {"fldEn": "No Id"}},
                    {"id": "", "fields": {"fldEn": "Empty Id"}},
                    {"id": "recOk", "fields": {"fldEn": "Fern"}},
                ]
            }
        )
        with self.assertLogs("PlantProxy", level="WARNING"):
            page = PlantQueryService(source=source, mapper=MAPPER).fetch_page(build_plant_filter())
        self.assertEqual([card.id for card in page.plants], ["recOk"])
        self.assertEqual(page.count, 1)

    def test_upstream_error_propagates(self) -> None:
        error = UpstreamHttpError("Airtable request failed", status=422, body={"error": "INVALID_FILTER"})
        service = PlantQueryService(source=_StubSource(error=error), mapper=MAPPER)
        with self.assertRaises(UpstreamHttpError) as ctx:
            service.fetch_page(build_plant_filter(search="x"))
        self.assertEqual(ctx.exception.status, 422)


if __name__ == "__main__":
    unittest.main()
