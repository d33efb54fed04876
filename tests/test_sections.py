from __future__ import annotations

import unittest

from section_split.contracts import Section
from section_split.sections import (
    SectionRecordError,
    append_section,
    default_sections,
    new_section_id,
    parse_section_arg,
    remove_section,
    sections_from_records,
    sections_to_records,
    suggest_next_start,
    update_section,
)


class TestSectionType(unittest.TestCase):
    def test_invalid_range_is_representable(self) -> None:
        s = Section(section_id="x", name="Bad", start_page=5, end_page=3)
        self.assertEqual(s.start_page, 5)

    def test_rejects_blank_name_and_non_int_pages(self) -> None:
        with self.assertRaises(ValueError):
            Section(section_id="x", name="  ", start_page=1, end_page=1)
        with self.assertRaises(TypeError):
            Section(section_id="x", name="A", start_page="1", end_page=1)  # type: ignore[arg-type]
        with self.assertRaises(TypeError):
            Section(section_id="x", name="A", start_page=True, end_page=1)  # type: ignore[arg-type]


class TestSectionEditing(unittest.TestCase):
    def test_default_sections_span_document(self) -> None:
        (only,) = default_sections(12)
        self.assertEqual((only.name, only.start_page, only.end_page), ("Section 1", 1, 12))

    def test_append_suggests_next_start_clamped(self) -> None:
        sections = [Section(section_id="a", name="A", start_page=1, end_page=4)]
        sections = append_section(sections, page_count=10)
        self.assertEqual(len(sections), 2)
        self.assertEqual((sections[1].name, sections[1].start_page, sections[1].end_page), ("Section 2", 5, 10))

        full = [Section(section_id="a", name="A", start_page=1, end_page=10)]
        self.assertEqual(suggest_next_start(full, page_count=10), 10)
        self.assertEqual(suggest_next_start([], page_count=10), 1)

    def test_update_and_remove_return_new_lists(self) -> None:
        sections = [
            Section(section_id="a", name="A", start_page=1, end_page=2),
            Section(section_id="b", name="B", start_page=3, end_page=4),
        ]
        updated = update_section(sections, "b", name="Body", end_page=6)
        self.assertEqual(sections[1].name, "B")
        self.assertEqual((updated[1].name, updated[1].end_page), ("Body", 6))
        self.assertEqual(update_section(sections, "missing", name="Z"), sections)

        removed = remove_section(sections, "a")
        self.assertEqual([s.section_id for s in removed], ["b"])
        self.assertEqual(len(sections), 2)

        with self.assertRaises(ValueError):
            update_section(sections, "a", section_id="z")

    def test_new_section_ids_are_opaque_and_distinct(self) -> None:
        ids = {new_section_id() for _ in range(50)}
        self.assertEqual(len(ids), 50)
        self.assertTrue(all(len(i) == 9 for i in ids))


class TestSectionRecords(unittest.TestCase):
    def test_suggestion_shaped_records(self) -> None:
        records = [
            {"name": "Intro", "startPage": 1, "endPage": 2},
            {"name": "Body", "start_page": "3", "end_page": 8.0},
            {"name": "", "startPage": 9, "endPage": 10, "id": "keep-me"},
        ]
        sections = sections_from_records(records)
        self.assertEqual([s.name for s in sections], ["Intro", "Body", "Section 3"])
        self.assertEqual([(s.start_page, s.end_page) for s in sections], [(1, 2), (3, 8), (9, 10)])
        self.assertEqual(sections[2].section_id, "keep-me")
        self.assertEqual(len({s.section_id for s in sections}), 3)

    def test_duplicate_ids_are_replaced(self) -> None:
        records = [
            {"id": "dup", "name": "A", "startPage": 1, "endPage": 1},
            {"id": "dup", "name": "B", "startPage": 2, "endPage": 2},
        ]
        a, b = sections_from_records(records)
        self.assertEqual(a.section_id, "dup")
        self.assertNotEqual(b.section_id, "dup")

    def test_malformed_records(self) -> None:
        bad = [
            ["not", "a", "mapping"],
            {"name": "A", "endPage": 2},
            {"name": "A", "startPage": "one", "endPage": 2},
            {"name": "A", "startPage": 1.5, "endPage": 2},
            {"name": "A", "startPage": True, "endPage": 2},
            {"name": "A", "startPage": "--3", "endPage": 2},
            {"name": "A", "startPage": "\u00b2", "endPage": 2},
            {"name": "A", "startPage": "", "endPage": 2},
        ]
        for record in bad:
            with self.subTest(record=record):
                with self.assertRaises(SectionRecordError):
                    sections_from_records([record])

    def test_records_round_trip_shape(self) -> None:
        s = Section(section_id="i", name="N", start_page=2, end_page=3)
        self.assertEqual(sections_to_records([s]), [{"id": "i", "name": "N", "startPage": 2, "endPage": 3}])


class TestParseSectionArg(unittest.TestCase):
    def test_forms(self) -> None:
        s = parse_section_arg("Intro:1-2")
        self.assertEqual((s.name, s.start_page, s.end_page), ("Intro", 1, 2))

        s = parse_section_arg("Cover:1")
        self.assertEqual((s.start_page, s.end_page), (1, 1))

        s = parse_section_arg("Part 1: Setup:4-7")
        self.assertEqual((s.name, s.start_page, s.end_page), ("Part 1: Setup", 4, 7))

        # Inverted ranges parse; validation rejects them later.
        s = parse_section_arg("Bad:5-3")
        self.assertEqual((s.start_page, s.end_page), (5, 3))

    def test_rejects_garbage(self) -> None:
        for arg in ["Intro", "Intro:", ":1-2", "Intro:a-b"]:
            with self.subTest(arg=arg):
                with self.assertRaises(SectionRecordError):
                    parse_section_arg(arg)


if __name__ == "__main__":
    unittest.main()
