from __future__ import annotations

import unittest

from section_split.contracts import Section, SplitErrorCode
from section_split.validation import validate_sections


def _s(name: str, start: int, end: int) -> Section:
    return Section(section_id=f"id-{name}", name=name, start_page=start, end_page=end)


class TestValidateSections(unittest.TestCase):
    def test_valid_ranges_pass(self) -> None:
        sections = [_s("Intro", 1, 2), _s("Body", 3, 8), _s("Appendix", 9, 10)]
        self.assertIsNone(validate_sections(sections=sections, total_pages=10))

    def test_overlapping_and_out_of_order_ranges_are_allowed(self) -> None:
        sections = [_s("B", 5, 10), _s("A", 1, 6), _s("Again", 1, 6)]
        self.assertIsNone(validate_sections(sections=sections, total_pages=10))

    def test_empty_list(self) -> None:
        err = validate_sections(sections=[], total_pages=3)
        self.assertIsNotNone(err)
        self.assertEqual(err.code, SplitErrorCode.EMPTY_SECTION_LIST.value)

    def test_single_page_document_boundaries(self) -> None:
        self.assertIsNone(validate_sections(sections=[_s("Only", 1, 1)], total_pages=1))

        for start, end in [(0, 1), (2, 1), (1, 2), (-1, 1)]:
            with self.subTest(start=start, end=end):
                err = validate_sections(sections=[_s("Bad", start, end)], total_pages=1)
                self.assertIsNotNone(err)
                self.assertEqual(err.code, SplitErrorCode.INVALID_RANGE.value)

    def test_reports_first_offender_only(self) -> None:
        sections = [_s("Ok", 1, 2), _s("Inverted", 5, 3), _s("TooFar", 9, 11)]
        err = validate_sections(sections=sections, total_pages=10)
        self.assertIsNotNone(err)
        self.assertEqual(err.code, "SPLIT_INVALID_RANGE")
        self.assertEqual(
            err.detail,
            {
                "section_id": "id-Inverted",
                "section_name": "Inverted",
                "start_page": 5,
                "end_page": 3,
                "total_pages": 10,
            },
        )
        self.assertIn("Inverted", err.message)

    def test_end_past_last_page(self) -> None:
        err = validate_sections(sections=[_s("Tail", 9, 11)], total_pages=10)
        self.assertEqual(err.detail["section_name"], "Tail")

    def test_input_is_not_mutated_and_result_is_stable(self) -> None:
        sections = [_s("Ok", 1, 2), _s("Bad", 0, 2)]
        before = list(sections)
        e1 = validate_sections(sections=sections, total_pages=4)
        e2 = validate_sections(sections=sections, total_pages=4)
        self.assertEqual(e1, e2)
        self.assertEqual(sections, before)

    def test_total_pages_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            validate_sections(sections=[_s("A", 1, 1)], total_pages=0)


if __name__ == "__main__":
    unittest.main()
