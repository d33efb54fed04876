from __future__ import annotations

import io
import unittest
import zipfile

from section_split.contracts import ArchiveCompression, SplitErrorCode
from section_split.packaging import (
    PackagingError,
    archive_file_name,
    entry_file_name,
    package_artifacts,
    resolve_entry_names,
    sanitize_file_name,
)


class TestNaming(unittest.TestCase):
    def test_sanitize_replaces_every_unsafe_char(self) -> None:
        self.assertEqual(sanitize_file_name('a/b\\c?d%e*f:g|h"i<j>k'), "a-b-c-d-e-f-g-h-i-j-k")
        self.assertEqual(sanitize_file_name("plain name (v2).txt"), "plain name (v2).txt")

    def test_sanitize_replaces_control_chars(self) -> None:
        self.assertEqual(sanitize_file_name("a\x00b\tc\nd\x1fe"), "a-b-c-d-e")

    def test_entry_name_joins_folder_and_section(self) -> None:
        self.assertEqual(entry_file_name(folder_name="Report", section_name="Intro"), "Report-Intro.pdf")
        self.assertEqual(entry_file_name(folder_name="Q1/Q2", section_name="A:B"), "Q1-Q2-A-B.pdf")

    def test_duplicate_names_are_disambiguated_in_order(self) -> None:
        names = resolve_entry_names(section_names=["Intro", "Body", "Intro", "Intro"], folder_name="Folder")
        self.assertEqual(
            names, ["Folder-Intro.pdf", "Folder-Body.pdf", "Folder-Intro-2.pdf", "Folder-Intro-3.pdf"]
        )

    def test_names_colliding_after_sanitization(self) -> None:
        names = resolve_entry_names(section_names=["A/B", "A:B", "A?B"], folder_name="F")
        self.assertEqual(names, ["F-A-B.pdf", "F-A-B-2.pdf", "F-A-B-3.pdf"])

    def test_suffix_never_reuses_an_explicit_name(self) -> None:
        names = resolve_entry_names(section_names=["Intro", "Intro-2", "Intro"], folder_name="F")
        self.assertEqual(names, ["F-Intro.pdf", "F-Intro-2.pdf", "F-Intro-3.pdf"])
        self.assertEqual(len(set(names)), 3)

    def test_archive_file_name(self) -> None:
        self.assertEqual(archive_file_name("My: Report"), "My- Report.zip")


class TestPackageArtifacts(unittest.TestCase):
    def test_entries_in_order_with_payloads(self) -> None:
        archive = package_artifacts(
            artifacts=[("Intro", b"%PDF-1"), ("Body", b"%PDF-2"), ("Intro", b"%PDF-3")],
            folder_name="Folder",
        )
        self.assertEqual(archive.file_name, "Folder.zip")
        self.assertEqual(archive.entry_names, ["Folder-Intro.pdf", "Folder-Body.pdf", "Folder-Intro-2.pdf"])

        with zipfile.ZipFile(io.BytesIO(archive.data)) as zf:
            self.assertEqual(zf.namelist(), archive.entry_names)
            self.assertEqual(zf.read("Folder-Intro.pdf"), b"%PDF-1")
            self.assertEqual(zf.read("Folder-Body.pdf"), b"%PDF-2")
            self.assertEqual(zf.read("Folder-Intro-2.pdf"), b"%PDF-3")
            self.assertIsNone(zf.testzip())

    def test_identical_inputs_give_identical_archives(self) -> None:
        arts = [("A", b"x" * 100), ("B", b"y" * 100)]
        a1 = package_artifacts(artifacts=arts, folder_name="F")
        a2 = package_artifacts(artifacts=arts, folder_name="F")
        self.assertEqual(a1.data, a2.data)

    def test_nul_in_section_names_keeps_entries_distinct(self) -> None:
        archive = package_artifacts(artifacts=[("A\x00x", b"1"), ("A\x00y", b"2")], folder_name="F")
        self.assertEqual(archive.entry_names, ["F-A-x.pdf", "F-A-y.pdf"])
        with zipfile.ZipFile(io.BytesIO(archive.data)) as zf:
            self.assertEqual(zf.namelist(), archive.entry_names)
            self.assertEqual(zf.read("F-A-y.pdf"), b"2")

    def test_stored_compression(self) -> None:
        archive = package_artifacts(
            artifacts=[("A", b"z" * 1000)], folder_name="F", compression=ArchiveCompression.STORED
        )
        with zipfile.ZipFile(io.BytesIO(archive.data)) as zf:
            self.assertEqual(zf.getinfo("F-A.pdf").compress_type, zipfile.ZIP_STORED)

    def test_packaging_error_maps_to_structured_error(self) -> None:
        err = PackagingError(OSError("no space")).to_error()
        self.assertEqual(err.code, SplitErrorCode.PACKAGING_FAILED.value)
        self.assertIn("no space", err.detail["error"])


if __name__ == "__main__":
    unittest.main()
