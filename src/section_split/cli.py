from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path

from .artifacts import write_archive, write_export_report_json
from .contracts import ArchiveCompression, ColorMode, Section, SplitConfig, SplitErrorCode, SuggestConfig
from .document import DocumentLoadError, SourceDocument, default_folder_name, load_document_relpath, render_page_png
from .logging_utils import setup_logging
from .module import run_export
from .sections import (
    SectionRecordError,
    default_sections,
    parse_section_arg,
    sections_from_records,
    sections_to_records,
)
from .suggest import GeminiSectionSuggester, SuggestionError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PIPELINE_ERROR = 2
EXIT_LOAD_ERROR = 3
EXIT_USAGE_ERROR = 4


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--data-root", required=True, type=Path, help="Resolved DATA_ROOT path.")
    p.add_argument("--pdf-relpath", required=True, help="PDF path relative to --data-root.")


def _add_suggest_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--model", default="gemini-2.5-flash", help="Gemini model id.")
    p.add_argument(
        "--api-key",
        default=None,
        help="Gemini API key. Defaults to the GEMINI_API_KEY environment variable.",
    )
    p.add_argument("--max-sample-pages", type=int, default=10, help="Pages sampled for suggestions.")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pdf-section-split",
        description="Split a PDF into named page-range sections and package them as one ZIP archive.",
    )
    p.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    sub = p.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Print page count, size and default folder name.")
    _add_source_args(info)

    export = sub.add_parser("export", help="Validate sections, split the PDF and write a ZIP archive.")
    _add_source_args(export)
    export.add_argument("--out-dir", required=True, type=Path, help="Directory for <folder-name>.zip.")
    export.add_argument(
        "--folder-name",
        default=None,
        help="Archive folder/name prefix. Default: the PDF file name without extension.",
    )
    export.add_argument(
        "--section",
        action="append",
        default=[],
        metavar="NAME:START-END",
        help="Section definition (repeatable, 1-indexed inclusive pages).",
    )
    export.add_argument(
        "--sections-json",
        type=Path,
        default=None,
        help='JSON file with [{"name", "startPage", "endPage"}, ...].',
    )
    export.add_argument("--suggest", action="store_true", help="Ask Gemini for sections instead (not combinable with --section or --sections-json).")
    _add_suggest_args(export)
    export.add_argument(
        "--compression",
        choices=[c.value for c in ArchiveCompression],
        default=ArchiveCompression.DEFLATED.value,
        help="ZIP entry compression.",
    )
    export.add_argument("--report", type=Path, default=None, help="Optional JSON report file.")
    export.add_argument(
        "--compute-source-sha256",
        action="store_true",
        help="Include SHA-256 of the source PDF in the report for auditing.",
    )

    suggest = sub.add_parser("suggest", help="Print suggested sections as JSON.")
    _add_source_args(suggest)
    _add_suggest_args(suggest)

    preview = sub.add_parser("preview", help="Render one page to PNG.")
    _add_source_args(preview)
    preview.add_argument("--page", required=True, type=int, help="1-indexed page number.")
    preview.add_argument("--out", required=True, type=Path, help="Output PNG file.")
    preview.add_argument("--dpi", type=int, default=150, help="Render DPI.")
    preview.add_argument(
        "--color-mode",
        choices=[m.value for m in ColorMode],
        default=ColorMode.RGB.value,
        help="Color mode for raster output.",
    )
    return p


def _suggester(args: argparse.Namespace) -> GeminiSectionSuggester:
    api_key = args.api_key or os.environ.get("GEMINI_API_KEY") or ""
    return GeminiSectionSuggester(
        SuggestConfig(api_key=api_key, model=args.model, max_sample_pages=args.max_sample_pages)
    )


def _collect_sections(args: argparse.Namespace, document: SourceDocument) -> list[Section]:
    if args.suggest:
        if args.section or args.sections_json is not None:
            raise SectionRecordError("--suggest cannot be combined with --section or --sections-json")
        return _suggester(args).suggest(document)
    sections: list[Section] = [parse_section_arg(s) for s in args.section]
    if args.sections_json is not None:
        records = json.loads(args.sections_json.read_text(encoding="utf-8"))
        if not isinstance(records, list):
            raise SectionRecordError("--sections-json must contain a JSON array")
        sections.extend(sections_from_records(records))
    if not args.section and args.sections_json is None:
        sections = default_sections(document.page_count)
    return sections


def _cmd_info(args: argparse.Namespace, document: SourceDocument) -> int:
    print(
        json.dumps(
            {
                "name": document.name,
                "page_count": document.page_count,
                "size_bytes": document.size_bytes,
                "default_folder_name": default_folder_name(document.name),
            },
            sort_keys=True,
        )
    )
    return EXIT_OK


def _cmd_export(args: argparse.Namespace, document: SourceDocument, config: SplitConfig) -> int:
    try:
        sections = _collect_sections(args, document)
    except (SectionRecordError, SuggestionError, ValueError, OSError) as e:
        logger.error("%s", e)
        return EXIT_USAGE_ERROR

    folder_name = args.folder_name or default_folder_name(document.name)
    result = run_export(document=document, sections=sections, folder_name=folder_name, config=config)

    if args.report is not None:
        write_export_report_json(result=result, out_report=args.report)

    if not result.ok or result.archive is None:
        for err in result.errors:
            logger.error("%s: %s", err.code, err.message)
        return EXIT_PIPELINE_ERROR

    out_file = write_archive(archive=result.archive, out_file=args.out_dir / result.archive.file_name)
    print(f"archive={out_file} entries={len(result.archive.entries)}")
    return EXIT_OK


def _cmd_suggest(args: argparse.Namespace, document: SourceDocument) -> int:
    try:
        sections = _suggester(args).suggest(document)
    except (SuggestionError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_PIPELINE_ERROR
    print(json.dumps(sections_to_records(sections), ensure_ascii=False, indent=2))
    return EXIT_OK


def _cmd_preview(args: argparse.Namespace, document: SourceDocument) -> int:
    try:
        png = render_page_png(
            document=document, page_num=args.page, dpi=args.dpi, color_mode=ColorMode(args.color_mode)
        )
    except ValueError as e:
        logger.error("%s", e)
        return EXIT_USAGE_ERROR
    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_bytes(png)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    config = SplitConfig(
        data_root=args.data_root,
        compression=ArchiveCompression(getattr(args, "compression", ArchiveCompression.DEFLATED.value)),
        compute_source_sha256=getattr(args, "compute_source_sha256", False),
    )

    try:
        document = load_document_relpath(config=config, pdf_relpath=args.pdf_relpath)
    except DocumentLoadError as e:
        logger.error("%s: %s", SplitErrorCode.DOCUMENT_LOAD_FAILED.value, e)
        return EXIT_LOAD_ERROR

    with document:
        if args.command == "info":
            return _cmd_info(args, document)
        if args.command == "export":
            return _cmd_export(args, document, config)
        if args.command == "suggest":
            return _cmd_suggest(args, document)
        return _cmd_preview(args, document)


if __name__ == "__main__":
    raise SystemExit(main())
