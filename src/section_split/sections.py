"""
Section list editing and ingestion.

Every section entering the pipeline passes through this module as a typed
`Section`, whether typed by a user, read from a JSON file or returned by the
suggestion service. Range bounds are not checked here; see `validation`.
"""

from __future__ import annotations

import re
import secrets
import string
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from .contracts import Section

_ID_ALPHABET = string.ascii_lowercase + string.digits
_SECTION_ARG_RE = re.compile(r"^(?P<name>.+):(?P<start>-?\d+)(?:-(?P<end>-?\d+))?$")


class SectionRecordError(ValueError):
    pass


def new_section_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))


def default_section_name(index: int) -> str:
    """`index` is 0-based; names are 1-based."""
    return f"Section {index + 1}"


def default_sections(page_count: int) -> list[Section]:
    """
    Initial list for a freshly loaded document: one section spanning it all.
    """

    if page_count < 1:
        raise ValueError("page_count must be >= 1")
    return [Section(section_id=new_section_id(), name=default_section_name(0), start_page=1, end_page=page_count)]


def suggest_next_start(sections: list[Section], *, page_count: int) -> int:
    if not sections:
        return 1
    return min(sections[-1].end_page + 1, page_count)


def append_section(sections: list[Section], *, page_count: int) -> list[Section]:
    start = suggest_next_start(sections, page_count=page_count)
    added = Section(
        section_id=new_section_id(),
        name=default_section_name(len(sections)),
        start_page=start,
        end_page=page_count,
    )
    return [*sections, added]


def update_section(sections: list[Section], section_id: str, **changes: Any) -> list[Section]:
    """
    Return a new list with `changes` applied to the section `section_id`.
    Unknown ids leave the list unchanged.
    """

    if "section_id" in changes:
        raise ValueError("section_id cannot be changed")
    return [replace(s, **changes) if s.section_id == section_id else s for s in sections]


def remove_section(sections: list[Section], section_id: str) -> list[Section]:
    return [s for s in sections if s.section_id != section_id]


def _coerce_page(record: Mapping[str, Any], keys: tuple[str, ...], *, index: int) -> int:
    for key in keys:
        if key in record:
            value = record[key]
            break
    else:
        raise SectionRecordError(f"section record {index} is missing {keys[0]!r}")

    if isinstance(value, bool):
        raise SectionRecordError(f"section record {index}: {keys[0]!r} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise SectionRecordError(
                f"section record {index}: {keys[0]!r} must be an integer, got {value!r}"
            ) from e
    raise SectionRecordError(f"section record {index}: {keys[0]!r} must be an integer, got {value!r}")


def sections_from_records(records: Iterable[Any]) -> list[Section]:
    """
    Convert loosely structured records into typed sections.

    Accepts camelCase (`startPage`) as emitted by the suggestion service and
    snake_case (`start_page`). Records without an id get a fresh one; blank
    names fall back to "Section N".
    """

    out: list[Section] = []
    seen_ids: set[str] = set()
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise SectionRecordError(f"section record {index} must be an object, got {type(record).__name__}")

        start = _coerce_page(record, ("startPage", "start_page", "start"), index=index)
        end = _coerce_page(record, ("endPage", "end_page", "end"), index=index)

        raw_name = record.get("name")
        name = str(raw_name).strip() if raw_name is not None else ""
        if not name:
            name = default_section_name(index)

        raw_id = record.get("id", record.get("section_id"))
        section_id = str(raw_id) if raw_id not in (None, "") else new_section_id()
        if section_id in seen_ids:
            section_id = new_section_id()
        seen_ids.add(section_id)

        out.append(Section(section_id=section_id, name=name, start_page=start, end_page=end))
    return out


def sections_to_records(sections: Iterable[Section]) -> list[dict[str, Any]]:
    return [
        {"id": s.section_id, "name": s.name, "startPage": s.start_page, "endPage": s.end_page}
        for s in sections
    ]


def parse_section_arg(arg: str) -> Section:
    """
    Parse "NAME:START-END" (or "NAME:PAGE") into a section. The name may itself
    contain colons; the last one separates the range.
    """

    m = _SECTION_ARG_RE.match(arg.strip())
    if m is None:
        raise SectionRecordError(f"Expected NAME:START-END, got {arg!r}")
    name = m.group("name").strip()
    if not name:
        raise SectionRecordError(f"Section name is empty in {arg!r}")
    start = int(m.group("start"))
    end = int(m.group("end")) if m.group("end") is not None else start
    return Section(section_id=new_section_id(), name=name, start_page=start, end_page=end)
