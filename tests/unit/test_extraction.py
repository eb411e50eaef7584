from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from sqlbulk.batching.extraction import extract_row, resolve_columns, validate_row
from sqlbulk.domain.models import EventRecord
from sqlbulk.domain.values import is_blank, to_sql_value
from sqlbulk.errors import InconsistentSchemaError, RecordTypeError

NOW_TOLERANCE = timedelta(seconds=5)


class Priority(Enum):
    LOW = "low"
    HIGH = "high"


class Owner(BaseModel):
    id: int = 0


class Ticket(BaseModel):
    id: int = 0
    seq: int = Field(0, json_schema_extra={"auto_increment": True})
    title: str = ""
    status: str = Field("", json_schema_extra={"default": "open"})
    note: str = Field("", json_schema_extra={"has_default": True})
    priority: Priority = Priority.LOW
    owner: Optional[Owner] = None
    scratch: str = Field("", json_schema_extra={"ignore": True})
    created_at: Optional[datetime] = None


@dataclass
class Blob:
    id: int = 0
    body: object = None


@dataclass
class Renamed:
    id: int = 0
    label: str = field(default="", metadata={"column": "display_label"})


def test_blank_primary_key_is_skipped_and_set_one_included(fixed_now):
    assert "id" not in extract_row(Ticket(title="a"), now=fixed_now)
    assert extract_row(Ticket(id=9, title="a"), now=fixed_now)["id"] == 9


def test_relationship_ignored_and_auto_increment_fields_are_skipped(fixed_now):
    row = extract_row(
        Ticket(seq=4, title="a", owner=Owner(id=1), scratch="tmp"),
        now=fixed_now,
    )
    assert "seq" not in row
    assert "owner" not in row
    assert "scratch" not in row


def test_exclude_by_attribute_or_column_name(fixed_now):
    assert "title" not in extract_row(Ticket(title="a"), {"title"}, now=fixed_now)
    row = extract_row(Renamed(label="x"), {"display_label"})
    assert row == {}
    row = extract_row(Renamed(label="x"), {"label"})
    assert row == {}


def test_keys_are_column_names():
    assert extract_row(Renamed(label="x")) == {"display_label": "x"}


def test_blank_timestamp_gets_now(fixed_now):
    assert extract_row(Ticket(title="a"), now=fixed_now)["created_at"] == fixed_now


def test_blank_timestamp_defaults_to_wall_clock():
    before = datetime.now(timezone.utc)
    stamped = extract_row(Ticket(title="a"))["created_at"]
    assert before - NOW_TOLERANCE <= stamped <= datetime.now(timezone.utc) + NOW_TOLERANCE
    assert stamped.tzinfo is not None


def test_set_timestamp_is_kept(fixed_now):
    explicit = datetime(2020, 1, 1, tzinfo=timezone.utc)
    row = extract_row(Ticket(title="a", created_at=explicit), now=fixed_now)
    assert row["created_at"] == explicit


def test_blank_field_with_default_literal_gets_literal(fixed_now):
    row = extract_row(Ticket(title="a"), now=fixed_now)
    assert row["status"] == "open"


def test_blank_field_with_default_but_no_literal_keeps_blank(fixed_now):
    row = extract_row(Ticket(title="a"), now=fixed_now)
    assert row["note"] == ""


def test_non_blank_field_with_default_is_verbatim(fixed_now):
    row = extract_row(Ticket(title="a", status="closed"), now=fixed_now)
    assert row["status"] == "closed"


def test_enum_values_are_bound_by_value(fixed_now):
    row = extract_row(Ticket(title="a", priority=Priority.HIGH), now=fixed_now)
    assert row["priority"] == "high"


def test_adapter_converts_payload(fixed_now):
    event = EventRecord(category="alpha", payload={"k": 1}, amount=Decimal("2.50"))
    row = extract_row(event, now=fixed_now)
    assert json.loads(row["payload"]) == {"k": 1}
    assert row["source"] == "generator"
    assert row["created_at"] == row["updated_at"] == fixed_now
    assert "id" not in row


def test_extraction_preserves_declaration_order(fixed_now):
    row = extract_row(Ticket(title="a"), now=fixed_now)
    assert list(row) == ["title", "status", "note", "priority", "created_at"]


def test_unsupported_value_raises_record_type_error():
    with pytest.raises(RecordTypeError, match="field 'body'"):
        extract_row(Blob(body=["not", "bindable"]))


def test_non_record_raises_record_type_error():
    with pytest.raises(RecordTypeError):
        extract_row({"title": "a"})
    with pytest.raises(RecordTypeError):
        extract_row(None)


def test_extraction_does_not_mutate_record(fixed_now):
    ticket = Ticket(title="a")
    extract_row(ticket, now=fixed_now)
    assert ticket.created_at is None
    assert ticket.status == ""


def test_same_blank_pattern_yields_same_column_set(fixed_now):
    first = extract_row(Ticket(title="a", status="x"), now=fixed_now)
    second = extract_row(Ticket(title="b"), now=fixed_now)
    assert set(first) == set(second)
    assert resolve_columns(first) == resolve_columns(second)


def test_resolve_columns_sorts_ascending():
    assert resolve_columns({"b": 1, "c": 2, "a": 3}) == ["a", "b", "c"]


def test_validate_row_accepts_matching_row():
    validate_row({"b": 1, "a": 2}, ["a", "b"], index=3)


def test_validate_row_rejects_size_mismatch():
    with pytest.raises(InconsistentSchemaError, match="attribute sizes are inconsistent") as excinfo:
        validate_row({"a": 1}, ["a", "b"], index=2)
    assert excinfo.value.index == 2
    assert excinfo.value.expected == ("a", "b")
    assert excinfo.value.actual == ("a",)


def test_validate_row_rejects_different_names_with_same_size():
    with pytest.raises(InconsistentSchemaError, match="missing columns"):
        validate_row({"a": 1, "z": 2}, ["a", "b"], index=1)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        (False, True),
        (True, False),
        (0, True),
        (0.0, True),
        (Decimal("0"), True),
        (7, False),
        ("", True),
        ("x", False),
        (b"", True),
        ([], True),
        (datetime(2024, 1, 1), False),
    ],
)
def test_is_blank(value, expected):
    assert is_blank(value) is expected


def test_to_sql_value_normalizes_bytearray():
    assert to_sql_value(bytearray(b"ab")) == b"ab"


@dataclass
class Document:
    id: int = 0
    payload: dict = field(
        default_factory=dict, metadata={"has_default": True, "adapter": json.dumps}
    )
    priority: Priority = field(default=None, metadata={"default": Priority.HIGH})


def test_blank_adapted_field_with_default_is_adapted():
    assert extract_row(Document())["payload"] == "{}"


def test_adapter_failure_raises_record_type_error():
    with pytest.raises(RecordTypeError, match="field 'payload': adapter failed") as excinfo:
        extract_row(Document(payload={"bad": {1, 2}}))
    assert isinstance(excinfo.value.__cause__, TypeError)


def test_default_literal_is_normalized_like_other_values():
    assert extract_row(Document())["priority"] == "high"
