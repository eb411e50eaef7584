"""
Sample domain model for sqlbulk.

``EventRecord`` mirrors the ``events`` table created by ``EVENTS_DDL`` and is what
the CLI loader generates and inserts. It also documents, by example, how field
metadata drives extraction (primary key, timestamps, adapters, DB defaults).
"""
from __future__ import annotations

import json
import random
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Dict, Iterator, Optional

from pydantic import BaseModel, Field

EVENTS_DDL = """
CREATE TABLE IF NOT EXISTS {table} (
    id BIGSERIAL PRIMARY KEY,
    created_at TIMESTAMPTZ NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL,
    category TEXT NOT NULL,
    payload JSONB NOT NULL,
    amount NUMERIC(12, 2) NOT NULL,
    is_active BOOLEAN NOT NULL,
    source TEXT NOT NULL DEFAULT 'generator'
);
"""


class EventRecord(BaseModel):
    """
    Representation of a single row in the ``events`` table.
    """

    __tablename__: ClassVar[str] = "events"

    id: Optional[int] = Field(
        None,
        description="Primary key (BIGSERIAL), assigned by the database.",
        json_schema_extra={"primary_key": True},
    )
    created_at: Optional[datetime] = Field(None, description="Row creation timestamp.")
    updated_at: Optional[datetime] = Field(None, description="Row update timestamp.")
    category: str = Field(..., description="Categorical label for the event.")
    payload: Dict[str, Any] = Field(
        default_factory=dict,
        description="Arbitrary JSON payload.",
        json_schema_extra={"adapter": json.dumps},
    )
    amount: Decimal = Field(..., description="Numeric amount.")
    is_active: bool = Field(True, description="Whether the event is active.")
    source: str = Field(
        "",
        description="Origin of the event data.",
        json_schema_extra={"default": "generator"},
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


def generate_records(count: int, seed: int = 42) -> Iterator[EventRecord]:
    """
    Yield ``count`` deterministic pseudo-random events.

    Timestamps and ids are left unset so the extractor fills the timestamps and
    the database assigns ids.
    """
    rng = random.Random(seed)
    categories = ["alpha", "beta", "gamma", "delta"]
    for _ in range(count):
        yield EventRecord(
            category=rng.choice(categories),
            payload={
                "user_id": rng.randint(1, 1_000_000),
                "action": rng.choice(["view", "click", "purchase", "impression"]),
                "meta": {"session": rng.randint(1, 1_000_000)},
            },
            amount=Decimal(f"{rng.uniform(1, 10_000):.2f}"),
            is_active=rng.choice([True, False]),
        )


__all__ = ["EVENTS_DDL", "EventRecord", "generate_records"]
