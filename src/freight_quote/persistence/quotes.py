"""Quote record storage backed by Supabase, with a filesystem fallback."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable

from ..db.supabase import get_supabase_client
from ..models.domain import LocationDescriptor, QuoteRecord
from .filesystem import FileStorage

logger = logging.getLogger(__name__)

QUOTES_TABLE = "quotes"


def record_to_row(record: QuoteRecord) -> dict[str, Any]:
    """Flatten a record into the column layout of the ``quotes`` table."""
    row: dict[str, Any] = {"id": record.id}
    for side, location in (("origin", record.origin), ("destination", record.destination)):
        row[f"{side}_city"] = location.city
        row[f"{side}_postal_code"] = location.postal_code
        row[f"{side}_state_province"] = location.state_province
        row[f"{side}_country"] = location.country
    row.update(
        {
            "origin_latitude": record.origin_latitude,
            "origin_longitude": record.origin_longitude,
            "destination_latitude": record.destination_latitude,
            "destination_longitude": record.destination_longitude,
            "origin_accuracy": record.origin_accuracy,
            "destination_accuracy": record.destination_accuracy,
            "lane": record.lane,
            "equipment_type": record.equipment_type,
            "total_weight": record.total_weight,
            "pickup_date": record.pickup_date.isoformat() if record.pickup_date else None,
            "distance_miles": record.distance_miles,
            "distance_kilometers": record.distance_kilometers,
            "distance_method": record.distance_method,
            "quote_amount": record.quote_amount,
            "created_at": record.created_at.isoformat(),
        }
    )
    return row


def row_to_record(row: dict[str, Any]) -> QuoteRecord:
    def _location(side: str) -> LocationDescriptor:
        return LocationDescriptor(
            city=row.get(f"{side}_city"),
            country=row.get(f"{side}_country"),
            postal_code=row.get(f"{side}_postal_code"),
            state_province=row.get(f"{side}_state_province"),
        )

    pickup = row.get("pickup_date")
    total_weight = row.get("total_weight")
    return QuoteRecord(
        id=str(row["id"]),
        origin=_location("origin"),
        destination=_location("destination"),
        origin_latitude=float(row["origin_latitude"]),
        origin_longitude=float(row["origin_longitude"]),
        destination_latitude=float(row["destination_latitude"]),
        destination_longitude=float(row["destination_longitude"]),
        origin_accuracy=row.get("origin_accuracy") or "",
        destination_accuracy=row.get("destination_accuracy") or "",
        lane=row.get("lane") or "",
        equipment_type=row["equipment_type"],
        total_weight=float(total_weight) if total_weight is not None else None,
        pickup_date=date.fromisoformat(pickup[:10]) if pickup else None,
        distance_miles=float(row["distance_miles"]),
        distance_kilometers=float(row["distance_kilometers"]),
        distance_method=row.get("distance_method") or "",
        quote_amount=float(row["quote_amount"]),
        created_at=datetime.fromisoformat(str(row["created_at"]).replace("Z", "+00:00")),
    )


class QuoteRepository:
    """Stores and retrieves quote records.

    Uses the Supabase ``quotes`` table when credentials are configured and
    JSON files under ``<data_root>/outputs/quotes`` otherwise.
    """

    def __init__(
        self,
        storage: FileStorage | None = None,
        client_factory: Callable[[], Any] = get_supabase_client,
    ) -> None:
        self._client_factory = client_factory
        self._storage = storage

    @property
    def storage(self) -> FileStorage:
        if self._storage is None:
            self._storage = FileStorage()
        return self._storage

    @property
    def _directory(self) -> Path:
        return self.storage.collection("quotes")

    def save(self, record: QuoteRecord) -> QuoteRecord:
        row = record_to_row(record)
        supabase = self._client_factory()
        if supabase:
            supabase.table(QUOTES_TABLE).insert(row).execute()
            logger.info("Saved quote %s to database", record.id)
        else:
            self.storage.write_json(self._directory / f"{record.id}.json", row)
            logger.info("Saved quote %s to %s", record.id, self._directory)
        return record

    def get(self, quote_id: str) -> QuoteRecord | None:
        supabase = self._client_factory()
        if supabase:
            response = supabase.table(QUOTES_TABLE).select("*").eq("id", quote_id).limit(1).execute()
            rows = response.data or []
            return row_to_record(rows[0]) if rows else None

        path = self._directory / f"{quote_id}.json"
        # Ids come from the URL; only plain file names inside the collection are valid
        if path.parent != self._directory or not path.is_file():
            return None
        return row_to_record(self.storage.read_json(path))

    def list(self, page: int = 1, limit: int = 10) -> tuple[list[QuoteRecord], int]:
        """Return one page of records, newest first, and the total record count."""
        offset = (page - 1) * limit
        supabase = self._client_factory()
        if supabase:
            response = (
                supabase.table(QUOTES_TABLE)
                .select("*", count="exact")
                .order("created_at", desc=True)
                .range(offset, offset + limit - 1)
                .execute()
            )
            records = [row_to_record(row) for row in (response.data or [])]
            total = response.count if response.count is not None else len(records)
            return records, total

        records = [row_to_record(row) for row in self.storage.iter_json(self._directory)]
        records.sort(key=lambda record: record.created_at, reverse=True)
        return records[offset : offset + limit], len(records)

    def check_connection(self) -> dict[str, Any]:
        supabase = self._client_factory()
        if not supabase:
            return {"configured": False, "backend": "filesystem", "path": str(self._directory)}
        try:
            supabase.table(QUOTES_TABLE).select("id", count="exact").limit(1).execute()
        except Exception as exc:
            return {"configured": True, "connected": False, "backend": "supabase", "error": str(exc)}
        return {"configured": True, "connected": True, "backend": "supabase"}
