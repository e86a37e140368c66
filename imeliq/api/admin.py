"""Admin data API: fetch, CSV export, erasure and order status."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from litestar import Controller, Request, Response, delete, get, patch
from litestar.exceptions import NotFoundException
from litestar.params import Parameter
from litestar.status_codes import HTTP_200_OK, HTTP_404_NOT_FOUND
from pydantic import BaseModel
from sqlalchemy import delete as sql_delete, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imeliq.audit import AuditLogger
from imeliq.auth.guards import require_admin_access, require_admin_session
from imeliq.errors import ValidationError, store_error_from
from imeliq.models import AuditAction, Base, Feedback, Feeling, Order, OrderStatus, Tester
from imeliq.utils.export import CSV_MEDIA_TYPE, content_disposition, csv_filename, records_to_csv

logger = logging.getLogger("Imeliq.admin")

# Collections returned by GET, keyed by the ``type`` query value
FETCH_MODELS: dict[str, type[Base]] = {
    "feedback": Feedback,
    "orders": Order,
    "testers": Tester,
}
FETCH_TYPES = ("all", *FETCH_MODELS, "stats")
FORMATS = ("json", "csv")

# Single records erasable by DELETE
ERASE_MODELS: dict[str, type[Base]] = {
    "tester": Tester,
    "feedback": Feedback,
    "order": Order,
}


# --- Request Schemas ---

class UpdateOrderStatusRequest(BaseModel):
    """Request to move an order along its lifecycle."""
    status: OrderStatus


# --- Queries ---

async def fetch_records(session: AsyncSession, model: type[Base]) -> list[dict[str, Any]]:
    """All rows of ``model``, newest first."""
    result = await session.execute(select(model).order_by(desc(model.created_at)))
    return [row.to_record() for row in result.scalars().all()]


async def feedback_stats(session: AsyncSession) -> dict[str, int]:
    """Feedback counts per feeling. All zeros when there is no feedback."""
    result = await session.execute(
        select(Feedback.feeling, func.count(Feedback.id)).group_by(Feedback.feeling)
    )
    counts = {Feeling(feeling): count for feeling, count in result.all()}
    return {
        "total_feedback": sum(counts.values()),
        "positive_count": counts.get(Feeling.ENERGY, 0),
        "negative_count": counts.get(Feeling.NOTHING, 0),
        "neutral_count": counts.get(Feeling.OTHER, 0),
    }


def parse_record_id(raw: Optional[str]) -> uuid.UUID:
    if not raw:
        raise ValidationError("Missing id")
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise ValidationError("Invalid id")


# --- Controller ---

class AdminController(Controller):
    """API endpoints for the admin dashboard."""

    path = "/api/admin"
    tags = ["admin"]

    @get("/data", guards=[require_admin_access])
    async def get_data(
        self,
        request: Request,
        session: AsyncSession,
        audit_log: AuditLogger,
        data_type: Annotated[str, Parameter(query="type")] = "all",
        data_format: Annotated[str, Parameter(query="format")] = "json",
    ) -> Response:
        """Fetch records as JSON, or export one collection as CSV."""
        if data_type not in FETCH_TYPES:
            raise ValidationError(f"Unknown type: {data_type}")
        if data_format not in FORMATS:
            raise ValidationError(f"Unknown format: {data_format}")

        if data_format == "csv":
            return await self._export_csv(request, session, audit_log, data_type)

        await audit_log.record(AuditAction.DATA_ACCESS, request, {"type": data_type})

        result: dict[str, Any] = {}
        try:
            for name, model in FETCH_MODELS.items():
                if data_type in ("all", name):
                    result[name] = await fetch_records(session, model)
            if data_type in ("all", "stats"):
                result["stats"] = await feedback_stats(session)
        except SQLAlchemyError as e:
            raise store_error_from(e, f"fetching {data_type}")

        return Response({
            "success": True,
            "data": result,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    async def _export_csv(
        self,
        request: Request,
        session: AsyncSession,
        audit_log: AuditLogger,
        data_type: str,
    ) -> Response:
        if data_type not in FETCH_MODELS:
            raise ValidationError("CSV export needs type feedback, orders or testers")

        try:
            records = await fetch_records(session, FETCH_MODELS[data_type])
        except SQLAlchemyError as e:
            await audit_log.record(
                AuditAction.DATA_EXPORT, request, {"type": data_type, "count": 0, "failed": True}
            )
            raise store_error_from(e, f"exporting {data_type}")

        await audit_log.record(
            AuditAction.DATA_EXPORT, request, {"type": data_type, "count": len(records)}
        )

        if not records:
            return Response({"error": "No data"}, status_code=HTTP_404_NOT_FOUND)

        logger.info(f"Exported {len(records)} {data_type} records")
        return Response(
            records_to_csv(records).encode("utf-8"),
            media_type=CSV_MEDIA_TYPE,
            headers={"Content-Disposition": content_disposition(csv_filename(data_type))},
        )

    @delete("/data", guards=[require_admin_session], status_code=HTTP_200_OK)
    async def erase_record(
        self,
        request: Request,
        session: AsyncSession,
        audit_log: AuditLogger,
        record_type: Annotated[Optional[str], Parameter(query="type")] = None,
        record_id: Annotated[Optional[str], Parameter(query="id")] = None,
    ) -> dict:
        """Permanently delete one tester, feedback or order record."""
        if record_type not in ERASE_MODELS:
            raise ValidationError("type must be tester, feedback or order")
        parsed_id = parse_record_id(record_id)
        model = ERASE_MODELS[record_type]

        # Logged before deleting so the request is on record even if the delete fails
        await audit_log.record(
            AuditAction.DATA_DELETE, request, {"type": record_type, "id": str(parsed_id)}
        )

        try:
            result = await session.execute(sql_delete(model).where(model.id == parsed_id))
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise store_error_from(e, f"deleting {record_type} {parsed_id}")

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted {record_type} {parsed_id}")
        else:
            logger.info(f"Nothing to delete for {record_type} {parsed_id}")

        return {"success": True, "deleted": deleted}

    @patch("/orders/{order_id:uuid}/status", guards=[require_admin_session])
    async def update_order_status(
        self,
        request: Request,
        order_id: uuid.UUID,
        data: UpdateOrderStatusRequest,
        session: AsyncSession,
        audit_log: AuditLogger,
    ) -> dict:
        """Move an order forward: pending, confirmed, delivered."""
        try:
            order = await session.get(Order, order_id)
        except SQLAlchemyError as e:
            raise store_error_from(e, f"loading order {order_id}")

        if order is None:
            raise NotFoundException("Order not found")

        current = order.status
        if not current.can_transition_to(data.status):
            raise ValidationError(
                f"Cannot move order from {current.value} back to {data.status.value}"
            )

        await audit_log.record(
            AuditAction.DATA_UPDATE,
            request,
            {"type": "order", "id": str(order_id), "from": current.value, "to": data.status.value},
        )

        if data.status != current:
            order.status = data.status
            try:
                await session.commit()
                await session.refresh(order)
            except SQLAlchemyError as e:
                await session.rollback()
                raise store_error_from(e, f"updating order {order_id}")

        record = order.to_record()
        record["total"] = float(order.total)
        return {"success": True, "data": record}
