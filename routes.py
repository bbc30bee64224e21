import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.collection import Collection

import queries
import settings
from database import get_collection
from errors import InvalidMonthError
from schemas import BarChart, CombinedData, InitializeResult, PieChart, Statistics, TransactionPage
from seed import initialize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


# ---------- Helpers ----------
# keeps (page - 1) * perPage inside BSON int64
MAX_PAGING_VALUE = 2**31 - 1


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value <= 0:
        return default
    return min(value, MAX_PAGING_VALUE)


def _month(raw: Optional[str]) -> int:
    try:
        return queries.parse_month(raw)
    except InvalidMonthError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _failed(action: str, exc: Exception) -> HTTPException:
    logger.exception("%s_failed error=%s", action.replace(" ", "_"), exc)
    return HTTPException(status_code=500, detail=f"Failed to {action}: {exc}")


# ---------- Routes ----------
@router.get("/initialize", response_model=InitializeResult)
def initialize_db(collection: Collection = Depends(get_collection)):
    try:
        inserted = initialize(collection, settings.seed_source_url(), timeout=settings.seed_timeout())
    except Exception as exc:
        raise _failed("initialize database", exc)
    return {"message": "Database initialized successfully!", "totalRecords": inserted}


@router.get("", response_model=TransactionPage)
@router.get("/", response_model=TransactionPage, include_in_schema=False)
def list_transactions(
    month: Optional[str] = Query(None, description="Sale month, 1-12"),
    search: str = Query("", description="Title/description substring or exact price"),
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None, alias="perPage"),
    collection: Collection = Depends(get_collection),
):
    month_value = _month(month)
    try:
        return queries.list_transactions(
            collection,
            month_value,
            search=search,
            page=_positive_int(page, 1),
            per_page=_positive_int(per_page, 10),
        )
    except Exception as exc:
        raise _failed("fetch transactions", exc)


@router.get("/statistics", response_model=Statistics)
def statistics(month: Optional[str] = Query(None), collection: Collection = Depends(get_collection)):
    month_value = _month(month)
    try:
        return queries.get_statistics(collection, month_value)
    except Exception as exc:
        raise _failed("fetch statistics", exc)


@router.get("/bar-chart", response_model=BarChart)
def bar_chart(month: Optional[str] = Query(None), collection: Collection = Depends(get_collection)):
    month_value = _month(month)
    try:
        return queries.get_bar_chart(collection, month_value)
    except Exception as exc:
        raise _failed("fetch bar chart data", exc)


@router.get("/pie-chart", response_model=PieChart)
def pie_chart(month: Optional[str] = Query(None), collection: Collection = Depends(get_collection)):
    month_value = _month(month)
    try:
        return queries.get_pie_chart(collection, month_value)
    except Exception as exc:
        raise _failed("fetch pie chart data", exc)


@router.get("/combined-data", response_model=CombinedData)
async def combined_data(month: Optional[str] = Query(None), collection: Collection = Depends(get_collection)):
    month_value = _month(month)
    try:
        return await queries.get_combined_data(collection, month_value)
    except Exception as exc:
        raise _failed("fetch combined data", exc)
