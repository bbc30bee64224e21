"""
Aggregation queries behind the transaction list and the dashboard views.

Every view filters on the sale month derived from `dateOfSale` at query time.
Functions take the collection explicitly and return plain data; failures are
raised (InvalidMonthError, pymongo errors), never returned.
"""

import asyncio
import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pymongo.collection import Collection

from errors import InvalidMonthError

logger = logging.getLogger(__name__)

DISPLAY_FIELDS = ("title", "description", "price", "category", "dateOfSale", "sold")
UNCATEGORIZED = "Uncategorized"

# (label, inclusive upper bound); each bucket starts just above the previous bound
PRICE_RANGES = [
    ("0-100", 100),
    ("101-200", 200),
    ("201-300", 300),
    ("301-400", 400),
    ("401-500", 500),
    ("501-600", 600),
    ("601-700", 700),
    ("701-800", 800),
    ("801-900", 900),
    ("901-above", None),
]

_MONTH_RE = re.compile(r"^\s*\d{1,2}\s*$")


# ---------- Pipeline building ----------
def parse_month(raw: Union[int, str, None]) -> int:
    """Return the month as an int in 1-12 or raise InvalidMonthError."""
    if isinstance(raw, bool):
        raise InvalidMonthError()
    if isinstance(raw, int):
        month = raw
    elif isinstance(raw, str) and _MONTH_RE.match(raw):
        month = int(raw)
    else:
        raise InvalidMonthError()
    if not 1 <= month <= 12:
        raise InvalidMonthError()
    return month


def month_stages(month: int) -> List[dict]:
    month = parse_month(month)
    return [
        {"$addFields": {"month": {"$month": "$dateOfSale"}}},
        {"$match": {"month": month}},
    ]


def _as_number(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def search_filter(search: Optional[str]) -> dict:
    """Match title/description substrings, or an exact price for numeric input."""
    search = (search or "").strip()
    if not search:
        return {}
    pattern = {"$regex": re.escape(search), "$options": "i"}
    clauses: List[dict] = [{"title": pattern}, {"description": pattern}]
    price = _as_number(search)
    if price is not None:
        clauses.append({"price": price})
    return {"$or": clauses}


def _as_utc(value: Any) -> Any:
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _serialize(doc: dict) -> dict:
    doc["id"] = str(doc.pop("_id", ""))
    if "dateOfSale" in doc:
        # stored timestamps are UTC
        doc["dateOfSale"] = _as_utc(doc["dateOfSale"])
    return doc


# ---------- Views ----------
def list_transactions(
    collection: Collection,
    month: int,
    search: Optional[str] = "",
    page: int = 1,
    per_page: int = 10,
) -> Dict[str, Any]:
    page = max(int(page), 1)
    per_page = max(int(per_page), 1)

    filter_stages = month_stages(month)
    criteria = search_filter(search)
    if criteria:
        filter_stages.append({"$match": criteria})

    page_pipeline = filter_stages + [
        {"$sort": {"_id": 1}},
        {"$skip": (page - 1) * per_page},
        {"$limit": per_page},
        {"$project": {field: 1 for field in DISPLAY_FIELDS}},
    ]
    count_pipeline = filter_stages + [{"$count": "totalRecords"}]

    transactions = [_serialize(doc) for doc in collection.aggregate(page_pipeline)]
    counted = list(collection.aggregate(count_pipeline))
    total_records = counted[0]["totalRecords"] if counted else 0

    return {
        "transactions": transactions,
        "pagination": {
            "totalRecords": total_records,
            "currentPage": page,
            "perPage": per_page,
            "totalPages": math.ceil(total_records / per_page),
        },
    }


def get_statistics(collection: Collection, month: int) -> Dict[str, Any]:
    pipeline = month_stages(month) + [
        {
            "$group": {
                "_id": None,
                "totalSaleAmount": {"$sum": {"$cond": [{"$eq": ["$sold", True]}, "$price", 0]}},
                "totalSoldItems": {"$sum": {"$cond": [{"$eq": ["$sold", True]}, 1, 0]}},
                "totalRecords": {"$sum": 1},
            }
        }
    ]
    grouped = list(collection.aggregate(pipeline))
    if not grouped:
        return {"totalSaleAmount": 0, "totalSoldItems": 0, "totalUnsoldItems": 0}

    totals = grouped[0]
    return {
        "totalSaleAmount": totals["totalSaleAmount"],
        "totalSoldItems": totals["totalSoldItems"],
        "totalUnsoldItems": totals["totalRecords"] - totals["totalSoldItems"],
    }


def price_range_label(price: float) -> str:
    for label, upper in PRICE_RANGES[:-1]:
        if price <= upper:
            return label
    return PRICE_RANGES[-1][0]


def get_bar_chart(collection: Collection, month: int) -> Dict[str, Any]:
    pipeline = month_stages(month) + [
        {"$match": {"sold": True}},
        {"$project": {"_id": 0, "price": 1}},
    ]
    counts = {label: 0 for label, _ in PRICE_RANGES}
    for doc in collection.aggregate(pipeline):
        counts[price_range_label(doc.get("price") or 0)] += 1
    return {"rangeCounts": [{"range": label, "count": count} for label, count in counts.items()]}


def get_pie_chart(collection: Collection, month: int) -> Dict[str, Any]:
    pipeline = month_stages(month) + [{"$project": {"category": 1}}]
    counts: Dict[str, int] = {}
    for doc in collection.aggregate(pipeline):
        category = doc.get("category") or UNCATEGORIZED
        counts[category] = counts.get(category, 0) + 1
    return {"categoryCounts": [{"category": name, "count": count} for name, count in counts.items()]}


async def get_combined_data(collection: Collection, month: Union[int, str, None]) -> Dict[str, Any]:
    """Run the three dashboard views concurrently for one month."""
    month = parse_month(month)
    logger.debug("combined_data_started month=%s", month)
    statistics, bar_chart, pie_chart = await asyncio.gather(
        asyncio.to_thread(get_statistics, collection, month),
        asyncio.to_thread(get_bar_chart, collection, month),
        asyncio.to_thread(get_pie_chart, collection, month),
    )
    return {"statistics": statistics, "barChart": bar_chart, "pieChart": pie_chart}
