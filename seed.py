"""Seed the transaction collection from the third-party data set."""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError
from pymongo.collection import Collection

from database import replace_documents
from errors import SeedSourceError
from schemas import Transaction

logger = logging.getLogger(__name__)


def fetch_transactions(
    source_url: str, *, client: Optional[httpx.Client] = None, timeout: float = 30.0
) -> List[dict]:
    """Download the seed array and validate each element as a Transaction."""
    owns_client = client is None
    http = client or httpx.Client(timeout=timeout)
    try:
        response = http.get(source_url)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPError as exc:
        raise SeedSourceError(f"Seed source request failed: {exc}") from exc
    except ValueError as exc:
        raise SeedSourceError("Seed source did not return JSON") from exc
    finally:
        if owns_client:
            http.close()

    if not isinstance(payload, list):
        raise SeedSourceError("Seed source must return a JSON array")

    records = []
    for index, item in enumerate(payload):
        try:
            records.append(Transaction.model_validate(item).model_dump())
        except ValidationError as exc:
            raise SeedSourceError(f"Seed record {index} is invalid: {exc.errors()[0]['msg']}") from exc
    return records


def initialize(
    collection: Collection,
    source_url: Optional[str],
    *,
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
) -> int:
    """Replace the collection's contents with the fetched data set.

    Returns the number of inserted records.
    """
    if not source_url:
        raise SeedSourceError("SEED_SOURCE_URL is not configured")

    logger.info("seed_started source=%s", source_url)
    records = fetch_transactions(source_url, client=client, timeout=timeout)
    inserted = replace_documents(collection, records)
    logger.info("seed_completed count=%s", inserted)
    return inserted
