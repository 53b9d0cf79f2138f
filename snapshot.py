"""
snapshot.py
-----------
Convert the documents delivered by the backend (camelCase dicts, ISO date
strings) into typed records for the metrics engine.  The backend keeps one
``transactions`` collection and two profile documents per user; this module
only sees the materialized values, never a live reference.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional

from pydantic import BaseModel, ValidationError

from models import HealthProfile, PortfolioProfile, Transaction

logger = logging.getLogger(__name__)


def _by_field_name(model_cls: type[BaseModel], data: Mapping) -> dict:
    """Rename alias keys (``totalDebt``) to field names (``total_debt``)."""
    aliases = {f.alias: name for name, f in model_cls.model_fields.items() if f.alias}
    return {aliases.get(key, key): value for key, value in data.items()}


def parse_transaction(document: Mapping) -> Optional[Transaction]:
    try:
        return Transaction.model_validate(_by_field_name(Transaction, document))
    except ValidationError as exc:
        logger.warning("Skipping transaction %s: %s", document.get("id"), exc)
        return None


def parse_transactions(documents: Iterable[Mapping]) -> List[Transaction]:
    """
    Build Transaction records from raw documents.

    Soft-deleted documents are dropped.  A document that fails validation is
    logged and skipped so one bad entry does not blank the whole dashboard.
    """
    transactions = []
    skipped = 0
    for document in documents:
        if document.get("deleted"):
            continue
        txn = parse_transaction(document)
        if txn is None:
            skipped += 1
            continue
        transactions.append(txn)

    logger.debug("Parsed %d transactions (%d skipped)", len(transactions), skipped)
    return transactions


def load_health(document: Optional[Mapping] = None, user_id: Optional[str] = None) -> HealthProfile:
    """Merge a (possibly partial or missing) health document over all-zero defaults."""
    data = _by_field_name(HealthProfile, document or {})
    if user_id is not None:
        data["user_id"] = user_id
    try:
        return HealthProfile.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid health profile for user %s, using defaults: %s", user_id, exc)
        return HealthProfile(user_id=user_id)


def merge_health(current: HealthProfile, changes: Mapping) -> HealthProfile:
    """Merge-upsert an edit into the current profile; untouched fields keep their value."""
    merged = {**current.model_dump(), **_by_field_name(HealthProfile, changes)}
    return HealthProfile.model_validate(merged)


def load_portfolio(document: Optional[Mapping] = None) -> PortfolioProfile:
    if not document:
        return PortfolioProfile()
    try:
        return PortfolioProfile.model_validate(_by_field_name(PortfolioProfile, document))
    except ValidationError as exc:
        logger.warning("Invalid portfolio profile, falling back to default tier: %s", exc)
        return PortfolioProfile()
