"""
Entry reconciliation.

Merges an incoming (partial) entry payload with the stored entry, if any,
normalizes its payments and recomputes the derived totals.

Records handled here are plain dicts keyed by model attribute names
(`unique_id`, `agent_phone`, ...). Incoming payloads use the wire names
(`uniqueID`, `agentPhone`, ...).
"""

import random
from datetime import date
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple

from backend.app.domain.ledger.payments import (
    aggregate_totals,
    normalize_payments,
    to_money,
    today_str,
)

UID_MIN = 10000
UID_MAX = 99999


class MergeRule(NamedTuple):
    """How one identity field is resolved on save."""
    field: str
    wire_name: str
    fallbacks: Tuple[str, ...] = ()
    default: Any = None


# Identity/contact fields are sticky: an update that omits them keeps the
# stored value. Fallbacks and defaults only apply when creating an entry.
IDENTITY_MERGE_POLICY: Tuple[MergeRule, ...] = (
    MergeRule("name", "name", fallbacks=("customerName", "customer"), default="Unnamed"),
    MergeRule("contact", "contact", fallbacks=("phone",), default=""),
    MergeRule("agent", "agent"),
    MergeRule("agent_phone", "agentPhone"),
)


def _first_present(incoming: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = incoming.get(key)
        if value is not None and value != "":
            return value
    return None


def merge_identity(incoming: Mapping[str, Any], existing: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Resolve the identity/contact fields of an entry.

    Existing entry: incoming value unless it is None, else the stored value.
    New entry: first non-empty of the field and its fallbacks, else the default.
    Supplied values are stored as strings (a phone sent as a number included).
    """
    merged = {}
    for rule in IDENTITY_MERGE_POLICY:
        if existing is not None:
            value = incoming.get(rule.wire_name)
            merged[rule.field] = str(value) if value is not None else existing.get(rule.field)
        else:
            value = _first_present(incoming, (rule.wire_name,) + rule.fallbacks)
            merged[rule.field] = str(value) if value is not None else rule.default
    return merged


def resolve_unique_id(incoming: Mapping[str, Any]) -> Optional[str]:
    """The client-supplied uniqueID, or None when absent or blank."""
    value = incoming.get("uniqueID")
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def generate_unique_id(prefix: str = "NSGD-", rng: Optional[random.Random] = None) -> str:
    """Random identity key: prefix followed by a 5-digit number."""
    rng = rng or random
    return f"{prefix}{rng.randint(UID_MIN, UID_MAX)}"


def reconcile_entry(
    incoming: Mapping[str, Any],
    existing: Optional[Mapping[str, Any]],
    unique_id: str,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Build the full entry to persist on a save.

    Args:
        incoming: raw request payload
        existing: stored record for `unique_id`, or None for a new entry
        unique_id: the resolved (supplied or generated) identity key
        today: date used for omitted dates (defaults to the current day)

    Returns:
        Complete record dict, derived totals included
    """
    record: Dict[str, Any] = {"unique_id": unique_id}
    record.update(merge_identity(incoming, existing))

    raw_amount = incoming.get("amount")
    if raw_amount is None and existing is not None:
        raw_amount = existing.get("amount")
    record["amount"] = float(to_money(raw_amount))

    payments = normalize_payments(incoming.get("payments"), today)
    record["payments"] = payments
    record.update(aggregate_totals(payments, record["amount"]))

    entry_date = incoming.get("date")
    record["date"] = str(entry_date) if entry_date else today_str(today)

    return record


def reconcile_history(
    existing: Mapping[str, Any],
    raw_payments: Any,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Replace the payment history of a stored entry.

    Identity, contact, amount and date are left as stored; only the payments
    and the totals derived from them change.
    """
    record = dict(existing)
    payments = normalize_payments(raw_payments, today)
    record["payments"] = payments
    record.update(aggregate_totals(payments, existing.get("amount")))
    return record
