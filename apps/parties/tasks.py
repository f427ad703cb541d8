"""Celery tasks for parties."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import party_ledger

logger = logging.getLogger(__name__)


@shared_task(name="parties.reconcile_party_balances")
def reconcile_party_balances() -> int:
    """
    Rebuild every party balance from its ledger entries.

    Runs nightly. Returns the number of balances that had drifted.
    """
    mismatches = party_ledger.reconcile(fix=True)
    if mismatches:
        logger.warning(f"Reconciled {len(mismatches)} party balances")
    else:
        logger.info("All party balances match their ledger entries")
    return len(mismatches)
