import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("rental_backoffice")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Recompute every party balance from its ledger entries - nightly
    "reconcile-party-balances": {
        "task": "parties.reconcile_party_balances",
        "schedule": crontab(minute=30, hour=2),
    },
}
