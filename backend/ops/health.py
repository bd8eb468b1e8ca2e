"""
Health probes.

- /_health/live    process is up; touches nothing
- /_health/ready   the local store answers and its schema is migrated
"""
import logging
import time

from django.conf import settings
from django.db import DatabaseError, connections
from django.db.migrations.executor import MigrationExecutor
from django.http import JsonResponse
from django.views import View

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 2)


def check_database(alias: str = "default") -> dict:
    """Run ``SELECT 1`` on the given connection."""
    start = time.monotonic()
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        logger.error(f"Database check failed: {exc}", extra={"alias": alias})
        return {"ok": False, "error": str(exc), "duration_ms": _elapsed_ms(start)}
    return {"ok": True, "duration_ms": _elapsed_ms(start)}


def check_migrations(alias: str = "default") -> dict:
    """Report migrations that exist on disk but are not applied."""
    try:
        executor = MigrationExecutor(connections[alias])
        plan = executor.migration_plan(executor.loader.graph.leaf_nodes())
    except DatabaseError as exc:
        return {"ok": False, "error": str(exc)}
    pending = [f"{migration.app_label}.{migration.name}" for migration, _ in plan]
    if pending:
        logger.warning("Unapplied migrations", extra={"pending": pending})
    return {"ok": not pending, "pending": pending}


class LivenessView(View):
    def get(self, request):
        return JsonResponse({"status": "alive", "version": settings.VERSION})


class ReadinessView(View):
    """200 when the store is reachable and migrated, 503 otherwise."""

    def get(self, request):
        database = check_database()
        migrations = check_migrations() if database["ok"] else {"ok": False, "pending": []}
        ready = database["ok"] and migrations["ok"]
        return JsonResponse(
            {
                "status": "ready" if ready else "not_ready",
                "database": database,
                "migrations": migrations,
            },
            status=200 if ready else 503,
        )
