"""
Plan interaction analytics backed by MongoDB.
Counts views, selections and comparisons per plan; the counters feed
the "most popular" insight.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from pymongo.collection import Collection

from briki.core.mongodb_client import Collections, get_collection
from briki.plans.models import PlanAnalytics


logger = logging.getLogger(__name__)

ACTION_FIELDS = {
    "view": "view_count",
    "select": "selection_count",
    "compare": "compare_count",
}


class PlanAnalyticsRepository:
    """Reads and increments per-plan interaction counters."""

    def __init__(self, collection: Optional[Collection] = None):
        self.collection = collection if collection is not None else get_collection(
            Collections.PLAN_ANALYTICS
        )

    def get_analytics(self, plan_ids: Iterable[str]) -> Dict[str, PlanAnalytics]:
        """Counters for the given plans; plans never tracked are omitted."""
        ids = list(plan_ids)
        if not ids:
            return {}

        results: Dict[str, PlanAnalytics] = {}
        for doc in self.collection.find({"_id": {"$in": ids}}):
            results[doc["_id"]] = PlanAnalytics(
                view_count=doc.get("view_count", 0),
                selection_count=doc.get("selection_count", 0),
                compare_count=doc.get("compare_count", 0),
                last_updated=doc.get("last_updated"),
            )
        return results

    def track_interaction(self, plan_id: str, action: str) -> None:
        """
        Record a view, select or compare event for a plan.

        Raises:
            ValueError: if the action is not one of view, select, compare
        """
        field = ACTION_FIELDS.get(action)
        if field is None:
            raise ValueError(
                f"Unknown interaction '{action}'. Expected one of: {', '.join(ACTION_FIELDS)}"
            )

        self.collection.update_one(
            {"_id": plan_id},
            {
                "$inc": {field: 1},
                "$set": {"last_updated": datetime.now(timezone.utc)},
            },
            upsert=True,
        )
        logger.info(f"Plan {plan_id} - {action} tracked")
