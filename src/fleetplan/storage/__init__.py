from __future__ import annotations

from .plans import CURRENT_PLAN_FILE, PLANS_DIR, PlanStore

__all__ = ["CURRENT_PLAN_FILE", "PLANS_DIR", "PlanStore"]
