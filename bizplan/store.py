import json
import logging
import sqlite3
import threading
from typing import List, Optional

from .config import settings
from .schemas import GeneratedPlan, PlanSection

logger = logging.getLogger(__name__)


class PlanNotFoundError(LookupError):
    def __init__(self, plan_id: str):
        super().__init__(f"No plan found with id: {plan_id}")
        self.plan_id = plan_id


SCHEMA = """
CREATE TABLE IF NOT EXISTS business_plans (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    industry TEXT NOT NULL,
    status TEXT NOT NULL,
    sections TEXT NOT NULL,
    sections_count INTEGER NOT NULL,
    model TEXT,
    generation_time_ms INTEGER NOT NULL DEFAULT 0,
    parent_id TEXT,
    export_count INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
)
"""

COLUMNS = "id, user_id, title, industry, status, sections, model, generation_time_ms, parent_id, export_count, created_at"


class PlanStore:
    """sqlite-backed store for generated plans, sections kept as a JSON blob."""

    def __init__(self, path: str = ":memory:"):
        self.path = path
        self._lock = threading.Lock()
        self.conn = sqlite3.connect(path, check_same_thread=False)
        self.conn.execute(SCHEMA)
        self.conn.execute("CREATE INDEX IF NOT EXISTS idx_plans_user ON business_plans (user_id, created_at)")
        self.conn.commit()

    def save(self, plan: GeneratedPlan) -> GeneratedPlan:
        sections = json.dumps([s.model_dump() for s in plan.sections])
        with self._lock:
            self.conn.execute(
                f"INSERT OR REPLACE INTO business_plans ({COLUMNS}, sections_count) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (plan.id, plan.user_id, plan.title, plan.industry, plan.status, sections, plan.model,
                 plan.generation_time_ms, plan.parent_id, plan.export_count, plan.created_at.isoformat(),
                 len(plan.sections)),
            )
            self.conn.commit()
        logger.info(f"Saved plan {plan.id} ({len(plan.sections)} sections) for user {plan.user_id}")
        return plan

    def get(self, plan_id: str) -> GeneratedPlan:
        row = self.conn.execute(f"SELECT {COLUMNS} FROM business_plans WHERE id=?", (plan_id,)).fetchone()
        if row is None:
            raise PlanNotFoundError(plan_id)
        return _row_to_plan(row)

    def list_for_user(self, user_id: str) -> List[GeneratedPlan]:
        cursor = self.conn.execute(
            f"SELECT {COLUMNS} FROM business_plans WHERE user_id=? ORDER BY created_at DESC", (user_id,)
        )
        return [_row_to_plan(row) for row in cursor.fetchall()]

    def update_section(self, plan_id: str, index: int, content: str) -> GeneratedPlan:
        """Overwrite the content of one section with a user edit.

        Only the sections column is written, so counters bumped by other
        requests in the meantime are kept.
        """
        with self._lock:
            row = self.conn.execute("SELECT sections FROM business_plans WHERE id=?", (plan_id,)).fetchone()
            if row is None:
                raise PlanNotFoundError(plan_id)
            sections = json.loads(row[0])
            if not 0 <= index < len(sections):
                raise IndexError(f"Plan {plan_id} has no section {index}")
            sections[index] = PlanSection(title=sections[index]["title"], content=content).model_dump()
            self.conn.execute(
                "UPDATE business_plans SET sections=?, sections_count=? WHERE id=?",
                (json.dumps(sections), len(sections), plan_id),
            )
            self.conn.commit()
        logger.info(f"Updated section {index} of plan {plan_id}")
        return self.get(plan_id)

    def increment_export_count(self, plan_id: str) -> int:
        with self._lock:
            cursor = self.conn.execute(
                "UPDATE business_plans SET export_count = export_count + 1 WHERE id=?", (plan_id,)
            )
            self.conn.commit()
        if cursor.rowcount == 0:
            raise PlanNotFoundError(plan_id)
        return self.get(plan_id).export_count

    def delete(self, plan_id: str) -> None:
        with self._lock:
            cursor = self.conn.execute("DELETE FROM business_plans WHERE id=?", (plan_id,))
            self.conn.commit()
        if cursor.rowcount == 0:
            raise PlanNotFoundError(plan_id)

    def close(self):
        self.conn.close()


def _row_to_plan(row) -> GeneratedPlan:
    (plan_id, user_id, title, industry, status, sections, model,
     generation_time_ms, parent_id, export_count, created_at) = row
    return GeneratedPlan(
        id=plan_id,
        user_id=user_id,
        title=title,
        industry=industry,
        status=status,
        sections=[PlanSection(**s) for s in json.loads(sections)],
        model=model,
        generation_time_ms=generation_time_ms,
        parent_id=parent_id,
        export_count=export_count,
        created_at=created_at,
    )


_default_store: Optional[PlanStore] = None


def get_store() -> PlanStore:
    global _default_store
    if _default_store is None:
        _default_store = PlanStore(settings.plan_db_path)
        import atexit
        atexit.register(_default_store.close)
    return _default_store
