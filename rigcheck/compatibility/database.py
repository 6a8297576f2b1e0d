"""RuleDatabase — SQLite-backed store for declarative compatibility rules.

Uses stdlib sqlite3 only.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rigcheck.compatibility.rules import CompatibilityRule

logger = logging.getLogger(__name__)

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS compatibility_rules (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    source_category TEXT NOT NULL,
    target_category TEXT NOT NULL,
    source_field TEXT NOT NULL,
    target_field TEXT NOT NULL,
    operator TEXT NOT NULL,
    severity TEXT NOT NULL,
    message TEXT NOT NULL,
    description TEXT,
    active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_rules_active ON compatibility_rules(active);
CREATE INDEX IF NOT EXISTS idx_rules_categories
    ON compatibility_rules(source_category, target_category);
"""

_SEVERITY_RANK_SQL = "CASE severity WHEN 'error' THEN 0 WHEN 'warning' THEN 1 ELSE 2 END"

_UPDATABLE = frozenset({
    "source_category", "target_category", "source_field", "target_field",
    "operator", "severity", "message", "description", "active",
})


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RuleDatabase:
    """SQLite-backed compatibility rule store.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Use ``':memory:'`` for
        in-memory databases (useful for testing).
    auto_seed:
        If *True* (default), seed the database with the default rules on
        first access if the table is empty.
    """

    def __init__(self, db_path: str | Path = ":memory:", *, auto_seed: bool = True) -> None:
        self._db_path = str(db_path)
        self._conn: sqlite3.Connection | None = None
        self._auto_seed = auto_seed

    @property
    def conn(self) -> sqlite3.Connection:
        """Lazy-initialise and return the database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(self._db_path)
            self._conn.row_factory = sqlite3.Row
            self._init_schema()
            if self._auto_seed and self._is_empty():
                self._seed()
        return self._conn

    def _init_schema(self) -> None:
        self.conn.executescript(_SCHEMA_SQL)
        self.conn.commit()

    def _is_empty(self) -> bool:
        cur = self.conn.execute("SELECT COUNT(*) FROM compatibility_rules")
        return cur.fetchone()[0] == 0

    def _seed(self) -> None:
        """Seed with the default rules."""
        from rigcheck.compatibility.seed_data import SEED_RULES
        for rule in SEED_RULES:
            self.add_rule(rule)
        logger.info("Seeded %d compatibility rules.", len(SEED_RULES))

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # -- CRUD ----------------------------------------------------------------

    def add_rule(self, rule: CompatibilityRule) -> int:
        """Insert a rule and return its new id."""
        now = _now()
        cur = self.conn.execute(
            """\
            INSERT INTO compatibility_rules (source_category, target_category,
                                             source_field, target_field, operator,
                                             severity, message, description, active,
                                             created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                rule.source_category,
                rule.target_category,
                rule.source_field,
                rule.target_field,
                rule.operator,
                rule.severity,
                rule.message,
                rule.description,
                int(rule.active),
                now,
                now,
            ),
        )
        self.conn.commit()
        return cur.lastrowid  # type: ignore[return-value]

    def update_rule(self, rule_id: int, updates: dict[str, Any]) -> CompatibilityRule | None:
        """Update specific fields of a rule and return the updated rule.

        The merged rule is validated before writing, so an unknown operator
        or severity raises ``pydantic.ValidationError``.
        """
        current = self.get_rule(rule_id)
        if current is None:
            return None

        changes = {k: v for k, v in updates.items() if k in _UPDATABLE}
        if not changes:
            return current

        merged = CompatibilityRule.model_validate({**current.model_dump(), **changes})

        sets = [f"{key} = ?" for key in changes]
        vals: list[Any] = [
            int(getattr(merged, key)) if key == "active" else getattr(merged, key)
            for key in changes
        ]
        sets.append("updated_at = ?")
        vals.extend([_now(), rule_id])
        self.conn.execute(
            f"UPDATE compatibility_rules SET {', '.join(sets)} WHERE id = ?",
            vals,
        )
        self.conn.commit()
        return merged

    def activate_rule(self, rule_id: int) -> CompatibilityRule | None:
        return self.update_rule(rule_id, {"active": True})

    def deactivate_rule(self, rule_id: int) -> CompatibilityRule | None:
        """Soft-delete: the rule stays stored but is no longer evaluated."""
        return self.update_rule(rule_id, {"active": False})

    def delete_rule(self, rule_id: int) -> bool:
        """Delete a rule by id. Returns True if a row was deleted."""
        cur = self.conn.execute("DELETE FROM compatibility_rules WHERE id = ?", (rule_id,))
        self.conn.commit()
        return cur.rowcount > 0

    def get_rule(self, rule_id: int) -> CompatibilityRule | None:
        """Fetch a single rule by id."""
        cur = self.conn.execute("SELECT * FROM compatibility_rules WHERE id = ?", (rule_id,))
        row = cur.fetchone()
        if row is None:
            return None
        return self._row_to_rule(row)

    # -- Queries -------------------------------------------------------------

    def get_active_rules(self) -> list[CompatibilityRule]:
        """Active rules ordered error -> warning -> info, then by id."""
        cur = self.conn.execute(
            f"SELECT * FROM compatibility_rules WHERE active = 1 "
            f"ORDER BY {_SEVERITY_RANK_SQL}, id"
        )
        return self._rows_to_rules(cur.fetchall())

    def get_all_rules(self) -> list[CompatibilityRule]:
        """Every rule including inactive ones, newest first."""
        cur = self.conn.execute(
            "SELECT * FROM compatibility_rules ORDER BY created_at DESC, id DESC"
        )
        return self._rows_to_rules(cur.fetchall())

    def count(self) -> int:
        """Return total number of rules."""
        cur = self.conn.execute("SELECT COUNT(*) FROM compatibility_rules")
        return cur.fetchone()[0]

    # -- Internal ------------------------------------------------------------

    @classmethod
    def _rows_to_rules(cls, rows: list[sqlite3.Row]) -> list[CompatibilityRule]:
        """Convert rows, skipping (and logging) rows that fail validation."""
        rules: list[CompatibilityRule] = []
        for row in rows:
            try:
                rules.append(cls._row_to_rule(row))
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid compatibility rule %s: %d validation error(s)",
                    row["id"],
                    exc.error_count(),
                )
        return rules

    @staticmethod
    def _row_to_rule(row: sqlite3.Row) -> CompatibilityRule:
        """Convert a database row to a CompatibilityRule model."""
        return CompatibilityRule(
            id=row["id"],
            source_category=row["source_category"],
            target_category=row["target_category"],
            source_field=row["source_field"],
            target_field=row["target_field"],
            operator=row["operator"],
            severity=row["severity"],
            message=row["message"],
            description=row["description"],
            active=bool(row["active"]),
        )
