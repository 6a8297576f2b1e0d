"""Default declarative compatibility rules.

Seeded into an empty rules database.  Checks the fixed catalog already
performs (sockets, memory type, clearances) are not repeated here.
"""

from __future__ import annotations

from rigcheck.compatibility.rules import CompatibilityRule

SEED_RULES: list[CompatibilityRule] = [
    CompatibilityRule(
        source_category="ram",
        target_category="motherboard",
        source_field="size_gb",
        target_field="max_ram_gb",
        operator="less_than_or_equal",
        severity="error",
        message="RAM Capacity: kit exceeds the motherboard's maximum",
        description="The motherboard cannot address this much memory.",
    ),
    CompatibilityRule(
        source_category="storage",
        target_category="motherboard",
        source_field="interface",
        target_field="storage_interfaces",
        operator="includes",
        severity="warning",
        message="Storage Interface Compatibility",
        description="Ensure the motherboard supports the storage interface (SATA, NVMe, etc.).",
    ),
]
