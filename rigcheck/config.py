"""Global configuration: vocabularies, constants, defaults."""

# Part categories a build may contain (one part per category at most)
PART_CATEGORIES = (
    "cpu",
    "gpu",
    "motherboard",
    "ram",
    "storage",
    "psu",
    "case",
    "cooler",
)

# Semantic spec groups, in accessor lookup order
SPEC_GROUPS = (
    "performance",
    "compatibility",
    "power",
    "physical",
    "memory",
    "connectivity",
    "features",
)

# Display order for groups (compatibility first)
SPEC_GROUP_ORDER = (
    "compatibility",
    "performance",
    "power",
    "physical",
    "memory",
    "connectivity",
    "features",
)

IMPORTANCE_ORDER = ("high", "medium", "low")

# Issue severities, ascending rank: errors sort first
SEVERITY_ORDER: dict[str, int] = {"error": 0, "warning": 1, "info": 2}

# Base system draw (motherboard, RAM, storage, fans) in watts
BASELINE_OVERHEAD_W = 150

# Minimum PSU headroom, percent of estimated draw
DEFAULT_HEADROOM_THRESHOLD_PCT = 30.0

# Assumed draw when a selected CPU/GPU does not declare a TDP
DEFAULT_CPU_TDP_W = 100
DEFAULT_GPU_TDP_W = 250

# Ordered performance tier labels used by catalog parts (cpu_tier / gpu_tier)
TIER_SCALE = ("Entry", "Budget", "Mid-range", "High-end", "Flagship")
