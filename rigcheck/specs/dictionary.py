"""Spec Dictionary — single source of truth for PC part spec keys.

Every spec key that may appear in a part payload is defined here with its
label, unit, applicable categories, group, importance and value type.  No
other module hardcodes a label or unit.

The dictionary is additive-only: existing keys are never repurposed, new
specs are appended.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict

from rigcheck.config import IMPORTANCE_ORDER, SPEC_GROUP_ORDER

SpecType = Literal["number", "string", "boolean"]
SpecGroup = Literal[
    "performance", "compatibility", "power", "physical", "memory", "connectivity", "features"
]
SpecImportance = Literal["high", "medium", "low"]


class SpecDefinition(BaseModel):
    """Static metadata for one spec key."""

    model_config = ConfigDict(frozen=True)

    label: str
    categories: frozenset[str]
    group: SpecGroup
    unit: str | None = None
    importance: SpecImportance
    type: SpecType
    description: str | None = None
    order: int | None = None
    """Display order within the group (lower shows first)."""


def _spec(
    label: str,
    categories: tuple[str, ...],
    group: str,
    unit: str | None,
    importance: str,
    type_: str,
    description: str | None = None,
    order: int | None = None,
) -> SpecDefinition:
    return SpecDefinition(
        label=label,
        categories=frozenset(categories),
        group=group,
        unit=unit,
        importance=importance,
        type=type_,
        description=description,
        order=order,
    )


_DEFINITIONS: dict[str, SpecDefinition] = {
    # -- Performance ---------------------------------------------------------
    "boost_clock_ghz": _spec("Boost Clock", ("cpu",), "performance", "GHz", "high", "number",
                             "Maximum single-core boost frequency", 1),
    "base_clock_ghz": _spec("Base Clock", ("cpu",), "performance", "GHz", "high", "number",
                            "Base operating frequency", 2),
    "cores": _spec("Cores", ("cpu",), "performance", None, "high", "number",
                   "Number of CPU cores", 3),
    "threads": _spec("Threads", ("cpu",), "performance", None, "medium", "number",
                     "Number of simultaneous threads", 4),
    "memory_clock_mhz": _spec("Memory Clock", ("gpu",), "performance", "MHz", "medium", "number"),
    "core_clock_mhz": _spec("Core Clock", ("gpu",), "performance", "MHz", "medium", "number"),
    "boost_clock_mhz": _spec("Boost Clock", ("gpu",), "performance", "MHz", "medium", "number"),
    "cpu_tier": _spec("CPU Tier", ("cpu",), "performance", None, "medium", "string",
                      "Entry, Budget, Mid-range, High-end, Flagship (heuristic matching)"),
    "gpu_tier": _spec("GPU Tier", ("gpu",), "performance", None, "medium", "string",
                      "Entry, Budget, Mid-range, High-end, Flagship"),
    "gpu_memory_bandwidth_gbps": _spec("Memory Bandwidth", ("gpu",), "performance", "GB/s",
                                       "low", "number", "GPU memory bandwidth"),

    # -- Compatibility -------------------------------------------------------
    "socket": _spec("Socket", ("cpu", "motherboard"), "compatibility", None, "high", "string",
                    "CPU socket type (must match between CPU and motherboard)"),
    "chipset": _spec("Chipset", ("motherboard",), "compatibility", None, "high", "string",
                     "Motherboard chipset"),
    "memory_type": _spec("Memory Type", ("ram", "motherboard"), "compatibility", None, "high",
                         "string", "DDR generation (DDR4, DDR5, etc.)"),
    "max_ram_speed_mhz": _spec("Max RAM Speed", ("motherboard",), "compatibility", "MHz", "high",
                               "number", "Maximum supported RAM speed"),
    "ram_speed_mhz": _spec("RAM Speed", ("ram",), "compatibility", "MHz", "high", "number",
                           "RAM operating speed"),
    "form_factor": _spec("Form Factor", ("motherboard", "case"), "compatibility", None, "high",
                         "string", "Physical size standard (ATX, mATX, ITX, etc.)"),
    "pcie_slots": _spec("PCIe Slots", ("motherboard",), "compatibility", None, "medium", "number",
                        "Number of PCIe expansion slots"),
    "sata_ports": _spec("SATA Ports", ("motherboard",), "compatibility", None, "low", "number",
                        "Number of SATA ports"),
    "m2_slots": _spec("M.2 Slots", ("motherboard",), "compatibility", None, "medium", "number",
                      "Number of M.2 storage slots"),
    "generation": _spec("Generation", ("cpu", "gpu"), "compatibility", None, "high", "string",
                        "Processor generation (e.g., Ryzen 5000, i9-13K)"),
    "socket_revision": _spec("Socket Revision", ("motherboard",), "compatibility", None, "medium",
                             "string", "Socket version (AM5, LGA1700, etc.)"),
    "bios_version_required": _spec("BIOS Version Required", ("motherboard",), "compatibility",
                                   None, "low", "string", "Minimum BIOS version for CPU support"),
    "socket_compatibility": _spec("Socket Compatibility", ("cooler",), "compatibility", None,
                                  "high", "string", 'Supported sockets (e.g., "AM4, AM5")'),
    "psu_form_factor": _spec("PSU Form Factor", ("case",), "compatibility", None, "high",
                             "string", "Supported PSU sizes (ATX, SFX, etc.)"),
    "motherboard_form_factors": _spec("Motherboard Form Factors", ("case",), "compatibility",
                                      None, "high", "string",
                                      "Supported motherboard sizes (comma-separated: ATX,mATX,ITX)"),

    # -- Power ---------------------------------------------------------------
    "tdp_watts": _spec("TDP", ("cpu", "gpu"), "power", "W", "high", "number",
                       "Thermal Design Power", 1),
    # Legacy alias of tdp_watts
    "tdp_w": _spec("TDP", ("cpu", "gpu"), "power", "W", "high", "number",
                   "Thermal Design Power (legacy alias - use tdp_watts)", 1),
    "wattage": _spec("Wattage", ("psu",), "power", "W", "high", "number",
                     "Power supply maximum output"),
    "efficiency_rating": _spec("Efficiency Rating", ("psu",), "power", None, "medium", "string",
                               "80 Plus rating (Bronze, Silver, Gold, Platinum, Titanium)"),
    "power_connectors": _spec("Power Connectors", ("gpu", "psu"), "power", None, "medium",
                              "string", 'Required power connectors (e.g., "8-pin + 8-pin")'),
    "tdp_rating_watts": _spec("TDP Rating", ("cooler",), "power", "W", "high", "number",
                              "Maximum TDP the cooler can handle"),
    "pcie_8pin_count": _spec("PCIe 8-Pin Count", ("psu",), "power", None, "high", "number",
                             "Number of 8-pin PCIe power connectors"),
    "pcie_6pin_count": _spec("PCIe 6-Pin Count", ("psu",), "power", None, "high", "number",
                             "Number of 6-pin PCIe power connectors"),
    "pcie_12vhpwr": _spec("12VHPWR Support", ("psu",), "power", None, "medium", "boolean",
                          "New 12VHPWR connector support"),
    "motherboard_power_pins": _spec("Motherboard Power (24-pin)", ("psu",), "power", None, "high",
                                    "boolean", "Standard 24-pin ATX power"),
    "cpu_power_4pin": _spec("CPU Power (4-pin)", ("psu",), "power", None, "high", "number",
                            "Number of 4-pin CPU power connectors"),
    "cpu_power_8pin": _spec("CPU Power (8-pin)", ("psu",), "power", None, "high", "number",
                            "Number of 8-pin CPU power connectors"),

    # -- Physical ------------------------------------------------------------
    "length_mm": _spec("Length", ("gpu", "case"), "physical", "mm", "high", "number",
                       "Component length"),
    "width_mm": _spec("Width", ("gpu", "case"), "physical", "mm", "medium", "number"),
    "height_mm": _spec("Height", ("gpu", "case", "cooler"), "physical", "mm", "medium", "number"),
    "gpu_max_length_mm": _spec("Max GPU Length", ("case",), "physical", "mm", "high", "number",
                               "Maximum GPU length supported by case"),
    "cpu_cooler_height_mm": _spec("Max CPU Cooler Height", ("case",), "physical", "mm", "medium",
                                  "number", "Maximum CPU cooler height supported"),
    "weight_kg": _spec("Weight", ("case", "psu"), "physical", "kg", "low", "number"),
    "thickness_mm": _spec("Thickness", ("gpu", "cooler"), "physical", "mm", "medium", "number",
                          "Component thickness"),
    "interior_length_mm": _spec("Interior Length", ("case",), "physical", "mm", "medium",
                                "number", "Interior length of case"),
    "interior_width_mm": _spec("Interior Width", ("case",), "physical", "mm", "medium", "number",
                               "Interior width of case"),
    "interior_height_mm": _spec("Interior Height", ("case",), "physical", "mm", "medium",
                                "number", "Interior height of case"),
    "form_factor_storage": _spec("Storage Form Factor", ("storage",), "physical", None, "high",
                                 "string", '2.5", 3.5", M.2, etc.'),
    "psu_form_factor_type": _spec("PSU Form Factor", ("psu",), "physical", None, "high", "string",
                                  "ATX, SFX, TFX, etc."),

    # -- Memory --------------------------------------------------------------
    "vram_gb": _spec("VRAM", ("gpu",), "memory", "GB", "high", "number", "Video memory capacity"),
    "size_gb": _spec("Capacity", ("ram", "storage"), "memory", "GB", "high", "number",
                     "Storage or memory capacity"),
    "capacity_tb": _spec("Capacity", ("storage",), "memory", "TB", "high", "number",
                         "Storage capacity in terabytes"),
    "gpu_memory_type": _spec("GPU Memory Type", ("gpu",), "memory", None, "medium", "string",
                             "GDDR6, GDDR6X, HBM, etc."),
    "max_ram_gb": _spec("Max RAM", ("motherboard",), "memory", "GB", "medium", "number",
                        "Maximum RAM capacity"),

    # -- Connectivity --------------------------------------------------------
    "usb_ports": _spec("USB Ports", ("motherboard", "case"), "connectivity", None, "medium",
                       "number", "Number of USB ports"),
    "usb_c_ports": _spec("USB-C Ports", ("motherboard", "case"), "connectivity", None, "medium",
                         "number"),
    "display_ports": _spec("Display Ports", ("gpu", "motherboard"), "connectivity", None,
                           "medium", "number"),
    "hdmi_ports": _spec("HDMI Ports", ("gpu", "motherboard"), "connectivity", None, "medium",
                        "number"),
    "ethernet_ports": _spec("Ethernet Ports", ("motherboard",), "connectivity", None, "low",
                            "number"),
    "wifi": _spec("Wi-Fi", ("motherboard",), "connectivity", None, "medium", "boolean",
                  "Built-in Wi-Fi support"),
    "bluetooth": _spec("Bluetooth", ("motherboard",), "connectivity", None, "low", "boolean"),
    "gpu_bus_width": _spec("GPU Bus Width", ("gpu",), "connectivity", "bit", "low", "number",
                           "Memory bus width"),
    "pcie_generation": _spec("PCIe Generation", ("gpu", "storage", "motherboard"), "connectivity",
                             None, "medium", "string", "PCIe version (3.0, 4.0, 5.0)"),
    "pcie_lanes_required": _spec("PCIe Lanes Required", ("gpu",), "connectivity", "lanes", "low",
                                 "number", "PCIe lanes needed (typically x16 or x8)"),
    "drive_bays_35": _spec('3.5" Drive Bays', ("case",), "connectivity", None, "low", "number",
                           'Number of 3.5" drive bays'),
    "drive_bays_25": _spec('2.5" Drive Bays', ("case",), "connectivity", None, "low", "number",
                           'Number of 2.5" drive bays'),
    "max_ram_slots": _spec("Max RAM Slots", ("motherboard",), "connectivity", None, "low",
                           "number", "Number of RAM slots"),
    "nvme_protocol": _spec("NVMe Protocol", ("storage",), "connectivity", None, "medium",
                           "string", "NVMe version (1.3, 1.4, etc.)"),
    "nvme_pcie_gen": _spec("NVMe PCIe Gen", ("storage", "motherboard"), "connectivity", None,
                           "medium", "string", "PCIe generation for NVMe (3.0, 4.0, 5.0)"),
    "storage_interfaces": _spec("Storage Interfaces", ("motherboard",), "connectivity", None,
                                "medium", "string", "Supported interfaces (SATA, NVMe, M.2, etc.)"),
    "pcie_slot_count": _spec("PCIe Slots", ("motherboard",), "connectivity", None, "low",
                             "number", "Total number of PCIe slots"),
    "pcie_gen_slots": _spec("PCIe Gen by Slot", ("motherboard",), "connectivity", None, "medium",
                            "string", 'PCIe generations available (e.g., "x16 Gen5, x1 Gen3")'),

    # -- Features ------------------------------------------------------------
    "modular": _spec("Modular", ("psu",), "features", None, "medium", "boolean",
                     "Modular cable design"),
    "modular_type": _spec("Modular Type", ("psu",), "features", None, "medium", "string",
                          "Non-modular, Semi-modular, Fully-modular"),
    "rgb": _spec("RGB", ("ram", "gpu", "case", "cooler"), "features", None, "low", "boolean",
                 "RGB lighting support"),
    "type": _spec("Type", ("storage",), "features", None, "high", "string",
                  "Storage type (SSD, HDD, NVMe, etc.)"),
    "interface": _spec("Interface", ("storage",), "features", None, "high", "string",
                       "Connection interface (SATA, PCIe, NVMe, etc.)"),
    "read_speed_mbps": _spec("Read Speed", ("storage",), "features", "MB/s", "medium", "number",
                             "Sequential read speed"),
    "write_speed_mbps": _spec("Write Speed", ("storage",), "features", "MB/s", "medium", "number",
                              "Sequential write speed"),
    "fan_count": _spec("Fan Count", ("gpu", "case", "cooler"), "features", None, "low", "number",
                       "Number of fans"),
    "liquid_cooled": _spec("Liquid Cooled", ("cooler", "gpu"), "features", None, "low", "boolean",
                           "Liquid cooling support"),
    "power_supply_cover": _spec("Power Supply Cover", ("case",), "features", None, "low",
                                "boolean", "Has shroud/cover for PSU"),
    "ecc_support": _spec("ECC Support", ("motherboard", "ram"), "features", None, "low", "boolean",
                         "Error Correcting Code support"),
    "overclocking_support": _spec("Overclocking", ("motherboard",), "features", None, "low",
                                  "boolean", "Supports CPU/memory overclocking"),
}

SPEC_DICTIONARY: MappingProxyType[str, SpecDefinition] = MappingProxyType(_DEFINITIONS)
"""Read-only view of every published spec key."""


def get_spec_definition(key: str) -> SpecDefinition | None:
    """Return the definition for *key*, or None if it is not published."""
    return SPEC_DICTIONARY.get(key)


def get_specs_for_category(category: str) -> list[tuple[str, SpecDefinition]]:
    """Return ``(key, definition)`` pairs applicable to *category*."""
    return [(key, d) for key, d in SPEC_DICTIONARY.items() if category in d.categories]


def get_specs_by_group(group: str) -> list[tuple[str, SpecDefinition]]:
    """Return ``(key, definition)`` pairs in *group*."""
    return [(key, d) for key, d in SPEC_DICTIONARY.items() if d.group == group]


def get_specs_by_importance(importance: str) -> list[tuple[str, SpecDefinition]]:
    """Return ``(key, definition)`` pairs with the given *importance*."""
    return [(key, d) for key, d in SPEC_DICTIONARY.items() if d.importance == importance]


def spec_label(key: str) -> str:
    """Display label for *key*, falling back to the key itself."""
    definition = SPEC_DICTIONARY.get(key)
    return definition.label if definition else key


def spec_unit(key: str) -> str:
    """Unit suffix for *key* (empty string when unitless or unknown)."""
    definition = SPEC_DICTIONARY.get(key)
    return definition.unit or "" if definition else ""


def sort_specs(entries: list[tuple[str, SpecDefinition]]) -> list[tuple[str, SpecDefinition]]:
    """Sort entries by group display order, importance, then explicit order."""

    def _key(entry: tuple[str, SpecDefinition]) -> tuple[int, int, int, str]:
        key, d = entry
        return (
            SPEC_GROUP_ORDER.index(d.group),
            IMPORTANCE_ORDER.index(d.importance),
            d.order if d.order is not None else 99,
            key,
        )

    return sorted(entries, key=_key)
