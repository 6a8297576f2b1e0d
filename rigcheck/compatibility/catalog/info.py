"""Informational checks: educational notes that never need action."""

from __future__ import annotations

from typing import Any

from rigcheck.compatibility.catalog.base import CatalogCheck, make_issue, norm, spec_text
from rigcheck.compatibility.catalog.warnings import board_pcie_generation
from rigcheck.compatibility.rules import ExtendedCompatibilityIssue
from rigcheck.specs.accessor import get_spec_value, parse_generation, part_name

# Rough year through which new CPUs keep shipping for each socket
SOCKET_SUPPORT_UNTIL: dict[str, int] = {
    "AM4": 2024,
    "AM5": 2028,
    "LGA1700": 2026,
}

# Typical sequential read ceilings by NVMe PCIe generation (MB/s)
_NVME_SPEEDS = "PCIe 3.0 ~3,500 MB/s, PCIe 4.0 ~7,000 MB/s, PCIe 5.0 ~14,000 MB/s"


def check_pcie_backward_compat(gpu: Any, motherboard: Any) -> ExtendedCompatibilityIssue | None:
    """Reassurance that a newer GPU works in an older PCIe slot."""
    gpu_gen = parse_generation(get_spec_value(gpu, "pcie_generation"))
    mb_gen = board_pcie_generation(motherboard)
    if not gpu_gen or not mb_gen or gpu_gen <= mb_gen:
        return None

    return make_issue(
        tier="info",
        severity="info",
        type="PCIe Backward Compatibility",
        message=f"GPU with PCIe {gpu_gen}.0 is compatible with PCIe {mb_gen}.0 slot",
        explanation=(
            "PCIe is backward compatible: newer GPUs work in older slots and run at "
            f"the slot's PCIe {mb_gen}.0 speed."
        ),
        recommendation="No action needed.",
        affected=["gpu", "motherboard"],
        parts_involved=[part_name(gpu, "Your GPU"), part_name(motherboard, "Your motherboard")],
        spec_keys=["pcie_generation"],
        severity_explanation="PCIe 3.0, 4.0 and 5.0 devices are all backward compatible.",
    )


def check_ecc_on_consumer_board(ram: Any, motherboard: Any) -> ExtendedCompatibilityIssue | None:
    """ECC RAM on a board that explicitly lacks ECC support."""
    if get_spec_value(ram, "ecc_support") is not True:
        return None
    if get_spec_value(motherboard, "ecc_support") is not False:
        return None

    return make_issue(
        tier="info",
        severity="info",
        type="ECC RAM on Non-ECC Board",
        message="ECC RAM will operate in non-ECC mode on this motherboard",
        explanation=(
            "The motherboard does not support ECC, so the RAM works normally but "
            "without error correction."
        ),
        recommendation=(
            "ECC matters for servers and workstations; non-ECC RAM is better value "
            "for consumer builds."
        ),
        affected=["ram", "motherboard"],
        parts_involved=[part_name(ram, "Your RAM"), part_name(motherboard, "Your motherboard")],
        spec_keys=["ecc_support"],
        severity_explanation="ECC features are inactive; the RAM functions normally.",
    )


def _is_nvme(storage: Any) -> bool:
    return any(
        "nvme" in (spec_text(storage, key) or "").lower() for key in ("type", "interface")
    )


def check_nvme_speed_limit(storage: Any, motherboard: Any) -> ExtendedCompatibilityIssue | None:
    """An NVMe drive newer than the board's M.2 slot is capped at the slot's speed."""
    if not _is_nvme(storage):
        return None
    drive_gen = parse_generation(get_spec_value(storage, "nvme_pcie_gen"))
    slot_gen = parse_generation(get_spec_value(motherboard, "nvme_pcie_gen"))
    if not drive_gen or not slot_gen or drive_gen <= slot_gen:
        return None

    return make_issue(
        tier="info",
        severity="info",
        type="NVMe Speed Limitation",
        message=(
            f"NVMe PCIe {drive_gen}.0 drive will run at motherboard limit (PCIe {slot_gen}.0)"
        ),
        explanation=(
            f"The drive supports PCIe {drive_gen}.0 but the M.2 slot is limited to "
            f"PCIe {slot_gen}.0, so transfer speed is capped accordingly."
        ),
        recommendation="For most users the difference is imperceptible.",
        affected=["storage", "motherboard"],
        parts_involved=[
            part_name(storage, "Your storage"),
            part_name(motherboard, "Your motherboard"),
        ],
        spec_keys=["nvme_pcie_gen"],
        severity_explanation=_NVME_SPEEDS,
    )


def check_modular_psu(psu: Any) -> ExtendedCompatibilityIssue | None:
    """Cable-management note for PSUs that are not fully modular."""
    modular_type = spec_text(psu, "modular_type")
    if modular_type is None:
        if get_spec_value(psu, "modular") is not False:
            return None
        modular_type = "Non-modular"
    if modular_type.lower().replace(" ", "-").startswith("fully"):
        return None

    kind = "semi-modular" if "semi" in modular_type.lower() else "non-modular"
    return make_issue(
        tier="info",
        severity="info",
        type="Non-Modular PSU Cable Management",
        message=f"{modular_type} PSU will have excess cables",
        explanation=(
            f"This PSU uses {kind} cables. Fixed cables make cable management "
            "harder in tight cases."
        ),
        recommendation=(
            "Fully-modular PSUs cost more but make routing and airflow easier."
        ),
        affected=["psu"],
        parts_involved=[part_name(psu, "Your PSU")],
        spec_keys=["modular_type"],
        severity_explanation="Cable management only; no functional impact.",
    )


def check_socket_longevity(cpu: Any, motherboard: Any) -> ExtendedCompatibilityIssue | None:
    """Upgrade-path note for sockets with a known support window."""
    generation = spec_text(cpu, "generation")
    socket = spec_text(cpu, "socket")
    if generation is None or socket is None:
        return None

    socket = norm(socket)
    until = SOCKET_SUPPORT_UNTIL.get(socket)
    if until is None:
        return None

    return make_issue(
        tier="info",
        severity="info",
        type="Socket Longevity Note",
        message=f"Socket {socket} typically supported through ~{until}",
        explanation=(
            f"This platform can typically take newer CPUs until around {until}."
        ),
        recommendation="Check CPU support lists before upgrading.",
        affected=["cpu", "motherboard"],
        parts_involved=[part_name(cpu, "Your CPU"), part_name(motherboard, "Your motherboard")],
        spec_keys=["socket", "generation"],
        severity_explanation="Planning information for future upgrades.",
    )


INFO_CHECKS: tuple[CatalogCheck, ...] = (
    CatalogCheck("pcie_backward_compat", "info", ("gpu", "motherboard"),
                 check_pcie_backward_compat, "Newer GPUs work in older PCIe slots"),
    CatalogCheck("ecc_on_consumer_board", "info", ("ram", "motherboard"),
                 check_ecc_on_consumer_board, "ECC RAM on a board without ECC"),
    CatalogCheck("nvme_speed_limit", "info", ("storage", "motherboard"),
                 check_nvme_speed_limit, "NVMe drive capped by the M.2 slot"),
    CatalogCheck("modular_psu", "info", ("psu",), check_modular_psu,
                 "Cable management note for non-modular PSUs"),
    CatalogCheck("socket_longevity", "info", ("cpu", "motherboard"), check_socket_longevity,
                 "Upgrade window for known sockets"),
)
