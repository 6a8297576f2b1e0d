"""Hard compatibility checks: combinations that cannot physically or electrically work.

Every issue raised here has severity ``error`` and blocks the build.
"""

from __future__ import annotations

from typing import Any

from rigcheck.compatibility.catalog.base import (
    CatalogCheck,
    listed,
    make_issue,
    mm,
    norm,
    shares_entry,
    spec_text,
    split_list,
    watts,
)
from rigcheck.compatibility.connectors import parse_power_connectors
from rigcheck.compatibility.rules import ExtendedCompatibilityIssue
from rigcheck.specs.accessor import get_number, get_spec_value, part_name

# CPUs above this TDP need a dedicated 8-pin EPS connector
CPU_4PIN_MAX_TDP_W = 65
# Above this, a second 8-pin EPS is recommended
CPU_DUAL_8PIN_TDP_W = 125
# A 12VHPWR adapter consumes this many 8-pin PCIe cables
HPWR_ADAPTER_8PIN = 3


def _positive(part: Any, spec_key: str) -> float | None:
    number = get_number(part, spec_key)
    return number if number is not None and number > 0 else None


def _count(part: Any, spec_key: str) -> int | None:
    number = get_number(part, spec_key)
    return None if number is None else max(int(number), 0)


def check_cpu_socket(cpu: Any, motherboard: Any) -> ExtendedCompatibilityIssue | None:
    """CPU and motherboard sockets must match; a listed socket set matches any entry."""
    cpu_socket = spec_text(cpu, "socket")
    mb_socket = spec_text(motherboard, "socket")
    if cpu_socket is None or mb_socket is None:
        return None

    if shares_entry(cpu_socket, mb_socket):
        return None
    cpu_norm, mb_norm = split_list(norm(cpu_socket)), split_list(norm(mb_socket))

    cpu_name = part_name(cpu, "Your CPU")
    mb_name = part_name(motherboard, "Your motherboard")
    return make_issue(
        tier="hard",
        severity="error",
        type="CPU Socket Mismatch",
        message=(
            f"CPU Socket Mismatch: {cpu_name} requires {cpu_norm} "
            f"but motherboard has {mb_norm}"
        ),
        explanation=(
            f'"{cpu_name}" uses the {cpu_norm} socket, but "{mb_name}" uses the '
            f"{mb_norm} socket. The CPU physically will not fit into the "
            "motherboard's socket."
        ),
        fix=(
            f"Option 1: Replace the motherboard with one that has an {cpu_norm} socket.\n\n"
            f"Option 2: Replace the CPU with a processor that uses the {mb_norm} socket."
        ),
        affected=["cpu", "motherboard"],
        parts_involved=[cpu_name, mb_name],
        spec_keys=["socket"],
        severity_explanation=(
            "Blocking error: the CPU cannot be installed on this motherboard."
        ),
        recommendation=(
            "Choose parts with matching sockets. Common sockets include AM4/AM5 (AMD) "
            "and LGA1200/LGA1700 (Intel)."
        ),
    )


def check_memory_type(ram: Any, motherboard: Any) -> ExtendedCompatibilityIssue | None:
    """RAM and motherboard must use the same DDR generation."""
    ram_type = spec_text(ram, "memory_type")
    mb_type = spec_text(motherboard, "memory_type")
    if ram_type is None or mb_type is None:
        return None

    if shares_entry(ram_type, mb_type):
        return None
    ram_norm, mb_norm = split_list(norm(ram_type)), split_list(norm(mb_type))

    ram_name = part_name(ram, "Your RAM")
    mb_name = part_name(motherboard, "Your motherboard")
    return make_issue(
        tier="hard",
        severity="error",
        type="Memory Type Mismatch",
        message=(
            f"Memory Type Mismatch: {ram_name} is {ram_norm} "
            f"but motherboard requires {mb_norm}"
        ),
        explanation=(
            f'"{ram_name}" is {ram_norm} memory, but "{mb_name}" only supports '
            f"{mb_norm}. The modules will not seat in the motherboard's DIMM slots."
        ),
        fix=(
            f"Option 1: Replace the RAM with {mb_norm} memory.\n\n"
            f"Option 2: Replace the motherboard with one that supports {ram_norm}."
        ),
        affected=["ram", "motherboard"],
        parts_involved=[ram_name, mb_name],
        spec_keys=["memory_type"],
        severity_explanation="Blocking error: the system will not detect this memory.",
        recommendation="DDR4 and DDR5 are keyed differently and are not interchangeable.",
    )


def check_gpu_clearance(gpu: Any, case: Any) -> ExtendedCompatibilityIssue | None:
    """GPU length and height must fit the case; every exceeded axis is reported."""
    gpu_length = _positive(gpu, "length_mm")
    gpu_height = _positive(gpu, "height_mm")
    max_length = _positive(case, "gpu_max_length_mm")
    # The case's cooler clearance stands in for interior height
    max_height = _positive(case, "cpu_cooler_height_mm")

    excess: list[tuple[str, float, float]] = []
    if gpu_length is not None and max_length is not None and gpu_length > max_length:
        excess.append(("length", gpu_length, max_length))
    if gpu_height is not None and max_height is not None and gpu_height > max_height:
        excess.append(("height", gpu_height, max_height))
    if not excess:
        return None

    gpu_name = part_name(gpu, "Your GPU")
    case_name = part_name(case, "Your case")
    summary = ", ".join(f"{dim} +{mm(need - room)}" for dim, need, room in excess)
    details = "\n".join(
        f"- {dim.capitalize()}: {mm(need)} (GPU) vs {mm(room)} (case), "
        f"{mm(need - room)} too {'long' if dim == 'length' else 'tall'}"
        for dim, need, room in excess
    )
    largest = max(need - room for _, need, room in excess)

    limits = []
    if max_length is not None:
        limits.append(f"max {mm(max_length)} length")
    if max_height is not None:
        limits.append(f"{mm(max_height)} height")

    return make_issue(
        tier="hard",
        severity="error",
        type="GPU Clearance Issue",
        message=f"GPU Too Large: {gpu_name} exceeds {case_name} clearance ({summary})",
        explanation=(
            f'"{gpu_name}" is physically too large to fit inside "{case_name}".\n{details}'
        ),
        fix=(
            f"Option 1: Choose a larger case with at least {mm(largest)} more clearance.\n\n"
            f"Option 2: Choose a smaller GPU that fits {case_name} ({', '.join(limits)})."
        ),
        affected=["gpu", "case"],
        parts_involved=[gpu_name, case_name],
        spec_keys=["length_mm", "height_mm", "gpu_max_length_mm", "cpu_cooler_height_mm"],
        severity_explanation="Blocking error: this GPU will not fit in this case.",
        recommendation=(
            "Check the case's maximum GPU length before choosing a graphics card."
        ),
    )


def check_cooler_clearance(cooler: Any, case: Any) -> ExtendedCompatibilityIssue | None:
    """Cooler height must not exceed the case's cooler clearance."""
    height = _positive(cooler, "height_mm")
    max_height = _positive(case, "cpu_cooler_height_mm")
    if height is None or max_height is None or height <= max_height:
        return None

    cooler_name = part_name(cooler, "Your cooler")
    case_name = part_name(case, "Your case")
    return make_issue(
        tier="hard",
        severity="error",
        type="Cooler Height Clearance Issue",
        message=(
            f"Cooler Too Tall: {cooler_name} ({mm(height)}) doesn't fit in "
            f"{case_name} (max {mm(max_height)})"
        ),
        explanation=(
            f'"{cooler_name}" is {mm(height - max_height)} too tall for "{case_name}" '
            "and will hit the side panel."
        ),
        fix=(
            f"Option 1: Choose a cooler under {mm(max_height)} tall.\n\n"
            f"Option 2: Choose a case that supports coolers up to {mm(height)}."
        ),
        affected=["cooler", "case"],
        parts_involved=[cooler_name, case_name],
        spec_keys=["height_mm", "cpu_cooler_height_mm"],
        severity_explanation="Blocking error: the cooler physically will not fit.",
        recommendation="Large air coolers and thick radiators need more vertical space.",
    )


def check_cooler_socket(cooler: Any, cpu: Any) -> ExtendedCompatibilityIssue | None:
    """The cooler's supported socket list must include the CPU socket."""
    supported = spec_text(cooler, "socket_compatibility")
    cpu_socket = spec_text(cpu, "socket")
    if supported is None or cpu_socket is None:
        return None

    socket = norm(cpu_socket)
    if listed(socket, supported):
        return None

    cooler_name = part_name(cooler, "Your cooler")
    cpu_name = part_name(cpu, "Your CPU")
    sockets = split_list(supported)
    return make_issue(
        tier="hard",
        severity="error",
        type="Cooler Socket Incompatibility",
        message=f"Cooler Incompatible: {cooler_name} doesn't support {socket} socket",
        explanation=(
            f'"{cooler_name}" has no mounting hardware for {socket} '
            f'(supports: {sockets}), so it cannot be mounted on "{cpu_name}".'
        ),
        fix=(
            f"Option 1: Choose a cooler that supports socket {socket}.\n\n"
            f"Option 2: Choose a CPU with a socket this cooler supports ({sockets})."
        ),
        affected=["cooler", "cpu"],
        parts_involved=[cooler_name, cpu_name],
        spec_keys=["socket_compatibility", "socket"],
        severity_explanation="Blocking error: the processor cannot be cooled.",
        recommendation=(
            "Many coolers ship brackets for several sockets, but some are "
            "exclusive to one platform."
        ),
    )


def check_motherboard_form_factor(motherboard: Any, case: Any) -> ExtendedCompatibilityIssue | None:
    """The case must list the motherboard's form factor."""
    board_ff = spec_text(motherboard, "form_factor")
    case_ffs = spec_text(case, "motherboard_form_factors")
    if board_ff is None or case_ffs is None:
        return None

    ff = norm(board_ff)
    if listed(ff, case_ffs):
        return None

    mb_name = part_name(motherboard, "Your motherboard")
    case_name = part_name(case, "Your case")
    supported = split_list(case_ffs)
    return make_issue(
        tier="hard",
        severity="error",
        type="Motherboard Form Factor Incompatibility",
        message=f"Motherboard Won't Fit: {mb_name} ({board_ff}) doesn't fit in {case_name}",
        explanation=(
            f'"{mb_name}" is a {board_ff} board, but "{case_name}" only supports '
            f"{supported}. The mounting holes will not line up."
        ),
        fix=(
            f"Option 1: Choose a {supported} motherboard.\n\n"
            f"Option 2: Choose a case that supports {ff} motherboards."
        ),
        affected=["motherboard", "case"],
        parts_involved=[mb_name, case_name],
        spec_keys=["form_factor", "motherboard_form_factors"],
        severity_explanation="Blocking error: the motherboard cannot be mounted.",
        recommendation="Common sizes are ATX, Micro-ATX and Mini-ITX.",
    )


def check_psu_form_factor(psu: Any, case: Any) -> ExtendedCompatibilityIssue | None:
    """The case's PSU bay must accept the PSU form factor."""
    psu_ff = spec_text(psu, "psu_form_factor_type")
    case_ff = spec_text(case, "psu_form_factor")
    if psu_ff is None or case_ff is None:
        return None

    ff = norm(psu_ff)
    if listed(ff, case_ff):
        return None

    psu_name = part_name(psu, "Your PSU")
    case_name = part_name(case, "Your case")
    supported = split_list(case_ff)
    return make_issue(
        tier="hard",
        severity="error",
        type="PSU Form Factor Incompatibility",
        message=f"PSU Won't Fit: {psu_name} ({psu_ff}) doesn't fit in {case_name}",
        explanation=(
            f'"{psu_name}" is a {psu_ff} power supply, but "{case_name}" only '
            f"accepts {supported} units."
        ),
        fix=(
            f"Option 1: Choose a {supported} PSU.\n\n"
            f"Option 2: Choose a case that supports {ff} power supplies."
        ),
        affected=["psu", "case"],
        parts_involved=[psu_name, case_name],
        spec_keys=["psu_form_factor_type", "psu_form_factor"],
        severity_explanation="Blocking error: the PSU will not fit in the case.",
        recommendation="ATX is the most common PSU size; SFX is the compact option.",
    )


def check_gpu_power_connectors(gpu: Any, psu: Any) -> ExtendedCompatibilityIssue | None:
    """The PSU must provide the auxiliary connectors the GPU requires.

    Spare 8-pin cables (6+2) cover 6-pin demand.  A 12VHPWR requirement is met
    natively or through the card's adapter from three 8-pin cables.
    """
    required = parse_power_connectors(get_spec_value(gpu, "power_connectors"))
    if required.is_empty:
        return None

    has_hpwr = get_spec_value(psu, "pcie_12vhpwr")
    count_8 = _count(psu, "pcie_8pin_count")
    count_6 = _count(psu, "pcie_6pin_count")

    missing: list[str] = []
    spare_8 = count_8 or 0

    if required.needs_12vhpwr and has_hpwr is not True:
        if count_8 is not None and count_8 >= HPWR_ADAPTER_8PIN:
            spare_8 -= HPWR_ADAPTER_8PIN
        elif has_hpwr is False or count_8 is not None:
            missing.append("12VHPWR")

    if required.needs_8pin:
        if count_8 is None:
            return None
        short = required.needs_8pin - spare_8
        if short > 0:
            missing.append(f"{short}x 8-pin")
        spare_8 = max(spare_8 - required.needs_8pin, 0)

    if required.needs_6pin:
        if count_6 is None and count_8 is None:
            return None
        short = required.needs_6pin - (count_6 or 0) - spare_8
        if short > 0:
            missing.append(f"{short}x 6-pin")

    if not missing:
        return None

    gpu_name = part_name(gpu, "Your GPU")
    psu_name = part_name(psu, "Your PSU")
    available = []
    if has_hpwr is not None:
        available.append(f"12VHPWR: {'yes' if has_hpwr else 'no'}")
    if count_8 is not None:
        available.append(f"{count_8}x 8-pin")
    if count_6 is not None:
        available.append(f"{count_6}x 6-pin")

    return make_issue(
        tier="hard",
        severity="error",
        type="Insufficient GPU Power Connectors",
        message=(
            f"Insufficient GPU Power Connectors: {gpu_name} needs {required.describe()}, "
            f"{psu_name} is missing {', '.join(missing)}"
        ),
        explanation=(
            f'"{gpu_name}" requires {required.describe()} but "{psu_name}" provides '
            f"{', '.join(available) or 'no PCIe connectors'}."
        ),
        fix=f"Choose a PSU that provides {required.describe()}.",
        affected=["gpu", "psu"],
        parts_involved=[gpu_name, psu_name],
        spec_keys=["power_connectors", "pcie_12vhpwr", "pcie_8pin_count", "pcie_6pin_count"],
        severity_explanation="Blocking error: the graphics card cannot be powered.",
        recommendation="Do not chain adapters or split one cable across several sockets.",
    )


def check_motherboard_power(motherboard: Any, psu: Any) -> ExtendedCompatibilityIssue | None:
    """The PSU must provide the 24-pin ATX motherboard connector."""
    if get_spec_value(psu, "motherboard_power_pins") is not False:
        return None

    mb_name = part_name(motherboard, "Your motherboard")
    psu_name = part_name(psu, "Your PSU")
    return make_issue(
        tier="hard",
        severity="error",
        type="Missing Motherboard Power Connector",
        message=f"Missing Motherboard Power Connector: {psu_name} has no 24-pin ATX connector",
        explanation=f'"{mb_name}" needs a 24-pin ATX connector, which "{psu_name}" lacks.',
        fix="Choose a standard ATX power supply with a 24-pin motherboard connector.",
        affected=["motherboard", "psu"],
        parts_involved=[mb_name, psu_name],
        spec_keys=["motherboard_power_pins"],
        severity_explanation="Blocking error: the motherboard cannot be powered.",
    )


def check_cpu_power(cpu: Any, psu: Any) -> ExtendedCompatibilityIssue | None:
    """The PSU must provide an EPS connector suitable for the CPU's TDP."""
    tdp = _positive(cpu, "tdp_watts") or _positive(cpu, "tdp_w")
    count_4 = _count(psu, "cpu_power_4pin")
    count_8 = _count(psu, "cpu_power_8pin")
    if tdp is None or (count_4 is None and count_8 is None):
        return None

    if tdp <= CPU_4PIN_MAX_TDP_W:
        if (count_4 or 0) + (count_8 or 0) >= 1:
            return None
        needed = "a 4-pin or 8-pin CPU connector"
    else:
        if (count_8 or 0) >= 1:
            return None
        needed = "an 8-pin CPU connector"

    cpu_name = part_name(cpu, "Your CPU")
    psu_name = part_name(psu, "Your PSU")
    recommendation = ""
    if tdp > CPU_DUAL_8PIN_TDP_W:
        recommendation = (
            f"CPUs above {watts(CPU_DUAL_8PIN_TDP_W)} benefit from two 8-pin EPS "
            "connectors when overclocking."
        )
    return make_issue(
        tier="hard",
        severity="error",
        type="Insufficient CPU Power Connectors",
        message=(
            f"Insufficient CPU Power Connectors: {cpu_name} ({watts(tdp)}) needs "
            f"{needed}"
        ),
        explanation=(
            f'"{cpu_name}" has a {watts(tdp)} TDP and needs {needed}, '
            f'which "{psu_name}" does not provide.'
        ),
        fix=f"Choose a PSU with {needed}.",
        affected=["cpu", "psu"],
        parts_involved=[cpu_name, psu_name],
        spec_keys=["tdp_watts", "cpu_power_4pin", "cpu_power_8pin"],
        severity_explanation="Blocking error: the processor cannot be powered.",
        recommendation=recommendation,
    )


HARD_CHECKS: tuple[CatalogCheck, ...] = (
    CatalogCheck("cpu_socket", "hard", ("cpu", "motherboard"), check_cpu_socket,
                 "CPU and motherboard sockets match"),
    CatalogCheck("memory_type", "hard", ("ram", "motherboard"), check_memory_type,
                 "RAM and motherboard memory types match"),
    CatalogCheck("gpu_clearance", "hard", ("gpu", "case"), check_gpu_clearance,
                 "GPU fits inside the case"),
    CatalogCheck("cooler_clearance", "hard", ("cooler", "case"), check_cooler_clearance,
                 "Cooler fits under the side panel"),
    CatalogCheck("cooler_socket", "hard", ("cooler", "cpu"), check_cooler_socket,
                 "Cooler mounts on the CPU socket"),
    CatalogCheck("motherboard_form_factor", "hard", ("motherboard", "case"),
                 check_motherboard_form_factor, "Case accepts the motherboard size"),
    CatalogCheck("psu_form_factor", "hard", ("psu", "case"), check_psu_form_factor,
                 "Case accepts the PSU size"),
    CatalogCheck("gpu_power_connectors", "hard", ("gpu", "psu"), check_gpu_power_connectors,
                 "PSU provides the GPU's PCIe power connectors"),
    CatalogCheck("motherboard_power", "hard", ("motherboard", "psu"), check_motherboard_power,
                 "PSU provides the 24-pin ATX connector"),
    CatalogCheck("cpu_power", "hard", ("cpu", "psu"), check_cpu_power,
                 "PSU provides a suitable CPU EPS connector"),
)
