"""Instruction statistics panel: formats per-instruction execution counts."""

from __future__ import annotations


# Instruction category definitions for grouping.
_FLOW_MNEMONICS: set[str] = {
    "NOP", "JP", "JP.V0", "CALL", "RET",
    "SE", "SNE", "SE.V", "SNE.V",
}

_ALU_MNEMONICS: set[str] = {
    "LD", "ADD", "RND",
    "LD.V", "OR", "AND", "XOR", "ADD.V", "SUB", "SHR", "SUBN", "SHL",
}

_MEMORY_MNEMONICS: set[str] = {
    "LD.I", "ADD.I", "LD.F", "BCD", "STORE", "LOAD",
}

_DISPLAY_MNEMONICS: set[str] = {"CLS", "DRW"}

_IO_MNEMONICS: set[str] = {
    "SKP", "SKNP", "LD.K", "LD.DT", "SET.DT", "SET.ST",
}

# Category definitions: (label, mnemonic set)
_CATEGORIES: list[tuple[str, set[str]]] = [
    ("Flow", _FLOW_MNEMONICS),
    ("ALU", _ALU_MNEMONICS),
    ("Memory", _MEMORY_MNEMONICS),
    ("Display", _DISPLAY_MNEMONICS),
    ("I/O", _IO_MNEMONICS),
]


def _categorize(mnemonic: str) -> str:
    """Return the category label for a mnemonic, or "Other" if unknown."""
    for label, mnemonics in _CATEGORIES:
        if mnemonic in mnemonics:
            return label
    return "Other"


def format_instruction_stats(stats: dict[str, int], top_n: int = 8) -> str:
    """Format instruction execution statistics for display in a Rich panel.

    Shows the top N instructions by count with percentage of total,
    followed by category totals.

    Args:
        stats: Dict mapping instruction mnemonic to execution count.
        top_n: Maximum number of individual instructions to show.

    Returns:
        A multi-line string suitable for display.
    """
    if not stats:
        return "No instructions executed."

    total = sum(stats.values())
    lines: list[str] = [f"Total: {total:,}"]

    sorted_stats = sorted(stats.items(), key=lambda x: x[1], reverse=True)
    shown = sorted_stats[:top_n]
    max_name_len = max(len(name) for name, _ in shown)

    for name, count in shown:
        pct = count / total * 100
        lines.append(f"{name.ljust(max_name_len)} {count:>8,} ({pct:5.1f}%)")

    if len(sorted_stats) > top_n:
        rest_count = sum(c for _, c in sorted_stats[top_n:])
        rest_pct = rest_count / total * 100
        lines.append(f"{'...'.ljust(max_name_len)} {rest_count:>8,} ({rest_pct:5.1f}%)")

    cat_totals: dict[str, int] = {}
    for name, count in stats.items():
        cat = _categorize(name)
        cat_totals[cat] = cat_totals.get(cat, 0) + count

    lines.append("")
    for cat in ["Flow", "ALU", "Memory", "Display", "I/O", "Other"]:
        if cat in cat_totals:
            pct = cat_totals[cat] / total * 100
            lines.append(f"{cat}: {cat_totals[cat]:,} ({pct:.0f}%)")

    return "\n".join(lines)
