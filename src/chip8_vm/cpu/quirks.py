"""Compatibility switches for behavior that differs between CHIP-8 interpreters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Quirks:
    """Interpreter quirks. The defaults follow the common modern behavior.

    Attributes:
        shift_uses_vy: 8xy6/8xyE shift Vy into Vx instead of shifting Vx.
        logic_resets_vf: 8xy1/8xy2/8xy3 clear VF after the operation.
        memory_increments_index: Fx55/Fx65 leave I pointing past the last
            register transferred.
    """

    shift_uses_vy: bool = False
    logic_resets_vf: bool = False
    memory_increments_index: bool = False


# CLI names ("shift-vy") -> field names ("shift_uses_vy")
QUIRK_NAMES: dict[str, str] = {
    "shift-vy": "shift_uses_vy",
    "logic-vf": "logic_resets_vf",
    "memory-index": "memory_increments_index",
}


def quirks_from_names(names: list[str]) -> Quirks:
    """Build a Quirks with the named switches enabled.

    Args:
        names: CLI quirk names, e.g. ``["shift-vy", "logic-vf"]``.

    Returns:
        A Quirks instance.

    Raises:
        ValueError: If a name is not a known quirk.
    """
    enabled: dict[str, bool] = {}
    for name in names:
        field_name = QUIRK_NAMES.get(name)
        if field_name is None:
            known = ", ".join(sorted(QUIRK_NAMES))
            raise ValueError(f"Unknown quirk '{name}' (known: {known})")
        enabled[field_name] = True
    return Quirks(**enabled)
