"""SWC morphological type tags for traced paths.

Codes and labels follow the neuronland SWC specification. Fork point and end
point are redundant legacy tags; they are kept so files using them can still
be read and written back unchanged, but they are left out of the listings
offered to users.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import List, Union

_LOGGER = logging.getLogger(__name__)


class SWCType(IntEnum):
    UNDEFINED = 0
    SOMA = 1
    AXON = 2
    DENDRITE = 3
    APICAL_DENDRITE = 4
    FORK_POINT = 5  # redundant
    END_POINT = 6  # redundant
    CUSTOM = 7


SWC_LABELS = {
    SWCType.UNDEFINED: "undefined",
    SWCType.SOMA: "soma",
    SWCType.AXON: "axon",
    SWCType.DENDRITE: "(basal) dendrite",
    SWCType.APICAL_DENDRITE: "apical dendrite",
    SWCType.FORK_POINT: "fork point",
    SWCType.END_POINT: "end point",
    SWCType.CUSTOM: "custom",
}

_REDUNDANT = (SWCType.FORK_POINT, SWCType.END_POINT)


def _capitalize(label: str) -> str:
    """Title-case every letter that follows a non-letter."""
    out = []
    capitalize_next = True
    for ch in label:
        if not ch.isalpha():
            capitalize_next = True
        elif capitalize_next:
            ch = ch.upper()
            capitalize_next = False
        out.append(ch)
    return "".join(out)


def coerce_swc_type(value: Union[int, SWCType]) -> SWCType:
    """Convert an integer code to `SWCType`.

    Unknown non-negative codes are treated as undefined.

    Raises:
        ValueError: If `value` is negative.
    """
    code = int(value)
    if code < 0:
        raise ValueError(f"Unknown SWC type {code}")
    try:
        return SWCType(code)
    except ValueError:
        _LOGGER.debug("SWC code %d not recognized; using undefined", code)
        return SWCType.UNDEFINED


def swc_type_name(swc_type: Union[int, SWCType], capitalized: bool = False) -> str:
    """Return the label of an SWC code ("undefined" for unrecognized codes)."""
    try:
        label = SWC_LABELS[SWCType(int(swc_type))]
    except ValueError:
        label = SWC_LABELS[SWCType.UNDEFINED]
    return _capitalize(label) if capitalized else label


def swc_type_names() -> List[str]:
    """Labels of the non-redundant SWC types, in code order."""
    return [SWC_LABELS[t] for t in swc_types()]


def swc_types() -> List[SWCType]:
    """Non-redundant SWC types, in code order."""
    return [t for t in SWCType if t not in _REDUNDANT]


def swc_type_from_label(label: str) -> SWCType:
    """Reverse lookup of `swc_type_name`, case-insensitive.

    Raises:
        ValueError: If `label` matches no known type.
    """
    wanted = label.strip().lower()
    for swc_type, known in SWC_LABELS.items():
        if known == wanted:
            return swc_type
    raise ValueError(f"Unknown SWC type label {label!r}")
