from .keys import Keyed, VKey, reference_for, vkey_for
from .trid import Trid

__all__ = [
    "Keyed",
    "Trid",
    "VKey",
    "reference_for",
    "vkey_for",
]
