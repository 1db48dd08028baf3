"""Native functions available to every Lox program."""

import time
from typing import Dict, List

from lox.lox_value import LoxNativeFunction, LoxNumber, LoxValue


def _clock(_arguments: List[LoxValue]) -> LoxValue:
    """Implement clock(): wall-clock time in seconds."""
    return LoxNumber(time.time())


def create_builtins() -> Dict[str, LoxNativeFunction]:
    """Create the native functions, keyed by the global name they are bound to."""
    return {
        'clock': LoxNativeFunction('clock', 0, _clock),
    }
