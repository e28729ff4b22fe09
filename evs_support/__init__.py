"""EVS support helpers wiring configuration and enumeration to the core."""

__all__ = [
    "camera_config",
    "enumerator",
    "runtime",
    "utils",
]
