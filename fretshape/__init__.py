"""fretshape: chord voicing and fingering engine for fretted instruments."""

__version__ = "0.1.0"
