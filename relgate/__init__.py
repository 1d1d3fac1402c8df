"""Release resolution and gating for tagged builds."""

__version__ = "0.1.0"
