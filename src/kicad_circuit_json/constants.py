"""Global constants for the KiCad → Circuit JSON converter."""

# Geometry tolerances
POINT_TOLERANCE = 0.001
"""Distance (mm) under which two endpoints are considered the same point."""

COLLINEAR_EPSILON = 1e-10
"""Determinant magnitude below which three arc points are treated as collinear."""

# Tessellation
DEFAULT_ARC_SEGMENTS = 8
"""Number of straight segments used to approximate a three-point arc."""

DEFAULT_CIRCLE_SEGMENTS = 16
"""Number of straight segments used to approximate a full circle."""

# Coordinate systems
SCHEMATIC_SCALE = 1 / 15
"""Scale from KiCad schematic millimetres to Circuit JSON schematic units."""

# Silkscreen
SILKSCREEN_FONT_SCALE = 1.5
"""Multiplier from KiCad font height to Circuit JSON font size."""

DEFAULT_STROKE_WIDTH = 0.15
"""Stroke width (mm) for silkscreen graphics that do not declare one."""

SILKSCREEN_FONT = "tscircuit2024"
"""Font name attached to emitted silkscreen text."""

# Holes and vias
DEFAULT_VIA_DIAMETER = 0.8
"""Outer via diameter (mm) when the via has no size."""

DEFAULT_VIA_DRILL = 0.4
"""Via hole diameter (mm) when the via has no drill."""

DEFAULT_PLATED_DRILL = 0.8
"""Plated-hole drill diameter (mm) when the pad has no drill."""

DEFAULT_NPTH_DRILL = 1.0
"""Non-plated hole diameter (mm) when the pad has no drill."""

# Nets
UNCONNECTED_NET = 0
"""KiCad net number reserved for "no connection"."""
