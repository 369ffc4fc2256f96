"""Converter configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

from . import constants
from .exceptions import ValidationError

ENV_PREFIX = "KICAD_CJ_"


@dataclass(frozen=True)
class ConverterConfig:
    """Tunable knobs for one conversion run."""

    arc_segments: int = constants.DEFAULT_ARC_SEGMENTS
    circle_segments: int = constants.DEFAULT_CIRCLE_SEGMENTS
    point_tolerance: float = constants.POINT_TOLERANCE  # mm
    schematic_scale: float = constants.SCHEMATIC_SCALE
    center_board: bool = True  # move the Edge.Cuts center to the origin
    silkscreen_font_scale: float = constants.SILKSCREEN_FONT_SCALE
    default_stroke_width: float = constants.DEFAULT_STROKE_WIDTH  # mm
    default_via_diameter: float = constants.DEFAULT_VIA_DIAMETER  # mm
    default_via_drill: float = constants.DEFAULT_VIA_DRILL  # mm
    default_plated_drill: float = constants.DEFAULT_PLATED_DRILL  # mm
    default_npth_drill: float = constants.DEFAULT_NPTH_DRILL  # mm

    def __post_init__(self) -> None:
        if self.arc_segments < 1:
            raise ValidationError("arc_segments must be at least 1", field="arc_segments")
        if self.circle_segments < 3:
            raise ValidationError(
                "circle_segments must be at least 3", field="circle_segments"
            )
        if self.point_tolerance <= 0:
            raise ValidationError("point_tolerance must be positive", field="point_tolerance")
        if self.schematic_scale <= 0:
            raise ValidationError("schematic_scale must be positive", field="schematic_scale")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ConverterConfig:
        """Build a config, overriding defaults from KICAD_CJ_* variables.

        ``KICAD_CJ_ARC_SEGMENTS=16`` sets ``arc_segments``, and so on.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            try:
                if f.type == "bool":
                    overrides[f.name] = raw.strip().lower() in ("1", "true", "yes", "on")
                elif f.type == "int":
                    overrides[f.name] = int(raw)
                else:
                    overrides[f.name] = float(raw)
            except ValueError as e:
                raise ValidationError(
                    f"Invalid value for {ENV_PREFIX + f.name.upper()}: {raw!r}", field=f.name
                ) from e
        return cls(**overrides)  # type: ignore[arg-type]
