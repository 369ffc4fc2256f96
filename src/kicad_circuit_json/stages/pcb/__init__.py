"""Board passes."""

from .footprints import CollectFootprintsStage
from .graphics import CollectGraphicsStage
from .nets import CollectNetsStage
from .source_traces import CollectSourceTracesStage
from .vias import CollectViasStage
from .zones import CollectZonesStage

__all__ = [
    "CollectFootprintsStage",
    "CollectGraphicsStage",
    "CollectNetsStage",
    "CollectSourceTracesStage",
    "CollectViasStage",
    "CollectZonesStage",
]
