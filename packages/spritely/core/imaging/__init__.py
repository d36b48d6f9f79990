"""Image collaborators: inspection, composition and optimisation."""

from spritely.core.imaging.optimise import DEFAULT_TOOLS, ExternalToolOptimiser, NullOptimiser
from spritely.core.imaging.pillow import PillowImageComposer, PillowImageInspector
from spritely.core.imaging.protocols import ImageComposer, ImageInspector, ImageOptimiser

__all__ = [
    # Protocols
    "ImageInspector",
    "ImageComposer",
    "ImageOptimiser",
    # Implementations
    "PillowImageInspector",
    "PillowImageComposer",
    "ExternalToolOptimiser",
    "NullOptimiser",
    "DEFAULT_TOOLS",
]
