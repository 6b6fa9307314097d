"""Interactive Bézier spectrum editor with chromaticity read-out."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("spectralcurve")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
