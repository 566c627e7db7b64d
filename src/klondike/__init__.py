"""Three-draw Klondike rules engine."""

__version__ = "0.1.0"
