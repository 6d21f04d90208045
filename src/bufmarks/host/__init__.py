"""Editor host integration: collaborator contracts and controller."""

from .collaborators import CursorMover, EffectRecorder, MarkerRenderer, Notifier
from .controller import BookmarkController

__all__ = ["BookmarkController", "CursorMover", "EffectRecorder", "MarkerRenderer", "Notifier"]
