"""
Voice Package

Manages temporary voice channels through a service-based architecture.
Contains the event listeners and the statistics command.
"""

from .commands import VoiceCommands
from .events import VoiceEvents

__all__ = ["VoiceCommands", "VoiceEvents"]
