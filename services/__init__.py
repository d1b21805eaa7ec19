"""
Services package for the Discord bot.

This package contains the service classes behind the temporary voice channel
lifecycle: session tracking, the managed channel registry, name allocation,
voice statistics, welcome audio and voice activity notifications.
"""

from .activity_log_service import VoiceActivityLogger
from .audio_service import WelcomeAudioService
from .base import BaseService
from .channel_registry import ChannelRegistry
from .name_allocator import NameAllocator
from .service_container import ServiceContainer
from .session_tracker import SessionTracker
from .stats_service import StatsService
from .voice_service import VoiceService, classify_transition

__all__ = [
    "BaseService",
    "ChannelRegistry",
    "NameAllocator",
    "ServiceContainer",
    "SessionTracker",
    "StatsService",
    "VoiceActivityLogger",
    "VoiceService",
    "WelcomeAudioService",
    "classify_transition",
]
