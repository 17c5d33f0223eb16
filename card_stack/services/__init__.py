"""
Services package for the card stack.
Collaborators of the stack core: image providers, observable item
sources, logging, configuration and their wiring.
"""

# Interfaces
from .interfaces import (
    ChangeKind, ListChange, ISubscription, IImageProvider, IItemSource,
    IRenderSurface, IEventBus, ILogger, IConfigService
)

# Concrete implementations
from .logging_service import LoggingService, LogLevel, NullLogger, MemoryLogger
from .event_bus import EventBus, Subscription
from .item_model import CardListModel
from .image_provider import DirectoryImageProvider
from .config_service import ConfigService, AppConfig, StackConfig, UIConfig
from .container import ServiceContainer, configure_services

__all__ = [
    # Interfaces
    'ChangeKind', 'ListChange', 'ISubscription', 'IImageProvider', 'IItemSource',
    'IRenderSurface', 'IEventBus', 'ILogger', 'IConfigService',

    # Implementations
    'LoggingService', 'EventBus', 'Subscription', 'CardListModel',
    'DirectoryImageProvider', 'ConfigService',

    # Configuration classes
    'AppConfig', 'StackConfig', 'UIConfig',

    # Logging utilities
    'LogLevel', 'NullLogger', 'MemoryLogger',

    # Dependency injection
    'ServiceContainer', 'configure_services',
]
