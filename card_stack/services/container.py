"""
Service container for the card stack.
Lazily builds singletons from factories whose parameters are filled in by
type annotation, so a factory simply asks for the services it needs.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Type, TypeVar, get_type_hints
import inspect

from .config_service import ConfigService
from .image_provider import DirectoryImageProvider
from .interfaces import IConfigService, IImageProvider, ILogger
from .logging_service import LoggingService, LogLevel

T = TypeVar("T")


class ServiceContainer:
    """Dependency injection container."""

    def __init__(self):
        self._factories: Dict[str, Callable[..., Any]] = {}
        self._instances: Dict[str, Any] = {}
        self._building: set[str] = set()

    def _get_service_key(self, service_type: Type) -> str:
        return f"{service_type.__module__}.{service_type.__name__}"

    def register_factory(self, service_type: Type[T], factory: Callable[..., T]) -> "ServiceContainer":
        key = self._get_service_key(service_type)
        self._factories[key] = factory
        self._instances.pop(key, None)
        return self

    def register_instance(self, service_type: Type[T], instance: T) -> "ServiceContainer":
        self._instances[self._get_service_key(service_type)] = instance
        return self

    def is_registered(self, service_type: Type) -> bool:
        key = self._get_service_key(service_type)
        return key in self._factories or key in self._instances

    def get(self, service_type: Type[T]) -> T:
        key = self._get_service_key(service_type)
        if key in self._instances:
            return self._instances[key]
        if key not in self._factories:
            raise ValueError(f"Service {service_type.__name__} is not registered")
        if key in self._building:
            raise ValueError(f"Circular dependency detected for service {service_type.__name__}")

        self._building.add(key)
        try:
            instance = self._call_factory(self._factories[key])
        finally:
            self._building.discard(key)
        self._instances[key] = instance
        return instance

    def _call_factory(self, factory: Callable[..., Any]) -> Any:
        hints = get_type_hints(factory)
        kwargs: Dict[str, Any] = {}
        for name, param in inspect.signature(factory).parameters.items():
            dependency = hints.get(name)
            if isinstance(dependency, type) and self.is_registered(dependency):
                kwargs[name] = self.get(dependency)
            elif param.default is inspect.Parameter.empty:
                raise ValueError(f"Cannot resolve parameter '{name}' of {factory.__name__}")
        return factory(**kwargs)


def configure_services(config_path: Optional[Path] = None, log_file: Optional[Path] = None) -> ServiceContainer:
    """Standard wiring: logger -> config -> image provider."""
    container = ServiceContainer()

    def make_logger() -> ILogger:
        return LoggingService("card_stack", log_file, LogLevel.INFO, LogLevel.DEBUG)

    def make_config(logger: ILogger) -> IConfigService:
        return ConfigService(logger, config_path)

    def make_provider(config: IConfigService, logger: ILogger) -> IImageProvider:
        image_dir = config.get_setting("stack.image_dir") or Path.cwd() / "images"
        extension = config.get_setting("stack.image_extension", ".jpg")
        return DirectoryImageProvider(Path(image_dir), extension, logger)

    container.register_factory(ILogger, make_logger)
    container.register_factory(IConfigService, make_config)
    container.register_factory(IImageProvider, make_provider)
    return container
