import json
from pathlib import Path

import pytest

from card_stack.services.config_service import ConfigService
from card_stack.services.container import ServiceContainer, configure_services
from card_stack.services.image_provider import DirectoryImageProvider
from card_stack.services.interfaces import IConfigService, IImageProvider, ILogger
from card_stack.services.logging_service import LoggingService, NullLogger


def test_default_wiring(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"stack": {"image_dir": str(tmp_path), "image_extension": ".png"}}))
    container = configure_services(config_path=config_path)

    logger = container.get(ILogger)
    assert isinstance(logger, LoggingService)
    assert container.get(ILogger) is logger
    assert isinstance(container.get(IConfigService), ConfigService)

    provider = container.get(IImageProvider)
    assert isinstance(provider, DirectoryImageProvider)
    assert provider.image_dir == Path(tmp_path)
    assert provider.path_for("moat").name == "moat.png"


def test_registered_instance_wins(tmp_path):
    container = configure_services(config_path=tmp_path / "config.json")
    container.register_instance(ILogger, NullLogger())
    assert isinstance(container.get(ILogger), NullLogger)


def test_unregistered_service():
    with pytest.raises(ValueError):
        ServiceContainer().get(ILogger)


def test_circular_dependency():
    container = ServiceContainer()

    def make_logger(config: IConfigService) -> ILogger:
        return NullLogger()

    def make_config(logger: ILogger) -> IConfigService:
        return ConfigService(logger)

    container.register_factory(ILogger, make_logger)
    container.register_factory(IConfigService, make_config)
    with pytest.raises(ValueError, match="Circular"):
        container.get(ILogger)
