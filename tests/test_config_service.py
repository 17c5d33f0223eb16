import json

import pytest
import yaml

from card_stack.core.errors import InvalidConfigurationError
from card_stack.services.config_service import ConfigService, StackConfig
from card_stack.services.logging_service import MemoryLogger


@pytest.fixture
def logger():
    return MemoryLogger()


def test_defaults_when_file_missing(tmp_path, logger):
    service = ConfigService(logger, tmp_path / "config.json")
    assert service.get_setting("stack.vgap") == 55
    assert service.get_setting("stack.card_width") == 150
    assert service.get_setting("stack.image_extension") == ".jpg"
    assert service.get_setting("ui.cards") == ["Bazaar", "Market", "Bazaar", "Festival", "PirateShip"]
    assert service.get_setting("stack.missing", "fallback") == "fallback"
    assert logger.get_entries("INFO")


def test_loads_yaml(tmp_path, logger):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"stack": {"vgap": 25, "image_dir": "/cards", "image_extension": "png"}}))
    service = ConfigService(logger, path)
    assert service.stack.vgap == 25
    assert service.stack.image_dir == "/cards"
    assert service.stack.image_extension == ".png"
    assert service.ui.window_title == "Card Stack"


@pytest.mark.parametrize("stack", [
    {"vgap": 0}, {"vgap": -3}, {"card_width": 0}, {"colour": "red"},
    {"image_extension": 5}, {"image_dir": 12},
])
def test_invalid_file_values_raise(tmp_path, logger, stack):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"stack": stack}))
    with pytest.raises(InvalidConfigurationError):
        ConfigService(logger, path)


def test_malformed_file_falls_back_to_defaults(tmp_path, logger):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    service = ConfigService(logger, path)
    assert service.stack == StackConfig()
    assert len(logger.get_entries("ERROR")) == 1


def test_set_setting_validates(tmp_path, logger):
    service = ConfigService(logger, tmp_path / "config.json")
    service.set_setting("stack.vgap", 30)
    assert service.get_setting("stack.vgap") == 30
    with pytest.raises(InvalidConfigurationError):
        service.set_setting("stack.vgap", 0)
    assert service.get_setting("stack.vgap") == 30
    with pytest.raises(KeyError):
        service.set_setting("stack.nope", 1)
    with pytest.raises(KeyError):
        service.set_setting("vgap", 1)


def test_save_and_reload(tmp_path, logger):
    path = tmp_path / "nested" / "config.json"
    service = ConfigService(logger, path)
    service.set_setting("ui.cards", ["Moat"])
    assert service.save_config()
    reloaded = ConfigService(logger, path)
    assert reloaded.get_setting("ui.cards") == ["Moat"]


def test_save_config_with_dict(tmp_path, logger):
    service = ConfigService(logger, tmp_path / "config.json")
    data = service.load_config()
    data["stack"]["vgap"] = 40
    assert service.save_config(data)
    assert service.stack.vgap == 40
    data["stack"]["vgap"] = -1
    with pytest.raises(InvalidConfigurationError):
        service.save_config(data)
    assert service.stack.vgap == 40


def test_export_yaml(tmp_path, logger):
    service = ConfigService(logger, tmp_path / "config.json")
    target = tmp_path / "export.yml"
    assert service.export_config(target)
    assert yaml.safe_load(target.read_text())["stack"]["vgap"] == 55
