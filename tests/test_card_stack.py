from unittest.mock import Mock

import pytest

from card_stack.core.card_stack import CardStack
from card_stack.core.errors import ImageNotFoundError, InvalidConfigurationError
from card_stack.core.geometry import Insets, Point, Size
from card_stack.services.item_model import CardListModel

from conftest import FakeProvider


def test_requires_a_source(provider):
    with pytest.raises(ValueError):
        CardStack(None, provider)


def test_default_vgap(kingdom, provider):
    assert CardStack(kingdom, provider).vgap == 55


def test_preferred_size_scenario(kingdom, provider):
    stack = CardStack(kingdom, provider, vgap=50)
    assert stack.preferred_size() == Size(150, 300)
    stack.insets = Insets(top=5, left=5, bottom=5, right=5)
    assert stack.preferred_size() == Size(160, 310)


def test_pinned_size_wins_without_touching_images(kingdom, provider):
    stack = CardStack(kingdom, provider, vgap=50)
    stack.pinned_size = Size(10, 20)
    assert stack.preferred_size() == Size(10, 20)
    assert provider.calls == []
    stack.pinned_size = None
    assert stack.preferred_size() == Size(150, 300)


def test_preferred_size_follows_current_items(kingdom, provider):
    stack = CardStack(kingdom, provider, vgap=50)
    kingdom.append("Village")
    assert stack.preferred_size() == Size(150, 350)
    kingdom.clear()
    assert stack.preferred_size() == Size(0, 0)


def test_render_draws_every_card_bottom_up(kingdom, provider, surface):
    stack = CardStack(kingdom, provider, vgap=50)
    stack.insets = Insets(top=3, left=4)
    stack.render(surface)
    assert [(x, y) for _, x, y in surface.draws] == [(4, 3), (4, 53), (4, 103)]
    assert surface.draws[2][0] is stack.cache.resolve("Festival")


def test_render_stops_at_missing_image(kingdom, provider, surface):
    provider.missing.add("bazaar")
    stack = CardStack(kingdom, provider, vgap=50)
    with pytest.raises(ImageNotFoundError):
        stack.render(surface)
    assert len(surface.draws) == 1


def test_preview_subtracts_insets(kingdom, provider):
    stack = CardStack(kingdom, provider, vgap=50)
    stack.insets = Insets(top=10, left=20)
    preview = stack.preview_at(Point(95, 130))
    assert preview.index == 2 and preview.item == "Festival"
    assert stack.preview_at(Point(15, 130)) is None


def test_preview_scenarios(kingdom, provider):
    stack = CardStack(kingdom, provider, vgap=50)
    assert stack.preview_at(Point(75, 120)).item == "Festival"
    assert stack.preview_at(Point(75, 500)) is None


def test_preview_on_empty_source(provider):
    stack = CardStack(CardListModel(), provider)
    assert stack.preview_at(Point(0, 0)) is None
    assert stack.preview_at(Point(10, 1000)) is None


@pytest.mark.parametrize("bad", [0, -5])
def test_invalid_vgap_keeps_previous(kingdom, provider, repaints, bad):
    stack = CardStack(kingdom, provider, vgap=40, on_repaint=repaints)
    before = len(repaints.calls)
    with pytest.raises(InvalidConfigurationError):
        stack.vgap = bad
    assert stack.vgap == 40
    assert len(repaints.calls) == before


def test_invalid_vgap_in_constructor(kingdom, provider):
    with pytest.raises(InvalidConfigurationError):
        CardStack(kingdom, provider, vgap=0)


def test_vgap_change_repaints(kingdom, provider, repaints):
    stack = CardStack(kingdom, provider, on_repaint=repaints)
    before = len(repaints.calls)
    stack.vgap = 25
    assert stack.vgap == 25
    assert len(repaints.calls) == before + 1
    assert stack.preferred_size() == Size(150, 250)


def test_every_change_kind_repaints(kingdom, provider):
    on_repaint = Mock()
    CardStack(kingdom, provider, on_repaint=on_repaint)
    on_repaint.reset_mock()

    kingdom.append("Village")
    kingdom.pop()
    kingdom[0] = "Chapel"
    kingdom.replace(["Moat"])
    assert on_repaint.call_count == 4


def test_replacing_source_drops_old_subscription(kingdom, provider):
    on_repaint = Mock()
    stack = CardStack(kingdom, provider, on_repaint=on_repaint)
    other = CardListModel(["Moat"])

    stack.set_source(other)
    assert stack.source is other
    assert kingdom.subscriber_count() == 0
    assert other.subscriber_count() == 1

    on_repaint.reset_mock()
    kingdom.append("Village")
    on_repaint.assert_not_called()
    other.append("Village")
    on_repaint.assert_called_once()


def test_cache_survives_source_replacement(kingdom, provider):
    stack = CardStack(kingdom, provider, vgap=50)
    stack.preferred_size()
    festival = stack.cache.resolve("Festival")

    stack.set_source(CardListModel(["Festival", "Market"]))
    stack.preferred_size()
    assert stack.cache.resolve("Festival") is festival
    assert sorted(provider.calls) == ["bazaar", "festival", "market"]


def test_mutations_do_not_reload_images(kingdom, provider, surface):
    stack = CardStack(kingdom, provider)
    stack.render(surface)
    kingdom.replace(["Festival", "Festival", "Market"])
    kingdom.append("Bazaar")
    stack.render(surface)
    assert len(provider.calls) == 3


def test_close_stops_repaints(kingdom, provider):
    on_repaint = Mock()
    stack = CardStack(kingdom, provider, on_repaint=on_repaint)
    stack.close()
    stack.close()
    on_repaint.reset_mock()
    kingdom.append("Village")
    on_repaint.assert_not_called()
    assert kingdom.subscriber_count() == 0


def test_custom_card_width(kingdom):
    provider = FakeProvider(default=(300, 400))
    stack = CardStack(kingdom, provider, vgap=50, card_width=150)
    assert stack.preferred_size() == Size(150, 300)
