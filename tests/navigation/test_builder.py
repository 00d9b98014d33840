"""Tests for MenuRegistry, MenuBuilder, MenuValidation and NavigationRefresh."""

from __future__ import annotations

import itertools
import logging

import pytest

from siteext.domain.menu import ActiveMatch, MenuItem
from siteext.errors import ConfigurationError
from siteext.host.platform import HostPlatform
from siteext.navigation.builder import (
    MenuBuilder,
    MenuRegistry,
    MenuValidation,
    NavigationRefresh,
)
from siteext.navigation.resolver import NavigationResolver
from siteext.navigation.slot import MenuSlot

HOME = MenuItem(
    label="menu.home", scope="decidim", destination="root", position=1, active=ActiveMatch.EXACT
)
PROCESSES = MenuItem(
    label="menu.processes",
    scope="decidim",
    destination="processes",
    position=2,
    active=ActiveMatch.INCLUSIVE,
)
MORE = MenuItem(
    label="menu.more_information",
    scope="decidim",
    destination="pages",
    position=3,
    active=ActiveMatch.INCLUSIVE,
)


@pytest.fixture
def resolver(host: HostPlatform) -> NavigationResolver:
    return NavigationResolver(host)


@pytest.fixture
def builder(host: HostPlatform, resolver: NavigationResolver) -> MenuBuilder:
    return MenuBuilder(resolver, host)


class TestMenuBuilder:
    def test_main_menu_scenario(self, builder: MenuBuilder, resolver: NavigationResolver) -> None:
        model = builder.build([HOME, PROCESSES, MORE])
        assert model.labels == ["Home", "Processes", "More information"]
        assert [entry.href for entry in model] == ["/", "/processes", "/pages"]

        active = [entry.label for entry in model if resolver.is_active(entry, "/processes/42")]
        assert active == ["Processes"]

    @pytest.mark.parametrize("order", list(itertools.permutations([HOME, PROCESSES, MORE])))
    def test_sorts_by_position(self, builder: MenuBuilder, order: tuple[MenuItem, ...]) -> None:
        model = builder.build(order)
        assert [entry.position for entry in model] == [1, 2, 3]

    def test_ties_keep_input_order(self, builder: MenuBuilder) -> None:
        items = [
            MenuItem(label="search", destination="search", position=5),
            MenuItem(label="a", destination="assemblies", position=2),
            MenuItem(label="p", destination="pages", position=5),
            MenuItem(label="r", destination="root", position=2),
        ]
        model = builder.build(items)
        assert [entry.destination for entry in model] == ["assemblies", "root", "search", "pages"]
        positions = [entry.position for entry in model]
        assert positions == sorted(positions)

    def test_build_is_repeatable(self, builder: MenuBuilder) -> None:
        assert builder.build([MORE, HOME, PROCESSES]) == builder.build([MORE, HOME, PROCESSES])

    def test_unresolvable_item_dropped_with_warning(
        self, builder: MenuBuilder, caplog: pytest.LogCaptureFixture
    ) -> None:
        broken = MenuItem(label="menu.broken", destination="nowhere", position=2)
        with caplog.at_level(logging.WARNING, logger="siteext"):
            model = builder.build([HOME, broken, MORE])
        assert [entry.destination for entry in model] == ["root", "pages"]
        assert "Dropping menu item 'menu.broken'" in caplog.text

    def test_label_translated_through_host(self, host: HostPlatform, builder: MenuBuilder) -> None:
        host.store_translation("decidim.menu.home", "Etusivu")
        assert builder.build([HOME]).labels == ["Etusivu"]

    def test_name_carried_on_model(self, builder: MenuBuilder) -> None:
        assert builder.build([], name="footer").name == "footer"

    def test_validate_passes(self, builder: MenuBuilder) -> None:
        builder.validate([HOME, PROCESSES, MORE])

    def test_validate_unknown_route(self, builder: MenuBuilder) -> None:
        broken = MenuItem(label="menu.broken", destination="nowhere")
        with pytest.raises(ConfigurationError, match="Menu 'menu' item 'menu.broken'"):
            builder.validate([HOME, broken])


class TestMenuRegistry:
    def test_item_appends_in_order(self) -> None:
        menus = MenuRegistry()
        menus.item("menu", "menu.home", "root", position=1, active="exact")
        menus.item("menu", "menu.processes", "processes", position=2)
        items = menus.items("menu")
        assert [item.destination for item in items] == ["root", "processes"]
        assert items[0].active is ActiveMatch.EXACT

    def test_create_replaces_existing_items(self) -> None:
        menus = MenuRegistry()
        menus.item("menu", "menu.search", "search")
        menus.create("menu")
        assert menus.items("menu") == ()
        assert menus.names() == ["menu"]

    def test_unknown_menu_has_no_items(self) -> None:
        assert MenuRegistry().items("footer") == ()

    def test_names_in_creation_order(self) -> None:
        menus = MenuRegistry()
        menus.create("menu")
        menus.add("footer", HOME)
        assert menus.names() == ["menu", "footer"]

    def test_contains_created_and_added_menus(self) -> None:
        menus = MenuRegistry()
        menus.create("menu")
        menus.add("footer", HOME)
        assert "menu" in menus
        assert "footer" in menus
        assert "sidebar" not in menus


class TestNavigationRefresh:
    def test_publishes_every_menu(self, builder: MenuBuilder) -> None:
        menus = MenuRegistry()
        for spec in (MORE, HOME, PROCESSES):
            menus.add("menu", spec)
        menus.add("footer", MORE)
        slot = MenuSlot()

        NavigationRefresh(menus, builder, slot)()

        assert set(slot.menus) == {"menu", "footer"}
        assert slot.get("menu").labels == ["Home", "Processes", "More information"]
        assert slot.get("footer").labels == ["More information"]
        assert slot.version == 1

    def test_each_call_publishes_a_new_snapshot(self, builder: MenuBuilder) -> None:
        menus = MenuRegistry()
        menus.add("menu", HOME)
        slot = MenuSlot()
        refresh = NavigationRefresh(menus, builder, slot)
        refresh()
        first = slot.get("menu")
        refresh()
        assert slot.version == 2
        assert slot.get("menu") == first
        assert slot.get("menu") is not first


class TestMenuValidation:
    def test_first_run_rejects_unknown_route(self, builder: MenuBuilder) -> None:
        menus = MenuRegistry()
        menus.add("menu", HOME)
        menus.add("menu", MenuItem(label="menu.calendar", destination="calendar"))
        with pytest.raises(ConfigurationError, match="Menu 'menu' item 'menu.calendar'"):
            MenuValidation(menus, builder)()

    def test_route_drawn_before_first_run_is_accepted(
        self, host: HostPlatform, builder: MenuBuilder
    ) -> None:
        menus = MenuRegistry()
        menus.add("menu", MenuItem(label="menu.calendar", destination="calendar"))
        validation = MenuValidation(menus, builder)
        host.draw("calendar", "/calendar")
        validation()

    def test_later_runs_leave_routes_to_refresh(
        self, host: HostPlatform, builder: MenuBuilder
    ) -> None:
        menus = MenuRegistry()
        menus.add("menu", MORE)
        validation = MenuValidation(menus, builder)
        validation()
        host.undraw("pages")
        validation()
