"""Tests for avatars and game cards."""

from unittest.mock import MagicMock

from bs4 import BeautifulSoup

from gamepage.models import GameRecord
from gamepage.render.avatar import GameCardRenderer, avatar, game_avatar, render_game_card, user_avatar
from gamepage.render.title import tag_span
from gamepage.services.cache import ArrayCacheStore
from gamepage.services.errors import DataSourceError
from gamepage.services.repository import CatalogRepository
from gamepage.services.urls import UrlBuilder


MEDIA = "https://media.retroachievements.org"


def make_game() -> GameRecord:
    return GameRecord(
        id=1,
        title="~Hack~ Mario & Co",
        console_id=7,
        console_name="NES",
        icon_path="/Images/000123.png",
    )


class TestAvatar:
    def test_icon_and_label(self) -> None:
        result = avatar("game", 3, label="Zelda", link="/game/3", icon_url="/icon.png", alt_text="Zelda")

        assert result == (
            "<span class='inline whitespace-nowrap'>"
            "<a href='/game/3' data-tooltip-resource='game' data-tooltip-id='3'>"
            "<img loading='lazy' width='32' height='32' src='/icon.png' alt='Zelda' class='badgeimg'>"
            "<span>Zelda</span>"
            "</a></span>"
        )

    def test_label_only_is_escaped(self) -> None:
        result = avatar("game", 3, label="A & B", link="/game/3", tooltip=False)

        assert result == "<span class='inline whitespace-nowrap'><a href='/game/3'>A &amp; B</a></span>"

    def test_without_link(self) -> None:
        result = avatar("game", 3, label="Zelda", tooltip=False)

        assert result == "<span class='inline whitespace-nowrap'><span>Zelda</span></span>"

    def test_static_tooltip(self) -> None:
        soup = BeautifulSoup(avatar("game", 3, label="Zelda", link="/game/3", tooltip="<b>x</b>"), "html.parser")

        assert soup.a["data-tooltip"] == "<b>x</b>"

    def test_tooltip_context(self) -> None:
        soup = BeautifulSoup(avatar("user", "Scott", label="Scott", context="game:1"), "html.parser")

        assert soup.span.span["data-tooltip-context"] == "game:1"


class TestGameCard:
    def test_card_markup(self) -> None:
        card = render_game_card(make_game())

        assert card == (
            "<div class='tooltip-body flex items-start' style='max-width: 400px'>"
            f"<img style='margin-right:5px' src='{MEDIA}/Images/000123.png' width='64' height='64' />"
            "<div>"
            f"<b>Mario &amp; Co {tag_span('Hack')}</b><br>"
            "NES"
            "</div>"
            "</div>"
        )

    def test_card_with_mastery(self) -> None:
        card = render_game_card(make_game(), mastery="Mastered")

        assert "NES<div>Mastered</div></div>" in card

    def test_missing_icon_uses_placeholder(self) -> None:
        game = GameRecord(id=2, title="Game", console_id=7, console_name="NES")

        assert f"src='{MEDIA}/Images/000001.png'" in render_game_card(game)


class TestGameCardRenderer:
    """Card data is read once per id through the cache."""

    def test_card_data_is_cached(self) -> None:
        service = MagicMock(wraps=CatalogRepository(games=[make_game()]))
        cache = ArrayCacheStore()
        renderer = GameCardRenderer(service, cache)

        first = renderer.render(1)
        second = renderer.render(1)

        assert first == second == render_game_card(make_game())
        service.get_by_id.assert_called_once_with(1)
        assert cache.hits == 1
        assert "game:1:card-data" in cache

    def test_record_is_rendered_without_lookup(self) -> None:
        service = MagicMock()
        renderer = GameCardRenderer(service)

        assert renderer.render(make_game()) == render_game_card(make_game())
        service.get_by_id.assert_not_called()

    def test_missing_id(self) -> None:
        renderer = GameCardRenderer(CatalogRepository())

        assert renderer.render(None) == "Error"
        assert renderer.render(0) == "Error"

    def test_unknown_game_renders_nothing(self) -> None:
        service = MagicMock(wraps=CatalogRepository())
        renderer = GameCardRenderer(service)

        assert renderer.render(999) == ""
        assert renderer.render(999) == ""
        # Missing games are not cached
        assert service.get_by_id.call_count == 2

    def test_lookup_failure_renders_nothing(self) -> None:
        service = MagicMock()
        service.get_by_id.side_effect = DataSourceError("Catalog unavailable", source="test", game_id=1)

        assert GameCardRenderer(service).render(1) == ""

    def test_mastery_passed_through(self) -> None:
        renderer = GameCardRenderer(CatalogRepository(games=[make_game()]))

        assert "<div>Mastered</div>" in renderer.render(1, mastery="Mastered")


class TestGameAvatar:
    def test_full_record(self) -> None:
        soup = BeautifulSoup(game_avatar(make_game()), "html.parser")

        link = soup.a
        assert link["href"] == "/game/1"
        assert "tooltip-body" in link["data-tooltip"]
        assert link.img["src"] == f"{MEDIA}/Images/000123.png"
        assert link.img["alt"] == "~Hack~ Mario & Co (NES)"
        label = link.find("span", recursive=False)
        assert label.get_text() == "Mario & Co (NES) Hack"
        assert label.find("span", class_="tag") is not None

    def test_label_off(self) -> None:
        soup = BeautifulSoup(game_avatar(make_game(), label=False), "html.parser")

        assert soup.a.img is not None
        assert soup.a.find("span") is None

    def test_icon_off(self) -> None:
        soup = BeautifulSoup(game_avatar(make_game(), icon=False, tooltip=False), "html.parser")

        assert soup.a.img is None
        assert not soup.a.has_attr("data-tooltip")
        assert soup.a.get_text() == "Mario & Co (NES) Hack"

    def test_id_with_label(self) -> None:
        result = game_avatar(5, label="Zelda & Link", urls=UrlBuilder("https://example.org"))
        soup = BeautifulSoup(result, "html.parser")

        assert "Zelda &amp; Link" in result
        assert soup.a["href"] == "https://example.org/game/5"
        assert soup.a["data-tooltip-resource"] == "game"
        assert soup.a["data-tooltip-id"] == "5"


class TestUserAvatar:
    def test_icon_and_label(self) -> None:
        soup = BeautifulSoup(user_avatar("Scott"), "html.parser")

        assert soup.a["href"] == "/user/Scott"
        assert soup.a["data-tooltip-resource"] == "user"
        assert soup.a.img["src"] == f"{MEDIA}/UserPic/Scott.png"
        assert soup.a.span.get_text() == "Scott"

    def test_label_only(self) -> None:
        soup = BeautifulSoup(user_avatar("Scott", icon=False), "html.parser")

        assert soup.a.img is None
        assert soup.a.get_text() == "Scott"


class TestUrlBuilder:
    def test_media_asset(self) -> None:
        urls = UrlBuilder(media_base_url="https://media.example.org/")

        assert urls.media_asset("/Images/000002.png") == "https://media.example.org/Images/000002.png"
        assert urls.media_asset("https://cdn.example.org/x.png") == "https://cdn.example.org/x.png"
        assert urls.media_asset(None) == "https://media.example.org/Images/000001.png"

    def test_user_names_are_quoted(self) -> None:
        urls = UrlBuilder("https://example.org/")

        assert urls.user("A B") == "https://example.org/user/A%20B"
        assert urls.user_avatar_image("A B") == f"{MEDIA}/UserPic/A%20B.png"
