"""URL generation for links and assets in rendered markup."""

from urllib.parse import quote


class UrlBuilder:
    """Builds the site routes the renderers link to.

    With an empty ``site_url`` all page links are relative (``/game/1``),
    which is what the navigation breadcrumbs have always used.
    """

    def __init__(
        self,
        site_url: str = "",
        media_base_url: str = "https://media.retroachievements.org",
    ) -> None:
        self.site_url = site_url.rstrip("/")
        self.media_base_url = media_base_url.rstrip("/")

    def _page(self, path: str) -> str:
        return f"{self.site_url}{path}"

    def all_games(self) -> str:
        return self._page("/gameList.php")

    def game_list(self, console_id: int) -> str:
        return self._page(f"/gameList.php?c={console_id}")

    def game(self, game_id: int) -> str:
        return self._page(f"/game/{game_id}")

    def linked_hashes(self, game_id: int) -> str:
        return self._page(f"/linkedhashes.php?g={game_id}")

    def user(self, user_name: str) -> str:
        return self._page(f"/user/{quote(user_name)}")

    def forum_topic(self, topic_id: int) -> str:
        return self._page(f"/viewtopic.php?t={topic_id}")

    def create_forum_topic(self) -> str:
        return self._page("/request/game/generate-forum-topic.php")

    def asset(self, path: str) -> str:
        """URL of a static asset bundled with the site."""
        return self._page("/" + path.lstrip("/"))

    def media_asset(self, path: str | None) -> str:
        """URL of an uploaded media file (game icons, user pictures)."""
        if not path:
            return f"{self.media_base_url}/Images/000001.png"
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.media_base_url}/{path.lstrip('/')}"

    def user_avatar_image(self, user_name: str) -> str:
        return self.media_asset(f"/UserPic/{quote(user_name)}.png")
