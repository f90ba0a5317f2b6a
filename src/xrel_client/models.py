"""Request options and the few response shapes the client decodes itself.

Options replace long positional argument lists: every field is
independently optional and documents what it changes on the wire.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xrel_client.auth.oauth2 import Token

RELEASE_TYPE_SCENE = "release"
RELEASE_TYPE_P2P = "p2p_rls"
RELEASE_TYPES = frozenset([RELEASE_TYPE_SCENE, RELEASE_TYPE_P2P])

EXT_INFO_TYPES = frozenset(["movie", "tv", "game", "console", "software", "xxx"])
CALENDAR_COUNTRIES = frozenset(["de", "us"])

RATING_MIN = 1
RATING_MAX = 10


@dataclass(frozen=True)
class Filter:
    """A release filter as listed by release/filters."""

    id: int
    name: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Filter":
        return cls(id=int(data["id"]), name=str(data.get("name", "")))


@dataclass(frozen=True)
class LatestReleasesOptions:
    """Options for release/latest.

    Attributes:
        per_page: Releases per page, clamped into [5, 100]
        page: Page number, at least 1
        archive: Browse the archive for a month, formatted YYYY-MM
        filter: Apply one of the public filters from release/filters
        token: Apply the user's own overview filter. Cannot be combined
            with `filter`.
    """

    per_page: int = 25
    page: int = 1
    archive: str | None = None
    filter: Filter | None = None
    token: "Token | None" = None


@dataclass(frozen=True)
class P2pReleasesOptions:
    """Options for p2p/releases; each id narrows the listing."""

    per_page: int = 25
    page: int = 1
    category_id: str | None = None
    group_id: str | None = None
    ext_info_id: str | None = None


@dataclass(frozen=True)
class SearchReleasesOptions:
    """Options for search/releases.

    Attributes:
        scene: Include scene releases
        p2p: Include P2P releases. At least one of scene/p2p must be set.
        limit: Maximum number of results, at least 1; None for the service default
    """

    scene: bool = True
    p2p: bool = False
    limit: int | None = None


@dataclass(frozen=True)
class CommentOptions:
    """Content of a new comment: text, a rating pair, or both.

    Ratings run from 1 to 10 and are only accepted together.
    """

    text: str | None = None
    video_rating: int | None = None
    audio_rating: int | None = None
