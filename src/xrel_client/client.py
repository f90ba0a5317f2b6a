"""The xREL API client.

`XrelClient` turns each xREL endpoint into one method call. Every call
follows the same steps: validate arguments, normalize pagination, check the
required scope, attach the bearer token where the endpoint takes one, send
exactly one request, and decode the result. Arguments are checked before
any network access, so a rejected call never reaches the service.

Example:
    ```python
    from xrel_client import XrelClient
    from xrel_client.models import LatestReleasesOptions

    with XrelClient() as xrel:
        latest = xrel.release_latest(LatestReleasesOptions(per_page=50))
        for release in latest.items:
            print(release["dirname"])
        print(xrel.rate_limit.remaining)
    ```
"""

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from xrel_client import endpoints
from xrel_client.auth.oauth2 import OAuth2Session, Token
from xrel_client.config import XrelSettings
from xrel_client.endpoints import Auth, Endpoint
from xrel_client.errors.exceptions import EmptyResultError, InvalidArgumentError, TransportError
from xrel_client.errors.handler import decode_json
from xrel_client.models import (
    CALENDAR_COUNTRIES,
    EXT_INFO_TYPES,
    RATING_MAX,
    RATING_MIN,
    RELEASE_TYPE_SCENE,
    RELEASE_TYPES,
    CommentOptions,
    Filter,
    LatestReleasesOptions,
    P2pReleasesOptions,
    SearchReleasesOptions,
)
from xrel_client.pagination import PaginatedList, normalize_pagination
from xrel_client.transport.client import TransportClient
from xrel_client.transport.interceptor import RateLimitSnapshot

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 25


def _require(value: Any, name: str) -> None:
    if value is None or value == "":
        raise InvalidArgumentError(f"{name} missing")


def _require_one_of(id: str | None, dirname: str | None) -> None:
    if (id is None) == (dirname is None):
        raise InvalidArgumentError("exactly one of id or dirname must be given")
    _require(id if id is not None else dirname, "id" if id is not None else "dirname")


def _check_rating(rating: int, name: str = "rating") -> None:
    if not isinstance(rating, int) or isinstance(rating, bool):
        raise InvalidArgumentError(f"{name} must be an integer")
    if not RATING_MIN <= rating <= RATING_MAX:
        raise InvalidArgumentError(f"{name} must be in the range of {RATING_MIN} - {RATING_MAX}")


def _check_release_type(release_type: str) -> None:
    if release_type not in RELEASE_TYPES:
        raise InvalidArgumentError(f"release_type must be one of {sorted(RELEASE_TYPES)}")


def _check_limit(limit: int | None) -> None:
    if limit is not None and limit < 1:
        raise InvalidArgumentError("limit must be 1 or greater")


class XrelClient:
    """Typed access to the xREL v2 API.

    Args:
        http: Shared transport client. One is created if omitted.
        session: OAuth2 session used for scope checks and token exchanges.
            An anonymous session is created if omitted; it grants no scopes.
    """

    def __init__(self, http: TransportClient | None = None, session: OAuth2Session | None = None) -> None:
        if http is None:
            http = session.http if session is not None else TransportClient()
        self.http = http
        self.session = session if session is not None else OAuth2Session(http=http)

    @classmethod
    def from_settings(cls, settings: XrelSettings | None = None, **kwargs: Any) -> "XrelClient":
        """Build a client from `XrelSettings` (resolved from the environment if omitted)."""
        settings = settings or XrelSettings.from_env()
        http = TransportClient(base_url=settings.base_url, timeout=settings.timeout, **kwargs)
        return cls(http=http, session=OAuth2Session.from_settings(settings, http=http))

    def __enter__(self) -> "XrelClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self.http.close()

    @property
    def rate_limit(self) -> RateLimitSnapshot:
        """Rate-limit values reported by the most recent response."""
        return self.http.rate_limit

    # --- Request pipeline ---

    def _send(
        self,
        endpoint: Endpoint,
        *,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        token: Token | None = None,
        pagination: tuple[int, int] | None = None,
    ) -> httpx.Response:
        if endpoint.auth is Auth.REQUIRED and token is None:
            raise InvalidArgumentError("token missing")

        # Scope check strictly before the request exists
        if endpoint.scope is not None:
            self.session.require_scope(endpoint.scope)

        params = dict(params or {})
        if endpoint.paginated:
            per_page, page = pagination if pagination is not None else (DEFAULT_PER_PAGE, 1)
            params.update(normalize_pagination(per_page, page).as_params())

        headers = None
        if endpoint.auth is not Auth.NONE and token is not None:
            headers = {"Authorization": token.bearer_header()}

        return self.http.request(endpoint.method, endpoint.url, params=params, data=data, headers=headers)

    def _call(self, endpoint: Endpoint, **kwargs: Any) -> Any:
        return decode_json(self._send(endpoint, **kwargs))

    def _call_paginated(self, endpoint: Endpoint, **kwargs: Any) -> PaginatedList:
        body = self._call(endpoint, **kwargs)
        if not isinstance(body, dict):
            raise TransportError(f"Unexpected response shape from {endpoint.name}")
        try:
            return PaginatedList.from_json(body)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed list from {endpoint.name}: {e!r}") from e

    def _call_bytes(self, endpoint: Endpoint, **kwargs: Any) -> bytes:
        content = self._send(endpoint, **kwargs).content
        if not content:
            raise EmptyResultError(f"Empty response from {endpoint.name}")
        return content

    # --- OAuth2 ---

    def authorization_url(self) -> str:
        """Authorization URL for the configured session. No network access."""
        return self.session.build_authorization_url()

    def exchange_token(self, grant_type: str, code: str | None = None, token: Token | None = None) -> Token:
        """Run a grant exchange through the session. See `OAuth2Session.exchange_token`."""
        return self.session.exchange_token(grant_type, code=code, token=token)

    # --- Releases ---

    def release_info(self, *, id: str | None = None, dirname: str | None = None) -> dict[str, Any]:
        """Information about a single scene release, by API id or dirname."""
        _require_one_of(id, dirname)
        return self._call(endpoints.RELEASE_INFO, params={"id": id, "dirname": dirname})

    def release_latest(self, options: LatestReleasesOptions | None = None) -> PaginatedList:
        """Latest scene releases, optionally an archive month or a filter.

        Without an archive the service reports no total page count; around
        1000 releases can be browsed that way.
        """
        options = options or LatestReleasesOptions()
        if options.archive is not None:
            _require(options.archive, "archive")
        if options.filter is not None and options.token is not None:
            raise InvalidArgumentError("either filter or token may be given, not both")

        filter_param = None
        if options.filter is not None:
            filter_param = str(options.filter.id)
        elif options.token is not None:
            filter_param = "overview"

        return self._call_paginated(
            endpoints.RELEASE_LATEST,
            params={"archive": options.archive, "filter": filter_param},
            token=options.token,
            pagination=(options.per_page, options.page),
        )

    def release_categories(self) -> list[dict[str, Any]]:
        return self._call(endpoints.RELEASE_CATEGORIES)

    def release_browse_category(
        self,
        category_name: str,
        ext_info_type: str | None = None,
        per_page: int = DEFAULT_PER_PAGE,
        page: int = 1,
    ) -> PaginatedList:
        """Scene releases of one category, optionally narrowed to an Ext Info type."""
        _require(category_name, "category")
        if ext_info_type is not None and ext_info_type not in EXT_INFO_TYPES:
            raise InvalidArgumentError(f"ext_info_type must be one of {sorted(EXT_INFO_TYPES)}")
        return self._call_paginated(
            endpoints.RELEASE_BROWSE_CATEGORY,
            params={"category_name": category_name, "ext_info_type": ext_info_type},
            pagination=(per_page, page),
        )

    def release_ext_info(self, ext_info_id: str, per_page: int = DEFAULT_PER_PAGE, page: int = 1) -> PaginatedList:
        """Scene releases belonging to an Ext Info."""
        _require(ext_info_id, "ext_info_id")
        return self._call_paginated(
            endpoints.RELEASE_EXT_INFO,
            params={"id": ext_info_id},
            pagination=(per_page, page),
        )

    def release_filters(self) -> list[Filter]:
        body = self._call(endpoints.RELEASE_FILTERS)
        if not isinstance(body, list):
            raise TransportError(f"Unexpected response shape from {endpoints.RELEASE_FILTERS.name}")
        try:
            return [Filter.from_json(item) for item in body]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed filter list: {e!r}") from e

    def release_add_proof(self, release_ids: Iterable[str], image: str, token: Token) -> dict[str, Any]:
        """Add a proof picture to one or more releases. Requires the addproof scope.

        Args:
            release_ids: API ids of the releases the proof belongs to
            image: Base64 encoded image
            token: User token
        """
        _require(release_ids, "release_ids")
        if isinstance(release_ids, str):
            raise InvalidArgumentError("release_ids must be a collection of ids")
        ids = sorted(set(release_ids))
        if not ids:
            raise InvalidArgumentError("release_ids missing")
        _require(image, "image")
        return self._call(endpoints.RELEASE_ADDPROOF, data={"id": ids, "image": image}, token=token)

    # --- P2P ---

    def p2p_releases(self, options: P2pReleasesOptions | None = None) -> PaginatedList:
        options = options or P2pReleasesOptions()
        return self._call_paginated(
            endpoints.P2P_RELEASES,
            params={
                "category_id": options.category_id,
                "group_id": options.group_id,
                "ext_info_id": options.ext_info_id,
            },
            pagination=(options.per_page, options.page),
        )

    def p2p_categories(self) -> list[dict[str, Any]]:
        return self._call(endpoints.P2P_CATEGORIES)

    def p2p_release_info(self, *, id: str | None = None, dirname: str | None = None) -> dict[str, Any]:
        """Information about a single P2P release, by API id or dirname."""
        _require_one_of(id, dirname)
        return self._call(endpoints.P2P_RLS_INFO, params={"id": id, "dirname": dirname})

    # --- NFO ---

    def nfo_release(self, release_id: str, token: Token) -> bytes:
        """NFO image of a scene release. Requires the viewnfo scope."""
        _require(release_id, "release_id")
        return self._call_bytes(endpoints.NFO_RELEASE, params={"id": release_id}, token=token)

    def nfo_p2p_release(self, release_id: str, token: Token) -> bytes:
        """NFO image of a P2P release. Requires the viewnfo scope."""
        _require(release_id, "release_id")
        return self._call_bytes(endpoints.NFO_P2P_RLS, params={"id": release_id}, token=token)

    # --- Calendar & Ext Info ---

    def calendar_upcoming(self, country: str) -> list[dict[str, Any]]:
        """Upcoming movies: `de` for Germany, `us` for US/international."""
        _require(country, "country")
        if country not in CALENDAR_COUNTRIES:
            raise InvalidArgumentError("country must be either de or us")
        return self._call(endpoints.CALENDAR_UPCOMING, params={"country": country})

    def ext_info(self, ext_info_id: str, token: Token | None = None) -> dict[str, Any]:
        """Ext Info details; with a token the response includes `own_rating`."""
        _require(ext_info_id, "ext_info_id")
        return self._call(endpoints.EXT_INFO_INFO, params={"id": ext_info_id}, token=token)

    def ext_info_media(self, ext_info_id: str) -> list[dict[str, Any]]:
        _require(ext_info_id, "ext_info_id")
        return self._call(endpoints.EXT_INFO_MEDIA, params={"id": ext_info_id})

    def ext_info_rate(self, ext_info_id: str, rating: int, token: Token) -> dict[str, Any]:
        """Rate an Ext Info from 1 (bad) to 10 (good). A vote cannot be changed."""
        _require(ext_info_id, "ext_info_id")
        _check_rating(rating)
        return self._call(endpoints.EXT_INFO_RATE, data={"id": ext_info_id, "rating": rating}, token=token)

    # --- Search ---
    # Search calls are limited to 2 per 10 seconds on top of the normal limit.

    def search_releases(self, q: str, options: SearchReleasesOptions | None = None) -> dict[str, Any]:
        options = options or SearchReleasesOptions()
        _require(q, "q")
        if not options.scene and not options.p2p:
            raise InvalidArgumentError("either scene or p2p must be set to true")
        _check_limit(options.limit)
        return self._call(
            endpoints.SEARCH_RELEASES,
            params={"q": q, "scene": options.scene, "p2p": options.p2p, "limit": options.limit},
        )

    def search_ext_info(self, q: str, type: str | None = None, limit: int | None = None) -> dict[str, Any]:
        _require(q, "q")
        if type is not None and type not in EXT_INFO_TYPES:
            raise InvalidArgumentError(f"type must be one of {sorted(EXT_INFO_TYPES)}")
        _check_limit(limit)
        return self._call(endpoints.SEARCH_EXT_INFO, params={"q": q, "type": type, "limit": limit})

    # --- Favorites ---

    def favs_lists(self, token: Token) -> list[dict[str, Any]]:
        return self._call(endpoints.FAVS_LISTS, token=token)

    def favs_list_entries(self, favorite_id: int, token: Token, get_releases: bool = False) -> list[dict[str, Any]]:
        _require(favorite_id, "favorite_id")
        return self._call(
            endpoints.FAVS_LIST_ENTRIES,
            params={"id": favorite_id, "get_releases": get_releases},
            token=token,
        )

    def favs_list_add_entry(self, favorite_id: int, ext_info_id: str, token: Token) -> dict[str, Any]:
        return self._favs_entry(endpoints.FAVS_LIST_ADDENTRY, favorite_id, ext_info_id, token)

    def favs_list_del_entry(self, favorite_id: int, ext_info_id: str, token: Token) -> dict[str, Any]:
        return self._favs_entry(endpoints.FAVS_LIST_DELENTRY, favorite_id, ext_info_id, token)

    def _favs_entry(self, endpoint: Endpoint, favorite_id: int, ext_info_id: str, token: Token) -> dict[str, Any]:
        _require(favorite_id, "favorite_id")
        _require(ext_info_id, "ext_info_id")
        return self._call(endpoint, data={"id": favorite_id, "ext_info_id": ext_info_id}, token=token)

    def favs_list_mark_read(
        self,
        favorite_id: int,
        release_id: str,
        token: Token,
        release_type: str = RELEASE_TYPE_SCENE,
    ) -> dict[str, Any]:
        """Mark a release on a favorites list as read."""
        _require(favorite_id, "favorite_id")
        _require(release_id, "release_id")
        _check_release_type(release_type)
        return self._call(
            endpoints.FAVS_LIST_MARKREAD,
            data={"id": favorite_id, "release_id": release_id, "type": release_type},
            token=token,
        )

    # --- Comments & user ---

    def comments_get(
        self,
        release_id: str,
        release_type: str = RELEASE_TYPE_SCENE,
        per_page: int = DEFAULT_PER_PAGE,
        page: int = 1,
    ) -> PaginatedList:
        _require(release_id, "release_id")
        _check_release_type(release_type)
        return self._call_paginated(
            endpoints.COMMENTS_GET,
            params={"id": release_id, "type": release_type},
            pagination=(per_page, page),
        )

    def comments_add(
        self,
        release_id: str,
        options: CommentOptions,
        token: Token,
        release_type: str = RELEASE_TYPE_SCENE,
    ) -> dict[str, Any]:
        """Post a comment with text, a video/audio rating pair, or both."""
        _require(release_id, "release_id")
        _check_release_type(release_type)

        has_ratings = options.video_rating is not None or options.audio_rating is not None
        if has_ratings:
            if options.video_rating is None or options.audio_rating is None:
                raise InvalidArgumentError("video_rating and audio_rating must be given together")
            _check_rating(options.video_rating, "video_rating")
            _check_rating(options.audio_rating, "audio_rating")
        if options.text is not None:
            _require(options.text, "text")
        elif not has_ratings:
            raise InvalidArgumentError("text or ratings must be given")

        return self._call(
            endpoints.COMMENTS_ADD,
            data={
                "id": release_id,
                "type": release_type,
                "text": options.text,
                "video_rating": options.video_rating,
                "audio_rating": options.audio_rating,
            },
            token=token,
        )

    def user_info(self, token: Token) -> dict[str, Any]:
        return self._call(endpoints.USER_INFO, token=token)
