"""xREL v2 endpoint table.

Each entry says how to reach an endpoint and what it requires from the
caller: whether a user token is sent, and which scope must have been
granted. The facade consults this table after validation and before it
builds a request.
"""

from dataclasses import dataclass
from enum import Enum

from xrel_client.auth.scopes import SCOPE_ADD_PROOF, SCOPE_VIEW_NFO

FORMAT = ".json"


class Auth(Enum):
    NONE = "none"  # Public, never sends a token
    OPTIONAL = "optional"  # Sends a token when one is given
    REQUIRED = "required"  # Refuses to run without a token


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: str
    path: str
    auth: Auth = Auth.NONE
    scope: str | None = None
    paginated: bool = False

    @property
    def url(self) -> str:
        return f"{self.path}{FORMAT}"


def _get(path: str, **kwargs) -> Endpoint:
    return Endpoint(name=path.replace("/", "_"), method="GET", path=path, **kwargs)


def _post(path: str, **kwargs) -> Endpoint:
    return Endpoint(name=path.replace("/", "_"), method="POST", path=path, **kwargs)


RELEASE_INFO = _get("release/info")
RELEASE_LATEST = _get("release/latest", auth=Auth.OPTIONAL, paginated=True)
RELEASE_CATEGORIES = _get("release/categories")
RELEASE_BROWSE_CATEGORY = _get("release/browse_category", paginated=True)
RELEASE_EXT_INFO = _get("release/ext_info", paginated=True)
RELEASE_FILTERS = _get("release/filters")
RELEASE_ADDPROOF = _post("release/addproof", auth=Auth.REQUIRED, scope=SCOPE_ADD_PROOF)

P2P_RELEASES = _get("p2p/releases", paginated=True)
P2P_CATEGORIES = _get("p2p/categories")
P2P_RLS_INFO = _get("p2p/rls_info")

NFO_RELEASE = _get("nfo/release", auth=Auth.REQUIRED, scope=SCOPE_VIEW_NFO)
NFO_P2P_RLS = _get("nfo/p2p_rls", auth=Auth.REQUIRED, scope=SCOPE_VIEW_NFO)

CALENDAR_UPCOMING = _get("calendar/upcoming")

EXT_INFO_INFO = _get("ext_info/info", auth=Auth.OPTIONAL)
EXT_INFO_MEDIA = _get("ext_info/media")
EXT_INFO_RATE = _post("ext_info/rate", auth=Auth.REQUIRED)

SEARCH_RELEASES = _get("search/releases")
SEARCH_EXT_INFO = _get("search/ext_info")

FAVS_LISTS = _get("favs/lists", auth=Auth.REQUIRED)
FAVS_LIST_ENTRIES = _get("favs/list_entries", auth=Auth.REQUIRED)
FAVS_LIST_ADDENTRY = _post("favs/list_addentry", auth=Auth.REQUIRED)
FAVS_LIST_DELENTRY = _post("favs/list_delentry", auth=Auth.REQUIRED)
FAVS_LIST_MARKREAD = _post("favs/list_markread", auth=Auth.REQUIRED)

COMMENTS_GET = _get("comments/get", paginated=True)
COMMENTS_ADD = _post("comments/add", auth=Auth.REQUIRED)

USER_INFO = _post("user/info", auth=Auth.REQUIRED)
