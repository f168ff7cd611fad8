"""
Local-versus-remote classification of request paths.

Rules are evaluated in order and the first match wins. ``LOCAL_RULES`` is the
single source of that precedence.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

LOCAL_PREFIXES = (
    "/css/",
    "/doc/",
    "/fonts/",
    "/images/",
    "/lang/",
    "/sounds/",
    "/static/",
)
LOCAL_SUFFIXES = (".map", ".wasm", ".js")
EXTERNAL_API = "/external_api.js"


class RouteKind(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class Classification:
    kind: RouteKind
    rule: Optional[str]

    @property
    def is_local(self) -> bool:
        return self.kind is RouteKind.LOCAL


@dataclass(frozen=True)
class LocalRule:
    name: str
    matches: Callable[[str, bool], bool]


REMOTE = Classification(RouteKind.REMOTE, None)


def accepts_html(accept_header: Optional[str]) -> bool:
    return "text/html" in (accept_header or "")


LOCAL_RULES: tuple[LocalRule, ...] = (
    LocalRule("asset-dir", lambda path, _html: path.startswith(LOCAL_PREFIXES)),
    LocalRule("asset-ext", lambda path, _html: path.endswith(LOCAL_SUFFIXES)),
    LocalRule("external-api", lambda path, _html: path == EXTERNAL_API),
    LocalRule("vpaas-page", lambda path, html: path.startswith("/vpaas") and html),
    LocalRule("build", lambda path, _html: path.startswith("/build")),
    LocalRule("libs", lambda path, _html: path.startswith("/libs/")),
)


def classify(path: str, is_html: bool) -> Classification:
    for rule in LOCAL_RULES:
        if rule.matches(path, is_html):
            return Classification(RouteKind.LOCAL, rule.name)
    return REMOTE
