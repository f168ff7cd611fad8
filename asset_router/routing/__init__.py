from .decision import (
    LOCAL_RULES,
    Classification,
    LocalRule,
    RouteKind,
    accepts_html,
    classify,
)
from .files import DiskFiles, FileOracle
from .resolve import (
    Decision,
    LocalMiss,
    Proxy,
    ServeLocal,
    decide,
    resolve_js,
    resolve_local_file,
)

__all__ = [
    "LOCAL_RULES",
    "Classification",
    "LocalRule",
    "RouteKind",
    "accepts_html",
    "classify",
    "DiskFiles",
    "FileOracle",
    "Decision",
    "LocalMiss",
    "Proxy",
    "ServeLocal",
    "decide",
    "resolve_js",
    "resolve_local_file",
]
