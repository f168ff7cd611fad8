"""
Mapping of locally-routed request paths to files under the local root.

Resolution is a fixed sequence of pure ``path -> path`` steps followed by the
``.js``/``.min.js`` fallback. A build may emit either the minified or the
plain artifact, so neither name is assumed.
"""

import posixpath
from dataclasses import dataclass
from typing import Callable, Optional, Union

from asset_router.routing.decision import Classification, classify
from asset_router.routing.files import FileOracle

MIN_JS = ".min.js"
JS = ".js"
SPA_INDEX = "/index.html"
BUILD_DIR = "build"


@dataclass(frozen=True)
class ServeLocal:
    file_path: str


@dataclass(frozen=True)
class LocalMiss:
    request_path: str


@dataclass(frozen=True)
class Proxy:
    pass


Decision = Union[ServeLocal, LocalMiss, Proxy]
PathStep = Callable[[str], str]


def resolve_js(path: str, files: FileOracle) -> Optional[str]:
    if files.exists(path):
        return path
    if path.endswith(JS) and not path.endswith(MIN_JS):
        minified = path[: -len(JS)] + MIN_JS
        if files.exists(minified):
            return minified
    if path.endswith(MIN_JS):
        plain = path[: -len(MIN_JS)] + JS
        if files.exists(plain):
            return plain
    return None


def spa_fallback(is_html: bool) -> PathStep:
    def step(path: str) -> str:
        if path.startswith("/vpaas") and is_html:
            return SPA_INDEX
        return path

    return step


def libs_min_fallback(files: FileOracle) -> PathStep:
    # Prefer an existing /libs/*.min.js; otherwise drop the .min part.
    def step(path: str) -> str:
        if (
            path.startswith("/libs/")
            and path.endswith(MIN_JS)
            and not files.exists(path)
        ):
            return path[: -len(MIN_JS)] + JS
        return path

    return step


def is_root_file(path: str) -> bool:
    return posixpath.dirname(path) in ("", ".", "/")


def root_file_to_build(path: str) -> str:
    if is_root_file(path):
        return posixpath.join(BUILD_DIR, path.lstrip("/"))
    return path


def root_relative(path: str) -> str:
    return path.lstrip("/")


def resolve_local_file(path: str, is_html: bool, files: FileOracle) -> Optional[str]:
    """
    Return the root-relative file answering ``path``, or None when nothing on
    disk matches.

    Non-JS paths are returned without an existence check; the dispatcher
    reports those as missing when it fails to stat them.
    """
    steps: tuple[PathStep, ...] = (
        spa_fallback(is_html),
        libs_min_fallback(files),
        root_file_to_build,
        root_relative,
    )
    for step in steps:
        path = step(path)

    if path.endswith(JS):
        return resolve_js(path, files)
    return path


def decide(
    path: str, is_html: bool, files: FileOracle
) -> tuple[Classification, Decision]:
    classification = classify(path, is_html)
    if not classification.is_local:
        return classification, Proxy()

    file_path = resolve_local_file(path, is_html, files)
    if file_path is None:
        return classification, LocalMiss(path)
    return classification, ServeLocal(file_path)
