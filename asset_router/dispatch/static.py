import logging
import mimetypes
import os
import stat

from fastapi.responses import FileResponse, PlainTextResponse, Response

from asset_router.config import RouterConfig
from asset_router.routing.files import within_root

logger = logging.getLogger("uvicorn.error")

mimetypes.add_type("application/wasm", ".wasm")
mimetypes.add_type("application/json", ".map")

NOT_FOUND_BODY = "Not Found"


def not_found(request_path: str, reason: str) -> Response:
    logger.info(f"    Error serving {request_path} locally: {reason}")
    return PlainTextResponse(NOT_FOUND_BODY, status_code=404)


def send_local_file(config: RouterConfig, file_path: str, request_path: str) -> Response:
    """
    Respond with ``file_path`` from the local root, or a plain 404.

    The file is opened and stat'ed here rather than trusting the routing
    decision, so a file removed or unreadable after resolution still yields
    404.
    """
    full_path = within_root(config.local_root, file_path)
    if full_path is None:
        return not_found(request_path, f"{file_path!r} is not a path under the local root")

    try:
        fd = os.open(full_path, os.O_RDONLY)
        try:
            stat_result = os.fstat(fd)
        finally:
            os.close(fd)
    except (OSError, ValueError) as e:
        return not_found(request_path, str(e))

    if not stat.S_ISREG(stat_result.st_mode):
        return not_found(request_path, f"{full_path} is not a regular file")

    return FileResponse(full_path, stat_result=stat_result)
