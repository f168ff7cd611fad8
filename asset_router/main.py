import logging
import sys

import uvicorn

from asset_router.config import StartupConfigError, load_config, load_tls_files
import asset_router.vars as router_vars
from asset_router.server import create_app

logger = logging.getLogger("uvicorn.error")


def setup_logging() -> None:
    logging.basicConfig(
        level=router_vars.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main() -> int:
    """
    Run the router.

    Standalone mode (anything but production) listens over TLS and refuses to
    start without the key/certificate pair. Production serves plain HTTP for
    a TLS-terminating host.
    """
    setup_logging()
    config = load_config()

    ssl_options = {}
    scheme = "http"
    if config.standalone:
        try:
            keyfile, certfile = load_tls_files(config)
        except StartupConfigError as e:
            logger.critical(f"Cannot start HTTPS server: {e}")
            return 1
        ssl_options = {"ssl_keyfile": keyfile, "ssl_certfile": certfile}
        scheme = "https"

    app = create_app(config)
    logger.info(f"Serving local files from {config.local_root}")
    logger.info(f"Server running on {scheme}://localhost:{config.port}")
    uvicorn.run(app, host="0.0.0.0", port=config.port, log_config=None, **ssl_options)
    return 0


if __name__ == "__main__":
    sys.exit(main())
