# =============================================================================
# main.py  -  Entry Point for the randomuser.me MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py                       # stdio (default)
#   MCP_TRANSPORT=http uv run python main.py    # streamable HTTP on MCP_PORT
#
# WHAT HAPPENS:
#   1. .env is loaded into the environment (python-dotenv)
#   2. Settings are read from the environment (core/settings.py)
#   3. Logging is pointed at stderr
#   4. ONE server is built (tools/mcp_server.py) and run on the chosen
#      transport until the client disconnects or the process is stopped
# =============================================================================

import logging

from dotenv import load_dotenv

from core.settings import Settings, load_settings
from tools.mcp_server import SERVER_NAME, configure_logging, create_server


def run(settings: Settings) -> None:
    """Build the server and block serving it."""
    mcp = create_server(settings)
    logging.info(
        f"Starting {SERVER_NAME} ({settings.transport}) -> {settings.base_url}, "
        f"timeout {settings.timeout}s"
    )
    if settings.transport == "http":
        mcp.run(transport="http", host=settings.host, port=settings.port)
    else:
        mcp.run()


def main() -> None:
    # Must run before load_settings(), which reads os.environ.
    load_dotenv()

    settings = load_settings()
    configure_logging(settings.log_level)
    run(settings)


if __name__ == "__main__":
    main()
