import sys

from loguru import logger

from polymarket_mcp.client import ClobClientWrapper
from polymarket_mcp.config import get_config
from polymarket_mcp.errors import ConfigError
from polymarket_mcp.server import create_server, run_stdio
from polymarket_mcp.tools import build_tools
from polymarket_mcp.utils.logger import setup_logging


def main():
    setup_logging()
    logger.info("Starting Polymarket MCP Server...")

    try:
        config = get_config()
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)
    try:
        setup_logging(config.log_level, config.log_file)
        wrapper = ClobClientWrapper(config)
        wrapper.initialize()
        logger.info("CLOB client initialized")
        server = create_server(build_tools(wrapper))
        run_stdio(server)
    except KeyboardInterrupt:
        logger.info("Shutting down server...")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
