#!/usr/bin/env python3
#USE VENV: source venv/bin/activate
"""
Run script for the Trade Supply inventory calculator API
"""

import argparse
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from tradesupply import create_app
from tradesupply.utils.logger import get_logger

# Note: SECRET_KEY is required and read from the environment.
# Run 'python generate_env.py' to create a .env file.

logger = get_logger("trade_supply.run")


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def parse_arguments():
    """Parse command line arguments; they override the FLASK_* environment settings"""
    parser = argparse.ArgumentParser(description='Trade Supply inventory calculator API')
    parser.add_argument('--host', default=os.environ.get('FLASK_HOST', '127.0.0.1'),
                        help='Server host (default: FLASK_HOST or 127.0.0.1)')
    parser.add_argument('--port', type=int, default=int(os.environ.get('FLASK_PORT', '5000')),
                        help='Server port (default: FLASK_PORT or 5000)')
    parser.add_argument('--debug', action='store_true', default=_env_flag('FLASK_DEBUG'),
                        help='Enable Flask debug mode (never in production)')
    parser.add_argument('--check-config', action='store_true',
                        help='Build the application to validate configuration, then exit')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    logger.debug("Starting Trade Supply inventory calculator...")
    app = create_app()

    if args.check_config:
        logger.info("Configuration OK. Exiting without starting web server.")
        raise SystemExit(0)

    # USE_RELOADER: Enable/disable auto-reloader (default: False in production)
    use_reloader = _env_flag('USE_RELOADER')

    if args.debug:
        logger.warning("⚠️  DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {args.host}:{args.port} (debug={args.debug}, reloader={use_reloader})")
    app.run(debug=args.debug, host=args.host, port=args.port, use_reloader=use_reloader)
