"""
Lead Scoring Service - Main Entry Point
=======================================
Run this file to start the FastAPI server.

Usage:
    python main.py                    # Start server on port 8000
    python main.py --port 8080        # Start server on custom port
    python main.py --reload           # Start with auto-reload (dev mode)

API Documentation:
    http://localhost:8000/docs        # Swagger UI
    http://localhost:8000/redoc       # ReDoc
"""

import argparse
import logging

import uvicorn
from dotenv import load_dotenv

# Load environment variables FIRST
load_dotenv()

from lead_scoring import __version__
from lead_scoring.config.settings import LLM_CONFIG, LOG_LEVEL, SERVER_CONFIG


def main():
    parser = argparse.ArgumentParser(description="Lead Scoring API Server")
    parser.add_argument(
        "--host",
        type=str,
        default=SERVER_CONFIG["host"],
        help=f"Host to bind the server to (default: {SERVER_CONFIG['host']})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=SERVER_CONFIG["port"],
        help=f"Port to run the server on (default: {SERVER_CONFIG['port']})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {LOG_LEVEL})",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    llm_status = (
        f"Enabled ({LLM_CONFIG['provider']})" if LLM_CONFIG["api_key"] else "Disabled (no API key)"
    )

    print(f"""
╔══════════════════════════════════════════════════════════════╗
║                    LEAD SCORING SERVICE                      ║
║                      Version {__version__:<32}║
╠══════════════════════════════════════════════════════════════╣
║  Server:    http://{args.host}:{args.port}
║  Docs:      http://localhost:{args.port}/docs
║  LLM:       {llm_status:<49}║
╠══════════════════════════════════════════════════════════════╣
║  Endpoints:                                                  ║
║    POST /offer            - Set the product offer            ║
║    POST /leads/upload     - Upload leads CSV                 ║
║    POST /score            - Score uploaded leads             ║
║    GET  /results/export   - Download results CSV             ║
╚══════════════════════════════════════════════════════════════╝
    """)

    # Sessions live in process memory, so a single worker only.
    uvicorn.run(
        "lead_scoring.api.endpoints:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
