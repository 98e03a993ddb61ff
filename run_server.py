#!/usr/bin/env python3
"""Run the Crazy Eights Web API server."""

import uvicorn
from pathlib import Path


def main():
    """Run the server."""
    # Load .env file if it exists
    env_file = Path(__file__).parent / ".env"
    if env_file.exists():
        from dotenv import load_dotenv
        load_dotenv(env_file)
        print(f"Loaded environment from {env_file}")

    from core.config import load_settings

    settings = load_settings()

    uvicorn.run(
        "web.api:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
