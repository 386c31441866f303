"""
Rotator Control - Main Entry Point

Run with: uvicorn main:app --port 8000
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

# Add backend to path for imports
backend_path = Path(__file__).parent
sys.path.insert(0, str(backend_path))

import uvicorn

from api.app import create_app


@dataclass
class ServerSettings:
    """HTTP server settings"""
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "ServerSettings":
        """Read ROTATOR_HOST / ROTATOR_PORT, falling back to defaults."""
        defaults = cls()
        return cls(
            host=os.environ.get("ROTATOR_HOST", defaults.host),
            port=int(os.environ.get("ROTATOR_PORT", defaults.port)),
        )


# Create app instance
app = create_app()


def run() -> None:
    settings = ServerSettings.from_env()
    print(f"API ready at http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


# === Run directly ===

if __name__ == "__main__":
    run()
