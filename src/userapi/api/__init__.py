"""HTTP transport — FastAPI app exposing the user service.

The API layer may import from services, domain, infrastructure and config.
It never touches SQL directly.
"""

from userapi.api.app import create_app

__all__ = ["create_app"]
