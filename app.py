"""
App assembly entry point.

Builds the FastAPI `app` from environment configuration so the service can be
served with `uvicorn app:app`.
"""

from portal.api.main import create_app

app = create_app()
