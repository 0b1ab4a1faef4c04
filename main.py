from fastapi.middleware.cors import CORSMiddleware

from servicedesk.main import create_app as _create_service_app


def create_app():
    """Create the ASGI application served by ``uvicorn main:app``."""

    app = _create_service_app()

    # Allows the browser client served from another origin to poll notifications.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
