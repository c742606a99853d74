"""
LiveNotes - FastAPI Application Entry Point.

One note list session per process: the lifespan builds the GraphQL client,
the event stream, the subscription feed and the controller, and tears them
down again on shutdown.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI

from livenotes.config import get_settings
from livenotes.core.events import EventStream
from livenotes.core.graphql_client import GraphQLClient
from livenotes.features.notes.controller import NoteListController
from livenotes.features.notes.feed import SubscriptionFeed
from livenotes.features.notes.router import router as notes_router
from livenotes.features.notes.schemas import ControllerVersion
from livenotes.features.notes.service import NotesService


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup & shutdown."""
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    version = ControllerVersion(settings.CONTROLLER_VERSION)
    client_id = settings.CLIENT_ID or str(uuid.uuid4())
    print(f"{settings.APP_NAME} v{settings.APP_VERSION} starting...")
    print(f"GraphQL API: {settings.GRAPHQL_URL}")
    print(f"Controller: {version.value} (client {client_id})")

    client = GraphQLClient()
    service = NotesService(client)
    stream = EventStream()
    controller = NoteListController(service, stream, client_id=client_id, version=version)
    feed = SubscriptionFeed(service, stream, version.subscriptions)

    try:
        await controller.mount()
        feed.start()
        app.state.controller = controller
        yield
    finally:
        print("Shutting down...")
        app.state.controller = None
        controller.unmount()
        await feed.stop()
        await client.aclose()


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Note list backed by a GraphQL API with live updates",
        lifespan=lifespan,
    )

    # ── Register Feature Routers ─────────────────────────
    app.include_router(notes_router, tags=["Notes"])

    # ── Health Check ─────────────────────────────────────
    @app.get("/health", tags=["System"])
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()
