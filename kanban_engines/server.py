"""Aggregate app for the Kanban stage workflow engines."""
from __future__ import annotations

import logging

from fastapi import FastAPI

from kanban_engines.board_config.routes import router as board_config_router
from kanban_engines.cards.routes import router as cards_router
from kanban_engines.common.error_envelope import register_error_handlers
from kanban_engines.common.health import router as health_router
from kanban_engines.config import runtime_config
from kanban_engines.stage_rules.routes import router as stage_rules_router


def configure_logging() -> None:
    level = runtime_config.get_log_level()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger("kanban_engines").setLevel(level)


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Kanban Stage Workflow", version="0.1.0")
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(board_config_router)
    app.include_router(stage_rules_router)
    app.include_router(cards_router)
    return app


def main() -> None:  # pragma: no cover - manual entry point
    import uvicorn

    uvicorn.run(create_app(), host=runtime_config.get_host(), port=runtime_config.get_port())


if __name__ == "__main__":  # pragma: no cover
    main()
