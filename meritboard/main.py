from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meritboard.app_logger import setup_logging
from meritboard.api.v1.auth.router import router as auth_router
from meritboard.api.v1.classes.router import router as classes_router
from meritboard.api.v1.functions.router import router as functions_router
from meritboard.api.v1.rankings.router import router as rankings_router
from meritboard.api.v1.records.router import router as records_router
from meritboard.api.v1.reports.router import router as reports_router
from meritboard.api.v1.rules.router import router as rules_router
from meritboard.api.v1.students.router import router as students_router
from meritboard.api.v1.users.router import router as users_router
from meritboard.api.v1.weekly_scores.router import router as weekly_scores_router
from meritboard.api.v1.weeks.router import router as weeks_router


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="Meritboard")

    # CORS: allow the web frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(classes_router)
    app.include_router(students_router)
    app.include_router(rules_router)
    app.include_router(records_router)
    app.include_router(rankings_router)
    app.include_router(weekly_scores_router)
    app.include_router(reports_router)
    app.include_router(weeks_router)
    app.include_router(functions_router)

    return app


app = create_app()
