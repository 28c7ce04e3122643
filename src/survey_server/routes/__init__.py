"""Route registration — mounts every router at its route-family prefix."""

from fastapi import FastAPI

from survey_server.routes.admin_auth import router as admin_auth_router
from survey_server.routes.admin_surveys import router as admin_surveys_router
from survey_server.routes.data_surveys import router as data_surveys_router
from survey_server.routes.survey import router as survey_router


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers."""
    app.include_router(survey_router)
    app.include_router(admin_auth_router)
    app.include_router(admin_surveys_router)
    app.include_router(data_surveys_router)
