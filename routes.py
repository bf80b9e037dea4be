# routes.py
from fastapi import FastAPI
from controller.file_controller import file_router
from controller.page_controller import page_router
from controller.site_controller import site_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here. Pages go last."""
    app.include_router(file_router)
    app.include_router(site_router)
    app.include_router(page_router)
