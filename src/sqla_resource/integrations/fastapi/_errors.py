"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from sqla_resource.exceptions import (
    AccessDenied,
    ConfigurationError,
    NoPolicyError,
    ParameterMissing,
    ResourceNotFound,
)

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI) -> None:
    """Install exception handlers for sqla-resource errors on a FastAPI app.

    - ``ParameterMissing`` -> 400 Bad Request
    - ``AccessDenied`` -> 403 Forbidden
    - ``ResourceNotFound`` -> 404 Not Found
    - ``ConfigurationError`` and ``NoPolicyError`` -> 500 Internal Server Error

    Example::

        from fastapi import FastAPI
        from sqla_resource.integrations.fastapi import install_error_handlers

        app = FastAPI()
        install_error_handlers(app)
    """

    @app.exception_handler(ParameterMissing)
    async def parameter_missing_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: ParameterMissing
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc), "params": list(exc.params)},
        )

    @app.exception_handler(AccessDenied)
    async def access_denied_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: AccessDenied
    ) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(ResourceNotFound)
    async def not_found_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: ResourceNotFound
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: ConfigurationError
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(NoPolicyError)
    async def no_policy_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: NoPolicyError
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})
