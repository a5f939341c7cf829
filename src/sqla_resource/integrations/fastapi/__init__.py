"""FastAPI integration for sqla-resource."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install sqla-resource[fastapi]"
    ) from exc

from sqla_resource.integrations.fastapi._dependencies import (
    ResourceDep,
    get_actor,
    get_oracle,
    get_repository,
)
from sqla_resource.integrations.fastapi._errors import install_error_handlers

__all__ = [
    "ResourceDep",
    "get_actor",
    "get_oracle",
    "get_repository",
    "install_error_handlers",
]
