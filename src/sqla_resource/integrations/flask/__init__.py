"""Flask integration for sqla-resource."""

from __future__ import annotations

try:
    import flask as _flask_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _flask_check
except ImportError as exc:
    raise ImportError(
        "Flask integration requires flask. Install it with: pip install sqla-resource[flask]"
    ) from exc

from sqla_resource.integrations.flask._extension import ResourceExtension

__all__ = ["ResourceExtension"]
