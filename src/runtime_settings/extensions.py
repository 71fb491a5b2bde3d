"""Flask wiring and the process-wide settings service."""

from __future__ import annotations

from flask import Flask, current_app, g, has_app_context

from .config import BaseConfig
from .infra.database import ConnectionGroups, bootstrap_database
from .services.settings import Settings

CONFIG_KEY = "RUNTIME_SETTINGS_CONFIG"
CONNECTIONS_KEY = "RUNTIME_SETTINGS_CONNECTIONS"

_settings: Settings | None = None


def init_settings(app: Flask, config: BaseConfig | None = None) -> None:
    """Give every request of ``app`` its own settings façade.

    Engines are created once per app and shared; the handler chain (and any
    in-memory overrides) lives only as long as the request.
    """

    cfg = config or app.config.get(CONFIG_KEY) or BaseConfig()
    app.config[CONFIG_KEY] = cfg
    app.config[CONNECTIONS_KEY] = bootstrap_database(cfg)

    @app.before_request
    def _prime_settings() -> None:
        """Attach a settings façade to the request context."""

        if "runtime_settings" not in g:
            g.runtime_settings = _build_for_app()

    @app.teardown_appcontext
    def _shutdown_settings(exception: BaseException | None) -> None:
        g.pop("runtime_settings", None)


def _build_for_app() -> Settings:
    connections: ConnectionGroups = current_app.config[CONNECTIONS_KEY]
    return Settings(current_app.config[CONFIG_KEY], connections=connections)


def get_settings() -> Settings:
    """Return the request's façade, or a shared one outside Flask."""

    if has_app_context() and CONNECTIONS_KEY in current_app.config:
        if "runtime_settings" not in g:
            g.runtime_settings = _build_for_app()
        return g.runtime_settings

    global _settings  # noqa: PLW0603
    if _settings is None:
        cfg = BaseConfig()
        _settings = Settings(cfg, connections=bootstrap_database(cfg))
    return _settings


def reset_settings(settings: Settings | None = None) -> None:
    """Replace (or drop) the shared façade used outside Flask."""

    global _settings  # noqa: PLW0603
    if _settings is not None and _settings is not settings:
        _settings.close()
    _settings = settings
