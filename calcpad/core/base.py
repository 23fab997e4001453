"""Base classes and registry for Calcpad Textual applications."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from textual.app import App


class AppConfig(BaseModel):
    """Metadata describing a Textual application."""
    name: str
    description: str
    version: str = "1.0.0"
    author: str = "Calcpad"
    tags: list[str] = []


class AppStatus(BaseModel):
    """Status information for an application instance."""
    app_id: str
    name: str
    status: str = "stopped"  # stopped, running, error
    start_time: str | None = None
    error_message: str | None = None


class BaseTextualApp(App):
    """Base class for all Calcpad applications."""

    APP_CONFIG: AppConfig
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.app_id: str | None = None
        self.started_at = datetime.now().isoformat()
        self.output_buffer: list[str] = []  # Recent interactions

    @classmethod
    def get_config(cls) -> AppConfig:
        """Get application configuration."""
        return cls.APP_CONFIG

    @classmethod
    def get_description(cls) -> str:
        return cls.APP_CONFIG.description

    def set_app_id(self, app_id: str) -> None:
        self.app_id = app_id

    def get_status(self) -> AppStatus:
        """Get current application status."""
        raise NotImplementedError("Subclasses must implement get_status()")

    async def get_app_specific_state(self) -> dict[str, Any]:
        """Get app-specific state. Override in subclasses if needed."""
        return {}

    async def get_screen_state(self) -> dict[str, Any]:
        """Get the current screen state.

        Returns:
            Dictionary with the app's name, title, focus, recent output and
            whatever the app itself reports.
        """
        screen_data = {
            "app_name": self.APP_CONFIG.name,
            "title": self.title,
            "size": {"width": self.size.width, "height": self.size.height},
            "focused_widget": str(self.focused) if self.focused else None,
            "output_buffer": self.output_buffer[-20:],
            "timestamp": datetime.now().isoformat()
        }
        screen_data.update(await self.get_app_specific_state())
        return screen_data

    def _log_output(self, message: str) -> None:
        """Add message to output buffer."""
        self.output_buffer.append(f"[{datetime.now().isoformat()}] {message}")
        # Keep buffer size manageable
        if len(self.output_buffer) > 1000:
            self.output_buffer = self.output_buffer[-500:]


class AppRegistry:
    """Registry of available applications."""

    _apps: dict[str, type[BaseTextualApp]] = {}

    @classmethod
    def register(cls, app_class: type[BaseTextualApp]) -> None:
        """Register an application class."""
        config = app_class.get_config()
        cls._apps[config.name] = app_class

    @classmethod
    def get_app_class(cls, name: str) -> type[BaseTextualApp] | None:
        """Get application class by name."""
        return cls._apps.get(name)

    @classmethod
    def list_apps(cls) -> list[AppConfig]:
        """List all registered applications."""
        return [app_class.get_config() for app_class in cls._apps.values()]


def register_app(app_class: type[BaseTextualApp]):
    """Decorator to register an application."""
    AppRegistry.register(app_class)
    return app_class
