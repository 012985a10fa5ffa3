"""Registry of widget instances and the "refresh all widgets" signal."""

import logging
from datetime import date
from typing import Any, Callable, Optional

from .renderers import BaseRenderer, WidgetEnvironment

logger = logging.getLogger(__name__)

ViewSink = Callable[[int, Any], None]


class WidgetHub:
    """Keeps track of placed widgets and pushes fresh views to the host.

    The host registers each widget instance it places and receives every
    rendered view through ``sink``. Rendering is synchronous; toggles on
    the same instance are expected to be serialized by the host.
    """

    def __init__(
        self,
        env: WidgetEnvironment,
        sink: ViewSink,
        clock: Optional[Callable[[], date]] = None,
    ) -> None:
        """Initialize the hub.

        Args:
            env: Stores and theme shared by every widget.
            sink: Called with ``(widget_id, view)`` after each render.
            clock: Returns the current date; ``date.today`` by default.
        """
        self._env = env
        self._sink = sink
        self._clock = clock or date.today
        self._widgets: dict[int, BaseRenderer] = {}

    @property
    def widget_ids(self) -> list[int]:
        return sorted(self._widgets)

    def register(self, widget_id: int, renderer: BaseRenderer) -> Any:
        """Add a widget instance and render it once."""
        self._widgets[widget_id] = renderer
        return self.update(widget_id)

    def remove(self, widget_id: int) -> None:
        """Drop a deleted widget instance and its toggle state."""
        self._widgets.pop(widget_id, None)
        self._env.offsets.forget(widget_id)

    def update(self, widget_id: int) -> Any:
        renderer = self._widgets.get(widget_id)
        if renderer is None:
            raise KeyError(f"Widget {widget_id} is not registered")
        view = renderer.render(self._env, widget_id, self._clock())
        self._sink(widget_id, view)
        return view

    def update_all(self) -> dict[int, Any]:
        """Re-render every registered widget from the current cache contents."""
        logger.debug("Refreshing %d widget(s)", len(self._widgets))
        return {widget_id: self.update(widget_id) for widget_id in self.widget_ids}

    def toggle_day(self, widget_id: Optional[int]) -> Any:
        """Flip a widget between today and tomorrow and re-render it.

        Without a known widget id every widget is refreshed instead.
        """
        if widget_id is None or widget_id not in self._widgets:
            logger.debug("Toggle for unknown widget %s, refreshing all", widget_id)
            return self.update_all()
        self._env.offsets.toggle(widget_id)
        return self.update(widget_id)

    def on_configuration_changed(self, system_dark: Optional[bool] = None) -> dict[int, Any]:
        """Handle a device configuration change such as a theme switch."""
        if system_dark is not None:
            self._env.system_dark = system_dark
        return self.update_all()
