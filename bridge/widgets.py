"""Channel letting the app shell refresh widgets after rewriting the cache."""

from typing import Any

from widget.hub import WidgetHub
from .channels import MethodChannel

CHANNEL_NAME = "cqut/widget"


def widget_channel(hub: WidgetHub) -> MethodChannel:
    channel = MethodChannel(CHANNEL_NAME)

    def update_today_widget(arguments: dict[str, Any]) -> None:
        hub.update_all()

    channel.register("updateTodayWidget", update_today_widget)
    return channel
