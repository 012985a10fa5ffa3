"""Bridge module for the method channels called by the app shell."""

from .channels import ChannelError, ChannelResult, MethodChannel
from .downloads import DownloadManager, DownloadTicket, downloads_channel
from .power import ActivityStartError, DevicePort, Intent, PowerSettings, power_channel
from .widgets import widget_channel

__all__ = [
    "ActivityStartError",
    "ChannelError",
    "ChannelResult",
    "DevicePort",
    "DownloadManager",
    "DownloadTicket",
    "Intent",
    "MethodChannel",
    "PowerSettings",
    "downloads_channel",
    "power_channel",
    "widget_channel",
]
