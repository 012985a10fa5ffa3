"""Battery optimization and autostart settings navigation."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from .channels import MethodChannel

logger = logging.getLogger(__name__)

CHANNEL_NAME = "cqut/power"

ACTION_REQUEST_IGNORE_BATTERY_OPTIMIZATIONS = "android.settings.REQUEST_IGNORE_BATTERY_OPTIMIZATIONS"
ACTION_IGNORE_BATTERY_OPTIMIZATION_SETTINGS = "android.settings.IGNORE_BATTERY_OPTIMIZATION_SETTINGS"
ACTION_APPLICATION_DETAILS_SETTINGS = "android.settings.APPLICATION_DETAILS_SETTINGS"

SDK_M = 23
SDK_P = 28

# Vendor autostart managers, tried in order
AUTOSTART_COMPONENTS = (
    ("com.miui.securitycenter", "com.miui.permcenter.autostart.AutoStartManagementActivity"),
    ("com.huawei.systemmanager", "com.huawei.systemmanager.startupmgr.ui.StartupNormalAppListActivity"),
    ("com.huawei.systemmanager", "com.huawei.systemmanager.optimize.process.ProtectActivity"),
    ("com.oppo.safe", "com.oppo.safe.permission.startup.StartupAppListActivity"),
    ("com.coloros.safecenter", "com.coloros.safecenter.permission.startup.StartupAppListActivity"),
    ("com.vivo.permissionmanager", "com.vivo.permissionmanager.activity.BgStartUpManagerActivity"),
    ("com.samsung.android.lool", "com.samsung.android.sm.ui.battery.BatteryActivity"),
)


@dataclass(frozen=True)
class Intent:
    """Description of a settings screen to open."""

    action: Optional[str] = None
    data: Optional[str] = None
    component: Optional[tuple[str, str]] = None


class ActivityStartError(Exception):
    """Raised by a device when a settings screen cannot be opened."""


class DevicePort(ABC):
    """Device capabilities provided by the host platform."""

    @abstractmethod
    def manufacturer(self) -> str:
        pass

    @abstractmethod
    def brand(self) -> str:
        pass

    @abstractmethod
    def sdk_int(self) -> int:
        pass

    @abstractmethod
    def is_ignoring_battery_optimizations(self, package_name: str) -> bool:
        pass

    @abstractmethod
    def is_background_restricted(self) -> bool:
        pass

    @abstractmethod
    def start_activity(self, intent: Intent) -> None:
        """Open ``intent`` in a new task.

        Raises:
            ActivityStartError: If no activity handles the intent.
        """
        pass


class PowerSettings:
    """Answers the power channel's queries for one app package."""

    def __init__(self, device: DevicePort, package_name: str) -> None:
        self._device = device
        self._package_name = package_name

    @property
    def _package_uri(self) -> str:
        return f"package:{self._package_name}"

    def _try_start(self, intent: Intent) -> bool:
        try:
            self._device.start_activity(intent)
        except ActivityStartError as e:
            logger.debug("Could not open %s: %s", intent, e)
            return False
        return True

    def _open_app_details(self) -> bool:
        return self._try_start(Intent(action=ACTION_APPLICATION_DETAILS_SETTINGS, data=self._package_uri))

    def manufacturer(self) -> str:
        return f"{self._device.manufacturer()} {self._device.brand()}".strip()

    def is_ignoring_battery_optimizations(self) -> Optional[bool]:
        if self._device.sdk_int() < SDK_M:
            return None
        return self._device.is_ignoring_battery_optimizations(self._package_name)

    def is_background_restricted(self) -> Optional[bool]:
        if self._device.sdk_int() < SDK_P:
            return None
        return self._device.is_background_restricted()

    def request_ignore_battery_optimizations(self) -> bool:
        if self._device.sdk_int() < SDK_M:
            return False
        return self._try_start(Intent(action=ACTION_REQUEST_IGNORE_BATTERY_OPTIMIZATIONS, data=self._package_uri))

    def open_battery_optimization_settings(self) -> bool:
        if self._try_start(Intent(action=ACTION_IGNORE_BATTERY_OPTIMIZATION_SETTINGS)):
            return True
        return self._open_app_details()

    def open_app_details_settings(self) -> bool:
        return self._open_app_details()

    def open_autostart_settings(self) -> bool:
        """Open the first vendor autostart screen available, else app details."""
        for component in AUTOSTART_COMPONENTS:
            if self._try_start(Intent(component=component)):
                return True
        logger.info("No vendor autostart screen on %s, opening app details", self.manufacturer())
        return self._open_app_details()


def power_channel(settings: PowerSettings) -> MethodChannel:
    """Build the channel exposing the power and autostart queries."""
    channel = MethodChannel(CHANNEL_NAME)
    handlers = {
        "manufacturer": settings.manufacturer,
        "isIgnoringBatteryOptimizations": settings.is_ignoring_battery_optimizations,
        "isBackgroundRestricted": settings.is_background_restricted,
        "requestIgnoreBatteryOptimizations": settings.request_ignore_battery_optimizations,
        "openBatteryOptimizationSettings": settings.open_battery_optimization_settings,
        "openAppDetailsSettings": settings.open_app_details_settings,
        "openAutoStartSettings": settings.open_autostart_settings,
    }
    for method, query in handlers.items():
        channel.register(method, lambda arguments, query=query: query())
    return channel
