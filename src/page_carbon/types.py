"""Enumerations shared across :mod:`page_carbon`."""

from __future__ import annotations

from enum import Enum
from typing import Final


class DeviceType(str, Enum):
    """Device on which the page is loaded and used."""

    PHONE = "Phone"
    TABLET = "Tablet"
    PC = "PC"
    LAPTOP = "Laptop"


class ContentType(str, Enum):
    """Primary content consumed after the page has loaded."""

    TEXT = "Text"
    VIDEO = "Video"
    AUDIO = "Audio"


class ConnectivityMethod(str, Enum):
    """Last-mile connection carrying the page traffic."""

    G3 = "3G"
    G4 = "4G"
    G5 = "5G"
    WIFI = "WIFI"


class Site(str, Enum):
    """Content source used to select a measured video bitrate."""

    DEFAULT = "Default"
    YLE = "Yle"
    AREENA = "Areena"
    HS = "HS"


class DeviceClass(str, Enum):
    """Traffic-share bucket for a device type."""

    MOBILE = "mobile"
    COMPUTER = "computer"


ALL_CONNECTIVITY_METHODS: Final[tuple[ConnectivityMethod, ...]] = tuple(
    ConnectivityMethod
)


def device_class_for(device_type: DeviceType) -> DeviceClass:
    """Return the traffic-share bucket for ``device_type``."""

    device_type = DeviceType(device_type)
    if device_type is DeviceType.PHONE:
        return DeviceClass.MOBILE
    return DeviceClass.COMPUTER
