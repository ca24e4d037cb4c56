"""Device signals. No device data reaches the proxy, so both are always False."""

from risk_proxy.models import DeviceSignals


def check_device() -> DeviceSignals:
    return DeviceSignals(used_before=False, bot_like=False)
