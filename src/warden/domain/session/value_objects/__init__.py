from warden.domain.session.value_objects.device import UNKNOWN_DEVICE, Device

__all__ = ["UNKNOWN_DEVICE", "Device"]
