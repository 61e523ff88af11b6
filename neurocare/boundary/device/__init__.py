"""
Device boundary layer.

Exports:
  - InMemoryDeviceChannel: in-process DeviceChannel implementation
  - DeviceCommand: record of a control command sent to the device

System role: Real-time link between the session controller and the device
"""

from neurocare.boundary.device.memory_channel import DeviceCommand, InMemoryDeviceChannel

__all__ = ["DeviceCommand", "InMemoryDeviceChannel"]
