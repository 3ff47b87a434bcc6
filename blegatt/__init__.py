"""Bluetooth Low Energy building blocks: UUIDs, ATT response writing, HCI and ACL framing."""

__version__ = "0.1.0"