"""BLE UUIDs and the tables of well-known GATT identifiers."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass
from typing import Iterable, Optional

__all__ = [
    "UUID",
    "KnownEntry",
    "uuid16",
    "parse_uuid",
    "uuid_contains",
    "reverse_bytes",
    "known_service",
    "known_attribute",
    "known_descriptor",
    "known_characteristic",
]

_VALID_LENGTHS = (2, 16)
_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def _check_length(n: int) -> None:
    if n not in _VALID_LENGTHS:
        raise ValueError(f"UUIDs must have length 2 or 16, got {n}")


def reverse_bytes(data: bytes) -> bytes:
    """Return a reversed copy of ``data``."""
    return bytes(reversed(bytes(data)))


class UUID:
    """An immutable BLE UUID of 2 or 16 bytes, held in wire (little-endian) order."""

    __slots__ = ("_b",)

    def __init__(self, data: bytes) -> None:
        raw = bytes(data)
        _check_length(len(raw))
        self._b = raw

    def __len__(self) -> int:
        return len(self._b)

    def __str__(self) -> str:
        return reverse_bytes(self._b).hex()

    def __repr__(self) -> str:
        return f"UUID('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UUID):
            return NotImplemented
        return self._b == other._b

    def __hash__(self) -> int:
        return hash(self._b)

    def to_bytes(self) -> bytes:
        """Return the UUID's bytes in wire order."""
        return self._b


def uuid16(value: int) -> UUID:
    """Build a 16-bit UUID such as 0x1800."""
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"16-bit UUID out of range: {value:#x}")
    return UUID(struct.pack("<H", value))


def parse_uuid(text: str) -> UUID:
    """Parse a UUID string such as "1800" or "34DA3AD1-7110-41A1-B1EF-4430F509CDE7"."""
    digits = text.replace("-", "")
    if not _HEX_RE.fullmatch(digits) or len(digits) % 2:
        raise ValueError(f"invalid hex in UUID: {text!r}")
    raw = bytes.fromhex(digits)
    _check_length(len(raw))
    return UUID(reverse_bytes(raw))


def uuid_contains(uuids: Optional[Iterable[UUID]], u: UUID) -> bool:
    """Report whether ``u`` is among ``uuids``; ``None`` matches everything."""
    if uuids is None:
        return True
    return any(a == u for a in uuids)


@dataclass(frozen=True)
class KnownEntry:
    """A human-readable name and specification type for a known UUID."""

    name: str
    type: str = ""


_S = "org.bluetooth.service."
_KNOWN_SERVICES = {
    "1800": KnownEntry("Generic Access", _S + "generic_access"),
    "1801": KnownEntry("Generic Attribute", _S + "generic_attribute"),
    "1802": KnownEntry("Immediate Alert", _S + "immediate_alert"),
    "1803": KnownEntry("Link Loss", _S + "link_loss"),
    "1804": KnownEntry("Tx Power", _S + "tx_power"),
    "1805": KnownEntry("Current Time Service", _S + "current_time"),
    "1806": KnownEntry("Reference Time Update Service", _S + "reference_time_update"),
    "1807": KnownEntry("Next DST Change Service", _S + "next_dst_change"),
    "1808": KnownEntry("Glucose", _S + "glucose"),
    "1809": KnownEntry("Health Thermometer", _S + "health_thermometer"),
    "180a": KnownEntry("Device Information", _S + "device_information"),
    "180d": KnownEntry("Heart Rate", _S + "heart_rate"),
    "180e": KnownEntry("Phone Alert Status Service", _S + "phone_alert_service"),
    "180f": KnownEntry("Battery Service", _S + "battery_service"),
    "1810": KnownEntry("Blood Pressure", _S + "blood_pressuer"),
    "1811": KnownEntry("Alert Notification Service", _S + "alert_notification"),
    "1812": KnownEntry("Human Interface Device", _S + "human_interface_device"),
    "1813": KnownEntry("Scan Parameters", _S + "scan_parameters"),
    "1814": KnownEntry("Running Speed and Cadence", _S + "running_speed_and_cadence"),
    "1815": KnownEntry("Cycling Speed and Cadence", _S + "cycling_speed_and_cadence"),
    "d0611e78bbb44591a5f8487910ae4366": KnownEntry("Apple Continuity Service"),
    "7905f431b5ce4e99a40f4b1e122d00d0": KnownEntry("Apple Notification Center Service"),
    "69d1d8f345e149a898219bbdfdaad9d9": KnownEntry("Control Point"),
    "9fbf120d630142d98c5825e699a21dbd": KnownEntry("Notification Source"),
    "22eac6e924d64bb5be44b36ace7c7bfb": KnownEntry("Data Source"),
    "89d3502b0f36433a8ef4c502ad55f8dc": KnownEntry("Apple Media Service"),
    "9b3c81d857b14a8ab8df0e56f7ca51c2": KnownEntry("Remote Command"),
    "2f7cabce808d411f9a0cbb92ba96c102": KnownEntry("Entity Update"),
    "c6b2f38c23ab46d8a6aba3a870bbd5d7": KnownEntry("Entity Attribute"),
}

_A = "org.bluetooth.attribute.gatt."
_KNOWN_ATTRIBUTES = {
    "2800": KnownEntry("Primary Service", _A + "primary_service_declaration"),
    "2801": KnownEntry("Secondary Service", _A + "secondary_service_declaration"),
    "2802": KnownEntry("Include", _A + "include_declaration"),
    "2803": KnownEntry("Characteristic", _A + "characteristic_declaration"),
}

_D = "org.bluetooth.descriptor."
_KNOWN_DESCRIPTORS = {
    "2900": KnownEntry("Characteristic Extended Properties",
                       _D + "gatt.characteristic_extended_properties"),
    "2901": KnownEntry("Characteristic User Description",
                       _D + "gatt.characteristic_user_description"),
    "2902": KnownEntry("Client Characteristic Configuration",
                       _D + "gatt.client_characteristic_configuration"),
    "2903": KnownEntry("Server Characteristic Configuration",
                       _D + "gatt.server_characteristic_configuration"),
    "2904": KnownEntry("Characteristic Presentation Format",
                       _D + "gatt.characteristic_presentation_format"),
    "2905": KnownEntry("Characteristic Aggregate Format",
                       _D + "gatt.characteristic_aggregate_format"),
    "2906": KnownEntry("Valid Range", _D + "valid_range"),
    "2907": KnownEntry("External Report Reference", _D + "external_report_reference"),
    "2908": KnownEntry("Report Reference", _D + "report_reference"),
}

_C = "org.bluetooth.characteristic."
_KNOWN_CHARACTERISTICS = {
    "2a00": KnownEntry("Device Name", _C + "gap.device_name"),
    "2a01": KnownEntry("Appearance", _C + "gap.appearance"),
    "2a02": KnownEntry("Peripheral Privacy Flag", _C + "gap.peripheral_privacy_flag"),
    "2a03": KnownEntry("Reconnection Address", _C + "gap.reconnection_address"),
    "2a04": KnownEntry("Peripheral Preferred Connection Parameters",
                       _C + "gap.peripheral_preferred_connection_parameters"),
    "2a05": KnownEntry("Service Changed", _C + "gatt.service_changed"),
    "2a06": KnownEntry("Alert Level", _C + "alert_level"),
    "2a07": KnownEntry("Tx Power Level", _C + "tx_power_level"),
    "2a08": KnownEntry("Date Time", _C + "date_time"),
    "2a09": KnownEntry("Day of Week", _C + "day_of_week"),
    "2a0a": KnownEntry("Day Date Time", _C + "day_date_time"),
    "2a0c": KnownEntry("Exact Time 256", _C + "exact_time_256"),
    "2a0d": KnownEntry("DST Offset", _C + "dst_offset"),
    "2a0e": KnownEntry("Time Zone", _C + "time_zone"),
    "2a0f": KnownEntry("Local Time Information", _C + "local_time_information"),
    "2a11": KnownEntry("Time with DST", _C + "time_with_dst"),
    "2a12": KnownEntry("Time Accuracy", _C + "time_accuracy"),
    "2a13": KnownEntry("Time Source", _C + "time_source"),
    "2a14": KnownEntry("Reference Time Information", _C + "reference_time_information"),
    "2a16": KnownEntry("Time Update Control Point", _C + "time_update_control_point"),
    "2a17": KnownEntry("Time Update State", _C + "time_update_state"),
    "2a18": KnownEntry("Glucose Measurement", _C + "glucose_measurement"),
    "2a19": KnownEntry("Battery Level", _C + "battery_level"),
    "2a1c": KnownEntry("Temperature Measurement", _C + "temperature_measurement"),
    "2a1d": KnownEntry("Temperature Type", _C + "temperature_type"),
    "2a1e": KnownEntry("Intermediate Temperature", _C + "intermediate_temperature"),
    "2a21": KnownEntry("Measurement Interval", _C + "measurement_interval"),
    "2a22": KnownEntry("Boot Keyboard Input Report", _C + "boot_keyboard_input_report"),
    "2a23": KnownEntry("System ID", _C + "system_id"),
    "2a24": KnownEntry("Model Number String", _C + "model_number_string"),
    "2a25": KnownEntry("Serial Number String", _C + "serial_number_string"),
    "2a26": KnownEntry("Firmware Revision String", _C + "firmware_revision_string"),
    "2a27": KnownEntry("Hardware Revision String", _C + "hardware_revision_string"),
    "2a28": KnownEntry("Software Revision String", _C + "software_revision_string"),
    "2a29": KnownEntry("Manufacturer Name String", _C + "manufacturer_name_string"),
    "2a2a": KnownEntry("IEEE 11073-20601 Regulatory Certification Data List",
                       _C + "ieee_11073-20601_regulatory_certification_data_list"),
    "2a2b": KnownEntry("Current Time", _C + "current_time"),
    "2a31": KnownEntry("Scan Refresh", _C + "scan_refresh"),
    "2a32": KnownEntry("Boot Keyboard Output Report", _C + "boot_keyboard_output_report"),
    "2a33": KnownEntry("Boot Mouse Input Report", _C + "boot_mouse_input_report"),
    "2a34": KnownEntry("Glucose Measurement Context", _C + "glucose_measurement_context"),
    "2a35": KnownEntry("Blood Pressure Measurement", _C + "blood_pressure_measurement"),
    "2a36": KnownEntry("Intermediate Cuff Pressure", _C + "intermediate_blood_pressure"),
    "2a37": KnownEntry("Heart Rate Measurement", _C + "heart_rate_measurement"),
    "2a38": KnownEntry("Body Sensor Location", _C + "body_sensor_location"),
    "2a39": KnownEntry("Heart Rate Control Point", _C + "heart_rate_control_point"),
    "2a3f": KnownEntry("Alert Status", _C + "alert_status"),
    "2a40": KnownEntry("Ringer Control Point", _C + "ringer_control_point"),
    "2a41": KnownEntry("Ringer Setting", _C + "ringer_setting"),
    "2a42": KnownEntry("Alert Category ID Bit Mask", _C + "alert_category_id_bit_mask"),
    "2a43": KnownEntry("Alert Category ID", _C + "alert_category_id"),
    "2a44": KnownEntry("Alert Notification Control Point",
                       _C + "alert_notification_control_point"),
    "2a45": KnownEntry("Unread Alert Status", _C + "unread_alert_status"),
    "2a46": KnownEntry("New Alert", _C + "new_alert"),
    "2a47": KnownEntry("Supported New Alert Category", _C + "supported_new_alert_category"),
    "2a48": KnownEntry("Supported Unread Alert Category",
                       _C + "supported_unread_alert_category"),
    "2a49": KnownEntry("Blood Pressure Feature", _C + "blood_pressure_feature"),
    "2a4a": KnownEntry("HID Information", _C + "hid_information"),
    "2a4b": KnownEntry("Report Map", _C + "report_map"),
    "2a4c": KnownEntry("HID Control Point", _C + "hid_control_point"),
    "2a4d": KnownEntry("Report", _C + "report"),
    "2a4e": KnownEntry("Protocol Mode", _C + "protocol_mode"),
    "2a4f": KnownEntry("Scan Interval Window", _C + "scan_interval_window"),
    "2a50": KnownEntry("PnP ID", _C + "pnp_id"),
    "2a51": KnownEntry("Glucose Feature", _C + "glucose_feature"),
    "2a52": KnownEntry("Record Access Control Point", _C + "record_access_control_point"),
    "2a53": KnownEntry("RSC Measurement", _C + "rsc_measurement"),
    "2a54": KnownEntry("RSC Feature", _C + "rsc_feature"),
    "2a55": KnownEntry("SC Control Point", _C + "sc_control_point"),
    "2a5b": KnownEntry("CSC Measurement", _C + "csc_measurement"),
    "2a5c": KnownEntry("CSC Feature", _C + "csc_feature"),
    "2a5d": KnownEntry("Sensor Location", _C + "sensor_location"),
}


def known_service(u: UUID) -> Optional[KnownEntry]:
    """Return the known service entry for ``u``, or ``None``."""
    return _KNOWN_SERVICES.get(str(u))


def known_attribute(u: UUID) -> Optional[KnownEntry]:
    """Return the known attribute-type entry for ``u``, or ``None``."""
    return _KNOWN_ATTRIBUTES.get(str(u))


def known_descriptor(u: UUID) -> Optional[KnownEntry]:
    """Return the known descriptor entry for ``u``, or ``None``."""
    return _KNOWN_DESCRIPTORS.get(str(u))


def known_characteristic(u: UUID) -> Optional[KnownEntry]:
    """Return the known characteristic entry for ``u``, or ``None``."""
    return _KNOWN_CHARACTERISTICS.get(str(u))