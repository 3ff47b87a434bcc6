"""HCI command opcodes: group (OGF) and command (OCF) fields packed into 16 bits."""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple

__all__ = ["OGF", "Opcode", "make_opcode", "split_opcode"]

_OCF_BITS = 10
_OCF_MASK = (1 << _OCF_BITS) - 1
_OGF_MAX = 0x3F


class OGF(IntEnum):
    """Opcode group fields."""

    LINK_CTL = 0x01
    LINK_POLICY = 0x02
    HOST_CTL = 0x03
    INFO_PARAM = 0x04
    STATUS_PARAM = 0x05
    LE_CTL = 0x08
    TESTING_CMD = 0x3E
    VENDOR_CMD = 0x3F


def make_opcode(ogf: int, ocf: int) -> int:
    """Pack a group field and a command field into an opcode."""
    if not 0 <= ogf <= _OGF_MAX:
        raise ValueError(f"OGF out of range: {ogf:#x}")
    if not 0 <= ocf <= _OCF_MASK:
        raise ValueError(f"OCF out of range: {ocf:#x}")
    return (ogf << _OCF_BITS) | ocf


def split_opcode(opcode: int) -> Tuple[int, int]:
    """Return the ``(ogf, ocf)`` pair of an opcode."""
    if not 0 <= opcode <= 0xFFFF:
        raise ValueError(f"opcode out of range: {opcode:#x}")
    return opcode >> _OCF_BITS, opcode & _OCF_MASK


_LINK = OGF.LINK_CTL << _OCF_BITS
_POLICY = OGF.LINK_POLICY << _OCF_BITS
_HOST = OGF.HOST_CTL << _OCF_BITS
_INFO = OGF.INFO_PARAM << _OCF_BITS
_LE = OGF.LE_CTL << _OCF_BITS


class Opcode(IntEnum):
    """Known HCI command opcodes."""

    # Link control commands
    INQUIRY = _LINK | 0x0001
    INQUIRY_CANCEL = _LINK | 0x0002
    PERIODIC_INQUIRY = _LINK | 0x0003
    EXIT_PERIODIC_INQUIRY = _LINK | 0x0004
    CREATE_CONN = _LINK | 0x0005
    DISCONNECT = _LINK | 0x0006
    CREATE_CONN_CANCEL = _LINK | 0x0008
    ACCEPT_CONN_REQ = _LINK | 0x0009
    REJECT_CONN_REQ = _LINK | 0x000A
    LINK_KEY_REPLY = _LINK | 0x000B
    LINK_KEY_NEG_REPLY = _LINK | 0x000C
    PIN_CODE_REPLY = _LINK | 0x000D
    PIN_CODE_NEG_REPLY = _LINK | 0x000E
    SET_CONN_PTYPE = _LINK | 0x000F
    AUTH_REQUESTED = _LINK | 0x0011
    SET_CONN_ENCRYPT = _LINK | 0x0013
    CHANGE_CONN_LINK_KEY = _LINK | 0x0015
    MASTER_LINK_KEY = _LINK | 0x0017
    REMOTE_NAME_REQ = _LINK | 0x0019
    REMOTE_NAME_REQ_CANCEL = _LINK | 0x001A
    READ_REMOTE_FEATURES = _LINK | 0x001B
    READ_REMOTE_EXT_FEATURES = _LINK | 0x001C
    READ_REMOTE_VERSION = _LINK | 0x001D
    READ_CLOCK_OFFSET = _LINK | 0x001F
    READ_LMP_HANDLE = _LINK | 0x0020
    SETUP_SYNC_CONN = _LINK | 0x0028
    ACCEPT_SYNC_CONN_REQ = _LINK | 0x0029
    REJECT_SYNC_CONN_REQ = _LINK | 0x002A
    IO_CAPABILITY_REPLY = _LINK | 0x002B
    USER_CONFIRM_REPLY = _LINK | 0x002C
    USER_CONFIRM_NEG_REPLY = _LINK | 0x002D
    USER_PASSKEY_REPLY = _LINK | 0x002E
    USER_PASSKEY_NEG_REPLY = _LINK | 0x002F
    REMOTE_OOB_DATA_REPLY = _LINK | 0x0030
    REMOTE_OOB_DATA_NEG_REPLY = _LINK | 0x0033
    IO_CAPABILITY_NEG_REPLY = _LINK | 0x0034
    CREATE_PHYSICAL_LINK = _LINK | 0x0035
    ACCEPT_PHYSICAL_LINK = _LINK | 0x0036
    DISCONNECT_PHYSICAL_LINK = _LINK | 0x0037
    CREATE_LOGICAL_LINK = _LINK | 0x0038
    ACCEPT_LOGICAL_LINK = _LINK | 0x0039
    DISCONNECT_LOGICAL_LINK = _LINK | 0x003A
    LOGICAL_LINK_CANCEL = _LINK | 0x003B
    FLOW_SPEC_MODIFY = _LINK | 0x003C

    # Link policy commands
    HOLD_MODE = _POLICY | 0x0001
    SNIFF_MODE = _POLICY | 0x0003
    EXIT_SNIFF_MODE = _POLICY | 0x0004
    PARK_MODE = _POLICY | 0x0005
    EXIT_PARK_MODE = _POLICY | 0x0006
    QOS_SETUP = _POLICY | 0x0007
    ROLE_DISCOVERY = _POLICY | 0x0009
    SWITCH_ROLE = _POLICY | 0x000B
    READ_LINK_POLICY = _POLICY | 0x000C
    WRITE_LINK_POLICY = _POLICY | 0x000D
    READ_DEFAULT_LINK_POLICY = _POLICY | 0x000E
    WRITE_DEFAULT_LINK_POLICY = _POLICY | 0x000F
    FLOW_SPECIFICATION = _POLICY | 0x0010
    SNIFF_SUBRATING = _POLICY | 0x0011

    # Host controller and baseband commands
    SET_EVENT_MASK = _HOST | 0x0001
    RESET = _HOST | 0x0003
    SET_EVENT_FLT = _HOST | 0x0005
    FLUSH = _HOST | 0x0008
    READ_PIN_TYPE = _HOST | 0x0009
    WRITE_PIN_TYPE = _HOST | 0x000A
    CREATE_NEW_UNIT_KEY = _HOST | 0x000B
    READ_STORED_LINK_KEY = _HOST | 0x000D
    WRITE_STORED_LINK_KEY = _HOST | 0x0011
    DELETE_STORED_LINK_KEY = _HOST | 0x0012
    WRITE_LOCAL_NAME = _HOST | 0x0013
    READ_LOCAL_NAME = _HOST | 0x0014
    READ_CONN_ACCEPT_TIMEOUT = _HOST | 0x0015
    WRITE_CONN_ACCEPT_TIMEOUT = _HOST | 0x0016
    READ_PAGE_TIMEOUT = _HOST | 0x0017
    WRITE_PAGE_TIMEOUT = _HOST | 0x0018
    READ_SCAN_ENABLE = _HOST | 0x0019
    WRITE_SCAN_ENABLE = _HOST | 0x001A
    READ_PAGE_ACTIVITY = _HOST | 0x001B
    WRITE_PAGE_ACTIVITY = _HOST | 0x001C
    READ_INQ_ACTIVITY = _HOST | 0x001D
    WRITE_INQ_ACTIVITY = _HOST | 0x001E
    READ_AUTH_ENABLE = _HOST | 0x001F
    WRITE_AUTH_ENABLE = _HOST | 0x0020
    READ_ENCRYPT_MODE = _HOST | 0x0021
    WRITE_ENCRYPT_MODE = _HOST | 0x0022
    READ_CLASS_OF_DEV = _HOST | 0x0023
    WRITE_CLASS_OF_DEVICE = _HOST | 0x0024
    READ_VOICE_SETTING = _HOST | 0x0025
    WRITE_VOICE_SETTING = _HOST | 0x0026
    READ_AUTOMATIC_FLUSH_TIMEOUT = _HOST | 0x0027
    WRITE_AUTOMATIC_FLUSH_TIMEOUT = _HOST | 0x0028
    READ_NUM_BROADCAST_RETRANS = _HOST | 0x0029
    WRITE_NUM_BROADCAST_RETRANS = _HOST | 0x002A
    READ_HOLD_MODE_ACTIVITY = _HOST | 0x002B
    WRITE_HOLD_MODE_ACTIVITY = _HOST | 0x002C
    READ_TRANSMIT_POWER_LEVEL = _HOST | 0x002D
    READ_SYNC_FLOW_ENABLE = _HOST | 0x002E
    WRITE_SYNC_FLOW_ENABLE = _HOST | 0x002F
    SET_CONTROLLER_TO_HOST_FC = _HOST | 0x0031
    HOST_BUFFER_SIZE = _HOST | 0x0033
    HOST_NUM_COMP_PKTS = _HOST | 0x0035
    READ_LINK_SUPERVISION_TIMEOUT = _HOST | 0x0036
    WRITE_LINK_SUPERVISION_TIMEOUT = _HOST | 0x0037
    READ_NUM_SUPPORTED_IAC = _HOST | 0x0038
    READ_CURRENT_IAC_LAP = _HOST | 0x0039
    WRITE_CURRENT_IAC_LAP = _HOST | 0x003A
    READ_PAGE_SCAN_PERIOD_MODE = _HOST | 0x003B
    WRITE_PAGE_SCAN_PERIOD_MODE = _HOST | 0x003C
    READ_PAGE_SCAN_MODE = _HOST | 0x003D
    WRITE_PAGE_SCAN_MODE = _HOST | 0x003E
    SET_AFH_CLASSIFICATION = _HOST | 0x003F
    READ_INQUIRY_SCAN_TYPE = _HOST | 0x0042
    WRITE_INQUIRY_SCAN_TYPE = _HOST | 0x0043
    READ_INQUIRY_MODE = _HOST | 0x0044
    WRITE_INQUIRY_MODE = _HOST | 0x0045
    READ_PAGE_SCAN_TYPE = _HOST | 0x0046
    WRITE_PAGE_SCAN_TYPE = _HOST | 0x0047
    READ_AFH_MODE = _HOST | 0x0048
    WRITE_AFH_MODE = _HOST | 0x0049
    READ_EXT_INQUIRY_RESPONSE = _HOST | 0x0051
    WRITE_EXT_INQUIRY_RESPONSE = _HOST | 0x0052
    REFRESH_ENCRYPTION_KEY = _HOST | 0x0053
    READ_SIMPLE_PAIRING_MODE = _HOST | 0x0055
    WRITE_SIMPLE_PAIRING_MODE = _HOST | 0x0056
    READ_LOCAL_OOB_DATA = _HOST | 0x0057
    READ_INQ_RESPONSE_TRANSMIT_POWER_LEVEL = _HOST | 0x0058
    WRITE_INQUIRY_TRANSMIT_POWER_LEVEL = _HOST | 0x0059
    READ_DEFAULT_ERROR_DATA_REPORTING = _HOST | 0x005A
    WRITE_DEFAULT_ERROR_DATA_REPORTING = _HOST | 0x005B
    ENHANCED_FLUSH = _HOST | 0x005F
    SEND_KEYPRESS_NOTIFY = _HOST | 0x0060
    READ_LOGICAL_LINK_ACCEPT_TIMEOUT = _HOST | 0x0061
    WRITE_LOGICAL_LINK_ACCEPT_TIMEOUT = _HOST | 0x0062
    SET_EVENT_MASK_PAGE2 = _HOST | 0x0063
    READ_LOCATION_DATA = _HOST | 0x0064
    WRITE_LOCATION_DATA = _HOST | 0x0065
    READ_FLOW_CONTROL_MODE = _HOST | 0x0066
    WRITE_FLOW_CONTROL_MODE = _HOST | 0x0067
    READ_ENHANCED_TRANSMIT_POWER_LEVEL = _HOST | 0x0068
    READ_BEST_EFFORT_FLUSH_TIMEOUT = _HOST | 0x0069
    WRITE_BEST_EFFORT_FLUSH_TIMEOUT = _HOST | 0x006A
    READ_LE_HOST_SUPPORTED = _HOST | 0x006C
    WRITE_LE_HOST_SUPPORTED = _HOST | 0x006D

    # Informational parameters
    READ_LOCAL_VERSION_INFORMATION = _INFO | 0x0001
    READ_LOCAL_SUPPORTED_COMMANDS = _INFO | 0x0002
    READ_LOCAL_SUPPORTED_FEATURES = _INFO | 0x0003
    READ_LOCAL_EXTENDED_FEATURES = _INFO | 0x0004
    READ_BUFFER_SIZE = _INFO | 0x0005
    READ_BD_ADDR = _INFO | 0x0009
    READ_DATA_BLOCK_SIZE = _INFO | 0x000A
    READ_LOCAL_SUPPORTED_CODECS = _INFO | 0x000B

    # LE controller commands
    LE_SET_EVENT_MASK = _LE | 0x0001
    LE_READ_BUFFER_SIZE = _LE | 0x0002
    LE_READ_LOCAL_SUPPORTED_FEATURES = _LE | 0x0003
    LE_SET_RANDOM_ADDRESS = _LE | 0x0005
    LE_SET_ADVERTISING_PARAMETERS = _LE | 0x0006
    LE_READ_ADVERTISING_CHANNEL_TX_POWER = _LE | 0x0007
    LE_SET_ADVERTISING_DATA = _LE | 0x0008
    LE_SET_SCAN_RESPONSE_DATA = _LE | 0x0009
    LE_SET_ADVERTISE_ENABLE = _LE | 0x000A
    LE_SET_SCAN_PARAMETERS = _LE | 0x000B
    LE_SET_SCAN_ENABLE = _LE | 0x000C
    LE_CREATE_CONN = _LE | 0x000D
    LE_CREATE_CONN_CANCEL = _LE | 0x000E
    LE_READ_WHITE_LIST_SIZE = _LE | 0x000F
    LE_CLEAR_WHITE_LIST = _LE | 0x0010
    LE_ADD_DEVICE_TO_WHITE_LIST = _LE | 0x0011
    LE_REMOVE_DEVICE_FROM_WHITE_LIST = _LE | 0x0012
    LE_CONN_UPDATE = _LE | 0x0013
    LE_SET_HOST_CHANNEL_CLASSIFICATION = _LE | 0x0014
    LE_READ_CHANNEL_MAP = _LE | 0x0015
    LE_READ_REMOTE_USED_FEATURES = _LE | 0x0016
    LE_ENCRYPT = _LE | 0x0017
    LE_RAND = _LE | 0x0018
    LE_START_ENCRYPTION = _LE | 0x0019
    LE_LTK_REPLY = _LE | 0x001A
    LE_LTK_NEG_REPLY = _LE | 0x001B
    LE_READ_SUPPORTED_STATES = _LE | 0x001C
    LE_RECEIVER_TEST = _LE | 0x001D
    LE_TRANSMITTER_TEST = _LE | 0x001E
    LE_TEST_END = _LE | 0x001F
    LE_REMOTE_CONNECTION_PARAMETER_REPLY = _LE | 0x0020
    LE_REMOTE_CONNECTION_PARAMETER_NEG_REPLY = _LE | 0x0021