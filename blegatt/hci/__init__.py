"""HCI opcodes, command parameter encoding and command/response matching."""