[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blegatt"
version = "0.1.0"
description = "Bluetooth Low Energy building blocks: UUIDs, ATT response writing, HCI commands and events, ACL/L2CAP framing"
requires-python = ">=3.10"
dependencies = []
keywords = ["bluetooth", "ble", "gatt", "hci", "l2cap", "att", "uuid"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Communications",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blegatt"]

[tool.pytest.ini_options]
addopts = "-ra"
