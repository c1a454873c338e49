[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gsmlink"
version = "0.1.0"
description = "Non-blocking driver and SMS monitor for SIM800L GSM modems over a serial line"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = ["gsm", "sim800l", "sms", "at-commands", "modem", "serial"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Telephony",
    "Topic :: Terminals :: Serial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gsmlink = "gsmlink.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gsmlink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
