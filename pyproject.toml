[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "c3mbus"
version = "0.1.0"
description = "Host-side models of ESP32-C3 mikroBUS board logic: ESP-NOW queueing, peer lists, debug tags, buzzer melodies, NeoPixel encoding, chip diagnostics and NVS listings"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "esp32",
    "esp-now",
    "embedded",
    "neopixel",
    "ws2813",
    "buzzer",
    "ring-buffer",
    "nvs",
]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["c3mbus"]

[tool.pytest.ini_options]
addopts = "-ra"
