[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vmdhcp"
version = "0.1.0"
description = "IP pool and VM network configuration models, MAC-to-IP caching and option parsing for a VM DHCP controller"
requires-python = ">=3.10"
dependencies = []
keywords = ["dhcp", "ipam", "virtual-machines", "kubernetes", "networking", "ippool"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vmdhcp"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
