[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hostfetch"
version = "0.1.0"
description = "Gather system information on Linux hosts: OS, host, shell, terminal, GPU, memory, mounts, packages and more"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["fetch", "system-information", "linux", "sysinfo", "procfs", "sysfs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hostfetch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
