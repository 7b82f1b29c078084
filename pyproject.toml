[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procwatch"
version = "0.1.0"
description = "Watch named processes and log when their CPU, memory, disk or network usage goes over set limits"
requires-python = ">=3.10"
dependencies = []
keywords = ["process", "monitoring", "procfs", "cpu", "memory", "disk", "network", "alerts"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
procwatch = "procwatch.monitor:main"

[tool.hatch.build.targets.wheel]
packages = ["procwatch"]

[tool.pytest.ini_options]
addopts = "-ra"
