[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "routeconf"
version = "0.1.0"
description = "Apply a network interface address, a route and DNS servers from a TOML file"
requires-python = ">=3.10"
dependencies = []
keywords = ["network", "routing", "dns", "resolv.conf", "iproute2", "toml", "configuration"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
routeconf = "routeconf.configure:main"

[tool.hatch.build.targets.wheel]
packages = ["routeconf"]

[tool.hatch.build.targets.sdist]
include = ["routeconf", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
