[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "caduceus"
version = "0.1.0"
description = "Scan IPs and CIDR ranges for TLS certificates and extract the domains they name"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["tls", "certificates", "reconnaissance", "domains", "cidr", "scanner"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Information Technology",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
caduceus = "caduceus.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["caduceus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
