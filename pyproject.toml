[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcrkit"
version = "0.1.0"
description = "Value objects, ports, loggers and test doubles for TPM 2.0 PCR operations"
requires-python = ">=3.10"
dependencies = []
keywords = ["tpm", "tpm2", "pcr", "measurement", "attestation", "security"]
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
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pcrkit"]

[tool.pytest.ini_options]
addopts = "-ra"
