[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kubitect"
version = "3.5.0"
description = "Find Kubernetes cluster directories, export their files, and decide which configuration changes may be applied"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kubernetes",
    "cluster",
    "kubeconfig",
    "configuration",
    "rules",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kubitect = "kubitect.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["kubitect"]

[tool.hatch.build.targets.sdist]
include = ["kubitect", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
