[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "satkit"
version = "0.1.0"
description = "DIMACS CNF reading, solution checking and option handling for SAT solver tooling"
requires-python = ">=3.10"
dependencies = []
keywords = ["sat", "cnf", "dimacs", "satisfiability", "boolean"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
satkit-cnf-stats = "satkit.cnf_stats:main"

[tool.hatch.build.targets.wheel]
packages = ["satkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
