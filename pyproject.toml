[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "servicenest"
version = "0.1.0"
description = "Home-services marketplace backend core: SQL query builders, a shared MySQL connection and request controllers for admins, householders and service providers."
requires-python = ">=3.10"
dependencies = [
    "pymysql",
]
keywords = [
    "home services",
    "marketplace",
    "mysql",
    "sql",
    "controllers",
    "booking",
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["servicenest"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
