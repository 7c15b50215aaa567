[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cuisine"
version = "0.1.0"
description = "A small JSON web service for a French culinary glossary: dishes, ingredients, sauces, utensils, techniques and recipes"
requires-python = ">=3.10"
keywords = ["cooking", "glossary", "recipes", "rest", "json", "flask", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Natural Language :: French",
    "Natural Language :: Japanese",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask>=2.2",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
cuisine = "cuisine.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cuisine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
