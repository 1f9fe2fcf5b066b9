[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "spacebattle"
version = "1.0.0"
description = "A space shooter arcade game: fight off waves of alien ships from behind crumbling shields."
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["game", "arcade", "shooter", "space", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
spacebattle = "spacebattle.app:main"

[tool.setuptools.packages.find]
include = ["spacebattle*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
