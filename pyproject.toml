[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chromaprint"
version = "1.5.1"
description = "Audio preprocessing and chroma feature stages for audio fingerprinting"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "fingerprint", "chroma", "resampling", "dsp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chromaprint"]

[tool.pytest.ini_options]
addopts = "-ra"
