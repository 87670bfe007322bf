[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cartdiscounts"
version = "0.1.0"
description = "Shopping-cart discount engine: brand, category, voucher and bank offers applied by priority"
requires-python = ">=3.10"
dependencies = []
keywords = ["discount", "cart", "voucher", "coupon", "e-commerce", "pricing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cartdiscounts-demo = "cartdiscounts.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cartdiscounts"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
