from setuptools import find_packages, setup

PACKAGE_NAME = "size_timeouts"
PACKAGE_VERSION = "1.0.0"
PACKAGE_DESCRIPTION = """Per-test-method timeouts for pytest suites, chosen from each
test class's declared size category (small, medium, large)
"""
INSTALL_REQUIREMENTS = [
    "pytest>=7.0",
    "pytest-timeout>=2.1",
    "loguru",
]

setup(
    name=PACKAGE_NAME,
    version=PACKAGE_VERSION,
    description=PACKAGE_DESCRIPTION,
    license="Apache-2.0",
    packages=find_packages(include=["size_timeouts", "size_timeouts.*"]),
    install_requires=INSTALL_REQUIREMENTS,
    zip_safe=False,
    python_requires=">=3.10",
)
