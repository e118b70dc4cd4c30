from pathlib import Path
from setuptools import setup, find_packages

BASE_DIR = Path(__file__).parent

# ----------------------------------------------------------------------
# Core version & requirements (the library itself)
# ----------------------------------------------------------------------
version = (BASE_DIR / ".version").read_text().strip()
long_description = (BASE_DIR / "README.md").read_text(encoding="utf-8")
requirements_lib = (BASE_DIR / "requirements_lib.txt").read_text().splitlines()

# ----------------------------------------------------------------------
# Test requirements
# ----------------------------------------------------------------------
requirements_test = (BASE_DIR / "requirements_test.txt").read_text().splitlines()

# ----------------------------------------------------------------------
# Extras handling
# ----------------------------------------------------------------------
extras = {
    "test": requirements_test,
}

# ----------------------------------------------------------------------
setup(
    name="audit-client",
    version=version,
    description="Audit client – submit audit records and drive audit replays",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    packages=find_packages(
        where=".",
        include=[
            "audit_client_lib*",
            "audit_client_cli*",
        ],
        exclude=("tests", "docs"),
    ),
    python_requires=">=3.10",
    install_requires=requirements_lib,
    extras_require=extras,
    entry_points={
        "console_scripts": [
            "audit-replay=audit_client_cli.replay:main",
        ]
    },
)
