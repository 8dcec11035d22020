"""Nox configuration file for running tests and linting.

The single session installs the project with poetry, runs the unit tests
with coverage for the ``landing_zone`` package and checks code style with
flake8.
"""

# Third-Party
import nox

# Define the Python versions to use for the sessions
python_versions = ["3.12"]

# Define the Nox sessions to run
nox.options.sessions = ["test_and_lint"]

# Reuse existing virtual environments to speed up the process
nox.options.reuse_existing_virtualenvs = True


@nox.session(python=python_versions, venv_backend="venv")
def test_and_lint(session):
    # Install the package with its test extra
    session.run("python", "-m", "pip", "install", "--upgrade", "pip")
    session.install("poetry")
    session.run("poetry", "lock")
    session.run("poetry", "install", "--extras", "test")

    # Run tests with coverage
    session.run(
        "poetry",
        "run",
        "pytest",
        "-s",
        "--cov-report",
        "term-missing",
        "--cov=landing_zone",
        "tests/unit",
    )

    # Run code linting with flake8
    session.run("poetry", "run", "flake8", "src")
