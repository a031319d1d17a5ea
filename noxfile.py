"""Nox sessions for the TraceWise SDK across supported Python versions."""

import nox

nox.options.sessions = ["tests"]
nox.options.default_venv_backend = "uv"

PYTHON_VERSIONS = ["3.10", "3.11", "3.12", "3.13"]


@nox.session(python=PYTHON_VERSIONS)
def tests(session):
    """Run the unit tests with pytest."""
    session.install(".[full,dev]")
    session.run("pytest", "tests/", "-q", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def coverage(session):
    """Run the unit tests with a coverage report."""
    session.install(".[full,dev]")
    session.run(
        "pytest", "tests/", "--cov=tracewise", "--cov-report=term-missing", *session.posargs
    )


@nox.session(python=PYTHON_VERSIONS)
def type_check(session):
    """Run mypy type checking."""
    session.install(".[full,dev]")
    session.install("mypy")
    session.run("mypy", "src/tracewise", *session.posargs)
