import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]


def _install(session: nox.Session) -> None:
    """Install the project with its test extra into the nox virtualenv."""
    session.install("-e", ".[test]")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no database or HTTP client involved)."""
    _install(session)
    session.run(
        "pytest",
        "tests/catalog/domain/",
        "tests/ordering/domain/",
        "tests/reviews/domain/",
    )


@nox.session(python="3.13")
def coverage(session: nox.Session) -> None:
    """Run the suite with a coverage report for the storefront packages."""
    _install(session)
    session.run(
        "pytest",
        "--cov=catalog",
        "--cov=ordering",
        "--cov=reviews",
        "--cov=shared",
        "--cov-report=term-missing",
    )
