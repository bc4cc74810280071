import nox

PYTHON_VERSION = "3.11"
PROJECT_ROOT = ".."


@nox.session(python=PYTHON_VERSION)
def tests(session):
    session.install("-e", f"{PROJECT_ROOT}[test]")
    session.run("pytest", "tests/unit", "tests/integration", *session.posargs)


@nox.session(python=PYTHON_VERSION)
def lint(session):
    session.install("ruff")
    session.run("ruff", "check", ".")


@nox.session(python=PYTHON_VERSION)
def format(session):
    session.install("black", "ruff")
    session.run("black", "--check", "api", "common", "packages", "tests")
    session.run("ruff", "check", ".")


@nox.session(python=PYTHON_VERSION)
def migrations(session):
    session.install("-e", PROJECT_ROOT)
    session.run("alembic", "upgrade", "head")
