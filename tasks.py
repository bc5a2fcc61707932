# type: ignore
import os

from invoke import task


@task
def venv(ctx):
    """Create .venv with runtime, test and dev dependencies."""
    ctx.run("uv sync --extra test --extra dev")


@task
def clean(ctx):
    """
    Remove untracked files (saved plans, caches, build output).
    Asks before deleting anything.
    """
    ctx.run("git clean -nfdx")

    response = input("Remove the files listed above? (y/n) [n]: ").strip().lower()
    if response == "y":
        ctx.run("git clean -fdx")


@task
def lint(ctx):
    """Run ruff and mypy over the package and tests."""
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """Run tests with coverage information."""
    ctx.run("pytest --cov=fleetplan --cov-report=term-missing", pty=True)


@task
def sample_plan(ctx):
    """Plan the bundled sample fleet into a throwaway data directory."""
    env = {"FLEETPLAN_CONFIG": ".sample/config.toml"}
    ctx.run("fleetplan config init --force", env=env)
    ctx.run("fleetplan init --data-dir .sample", env=env)
    ctx.run("fleetplan plan .sample/fleet.yaml", env=env, pty=True)


@task
def build_package(ctx):
    """Build sdist and wheel with uv."""
    ctx.run("rm -rf dist")
    ctx.run("uv build")


@task
def release(ctx):
    """Build and publish to PyPI using uv."""
    token = os.getenv("PYPI_TOKEN")
    if not token:
        raise ValueError("PYPI_TOKEN environment variable is not set")

    ctx.run("invoke build-package")
    ctx.run(f"uv publish --token {token}")
