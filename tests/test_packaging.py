"""Tests that keep the container image free of the CDK toolchain."""
import tomllib
from pathlib import Path

ROOT = Path(__file__).parent.parent

CDK_DISTRIBUTIONS = ("aws-cdk-lib", "constructs")


def _pyproject() -> dict:
    return tomllib.loads((ROOT / "pyproject.toml").read_text())


def _names(requirements) -> set[str]:
    return {r.split(">")[0].split("<")[0].split("=")[0].strip() for r in requirements}


def test_runtime_dependencies_exclude_cdk():
    runtime = _names(_pyproject()["project"]["dependencies"])
    assert runtime.isdisjoint(CDK_DISTRIBUTIONS)


def test_cdk_dependencies_live_in_infra_extra_and_requirements():
    extras = _pyproject()["project"]["optional-dependencies"]
    requirements = (ROOT / "infra" / "requirements.txt").read_text().split()

    assert set(CDK_DISTRIBUTIONS) <= _names(extras["infra"])
    assert set(CDK_DISTRIBUTIONS) <= _names(requirements)


def test_otlp_exporter_is_optional():
    project = _pyproject()["project"]

    assert "opentelemetry-exporter-otlp-proto-http" not in _names(project["dependencies"])
    assert "opentelemetry-exporter-otlp-proto-http" in _names(project["optional-dependencies"]["otlp"])


def test_dockerfile_does_not_ship_infra():
    dockerfile = (ROOT / "Dockerfile").read_text()
    assert "infra" not in dockerfile
