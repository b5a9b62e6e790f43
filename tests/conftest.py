"""Shared fixtures for the CDK template tests."""
import json
from pathlib import Path

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from stacks.apprunner_stack import AppRunnerStack

SNAPSHOT_DIR = Path(__file__).parent / "__snapshots__"

IMAGE_IDENTIFIER = "703671892588.dkr.ecr.us-west-2.amazonaws.com/apprunner-demo:abc123"


@pytest.fixture
def default_props() -> dict:
    return {
        "env": cdk.Environment(account="703671892588", region="us-west-2"),
        "commit_sha": "abc123",
        "ecr_repository_name": "apprunner-demo",
        "app_runner_service_name": "AppRunnerDemoService",
        "iam_role_name": "AppRunnerECRAccessRole",
    }


@pytest.fixture
def synth(default_props):
    """Build a fresh App + AppRunnerStack and return its Template."""

    def _synth(**overrides) -> Template:
        props = {**default_props, "image_identifier": IMAGE_IDENTIFIER, **overrides}
        app = cdk.App()
        stack = AppRunnerStack(app, "TestStack", **props)
        return Template.from_stack(stack)

    return _synth


@pytest.fixture
def template(synth) -> Template:
    return synth()


def pytest_addoption(parser):
    parser.addoption(
        "--snapshot-update",
        action="store_true",
        default=False,
        help="Rewrite tests/__snapshots__/*.json from the current output.",
    )


def match_snapshot(path: Path, value, update: bool = False) -> None:
    """Assert value equals the JSON stored at path, or rewrite it when update is set."""
    if update:
        path.parent.mkdir(exist_ok=True)
        path.write_text(json.dumps(value, indent=2, sort_keys=True) + "\n")
        return

    assert path.exists(), (
        f"missing snapshot {path.name}; run pytest --snapshot-update and review the diff"
    )
    assert json.loads(path.read_text()) == value


@pytest.fixture
def snapshot(request):
    """
    Compare a JSON-serializable value against tests/__snapshots__/<test>.json.

    A missing or different snapshot fails. Pass --snapshot-update to rewrite it.
    """
    update = request.config.getoption("--snapshot-update")

    def _match(value) -> None:
        match_snapshot(SNAPSHOT_DIR / f"{request.node.name}.json", value, update)

    return _match
