#!/usr/bin/env python3
"""
App Runner Demo — AWS CDK Application

Deploys the demo container (see ../src/api/server.py) to AWS App Runner,
pulling the image from an existing ECR repository.

Stacks:
  AppRunnerDemoStack  → App Runner service + URL/ARN outputs

Prerequisites (created once, outside CDK):
  ECR repository  apprunner-demo
  IAM role        AppRunnerECRAccessRole  (trusts build.apprunner.amazonaws.com,
                                           AWSAppRunnerServicePolicyForECRAccess)

Usage:
  cd infra
  pip install -r requirements.txt
  cdk deploy

  # Pin the image and commit explicitly:
  IMAGE_IDENTIFIER=703671892588.dkr.ecr.us-west-2.amazonaws.com/apprunner-demo:$(git rev-parse --short HEAD) \\
  COMMIT_SHA=$(git rev-parse HEAD) cdk deploy

  # Or through context:
  cdk deploy -c imageIdentifier=... -c commitSha=...

Environment variables (take precedence over context):
  CDK_DEFAULT_ACCOUNT   → AWS account ID      (default: 703671892588)
  AWS_REGION            → target region       (default: us-west-2)
  IMAGE_IDENTIFIER      → full ECR image URI  (default: <repo>:placeholder)
  COMMIT_SHA            → injected into the container (default: unknown)
"""
import logging
import os
from typing import Mapping

import aws_cdk as cdk

from stacks.apprunner_stack import AppRunnerStack

logger = logging.getLogger(__name__)

STACK_ID = "AppRunnerDemoStack"

DEFAULT_ACCOUNT = "703671892588"
DEFAULT_REGION = "us-west-2"
DEFAULT_COMMIT_SHA = "unknown"

DEFAULT_ECR_REPOSITORY_NAME = "apprunner-demo"
DEFAULT_SERVICE_NAME = "AppRunnerDemoService"
DEFAULT_IAM_ROLE_NAME = "AppRunnerECRAccessRole"


def stack_props_from_environment(app: cdk.App, environ: Mapping[str, str] = os.environ) -> dict:
    """Resolve AppRunnerStack keyword arguments: env var → context → default."""
    ctx = app.node.try_get_context

    env = cdk.Environment(
        account=environ.get("CDK_DEFAULT_ACCOUNT") or DEFAULT_ACCOUNT,
        region=environ.get("AWS_REGION") or DEFAULT_REGION,
    )

    return {
        "env": env,
        "image_identifier": environ.get("IMAGE_IDENTIFIER") or ctx("imageIdentifier"),
        "commit_sha": environ.get("COMMIT_SHA") or ctx("commitSha") or DEFAULT_COMMIT_SHA,
        "ecr_repository_name": ctx("ecrRepositoryName") or DEFAULT_ECR_REPOSITORY_NAME,
        "app_runner_service_name": ctx("appRunnerServiceName") or DEFAULT_SERVICE_NAME,
        "iam_role_name": ctx("iamRoleName") or DEFAULT_IAM_ROLE_NAME,
    }


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    app = cdk.App()
    props = stack_props_from_environment(app)

    logger.info(
        f"[app] {STACK_ID} → aws://{props['env'].account}/{props['env'].region} "
        f"(commit: {props['commit_sha']})"
    )
    AppRunnerStack(app, STACK_ID, **props)

    app.synth()


if __name__ == "__main__":
    main()
