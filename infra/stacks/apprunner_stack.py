"""
AppRunnerStack — App Runner service running the demo image from ECR.

Resources:
  AWS::AppRunner::Service  → one service, pulls from an EXISTING ECR repository
                             using an EXISTING IAM access role (both referenced
                             by name, never created here)

Image:
  The full image URI (with tag) is passed in as image_identifier.
  When it is missing, a ":placeholder" tag in the same repository is used
  so the stack can still be synthesized before the first image is pushed.

Runtime:
  COMMIT_SHA  → injected as a runtime environment variable
  Port 8080   → must match the PORT the container listens on
  /health     → probed by App Runner every 10s

Deployments:
  Auto-deployments are disabled; a new image only goes live on cdk deploy.

Outputs:
  ServiceURL, ServiceARN  → exported (AppRunnerServiceURL / AppRunnerServiceARN)
  ServiceId, ServiceStatus, ECRRepositoryURL
"""
import logging
from typing import Optional

import aws_cdk as cdk
from aws_cdk import (
    aws_apprunner as apprunner,
    aws_ecr as ecr,
    aws_iam as iam,
)
from constructs import Construct

logger = logging.getLogger(__name__)

CONTAINER_PORT = "8080"
INSTANCE_CPU = "1024"       # 1 vCPU
INSTANCE_MEMORY = "2048"    # 2 GB
PLACEHOLDER_TAG = "placeholder"
MANAGED_BY = "CDK"

HEALTH_CHECK_PATH = "/health"
HEALTH_CHECK_INTERVAL = 10
HEALTH_CHECK_TIMEOUT = 5
HEALTHY_THRESHOLD = 1
UNHEALTHY_THRESHOLD = 5


def resolve_image_identifier(
    account: str,
    region: str,
    repository_name: str,
    image_identifier: Optional[str] = None,
) -> str:
    """
    Return the image URI the service should run.

    An explicit image_identifier is used verbatim. Otherwise the
    placeholder tag in the given ECR repository is returned.
    """
    if image_identifier:
        return image_identifier

    placeholder = (
        f"{account}.dkr.ecr.{region}.amazonaws.com/{repository_name}:{PLACEHOLDER_TAG}"
    )
    logger.info(f"[apprunner] no image identifier supplied, using {placeholder}")
    return placeholder


class AppRunnerStack(cdk.Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        commit_sha: str,
        ecr_repository_name: str,
        app_runner_service_name: str,
        iam_role_name: str,
        image_identifier: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # ── Existing resources (looked up by name) ────────────────────────────
        ecr_repository = ecr.Repository.from_repository_name(
            self, "ECRRepository", ecr_repository_name
        )

        # Role is created outside CDK to avoid IAM propagation delays on first deploy
        access_role = iam.Role.from_role_name(
            self, "AppRunnerECRAccessRole", iam_role_name
        )

        image = resolve_image_identifier(
            self.account, self.region, ecr_repository_name, image_identifier
        )

        # ── App Runner service ────────────────────────────────────────────────
        self.service = apprunner.CfnService(
            self,
            "AppRunnerService",
            service_name=app_runner_service_name,
            source_configuration=apprunner.CfnService.SourceConfigurationProperty(
                authentication_configuration=apprunner.CfnService.AuthenticationConfigurationProperty(
                    access_role_arn=access_role.role_arn,
                ),
                image_repository=apprunner.CfnService.ImageRepositoryProperty(
                    image_identifier=image,
                    image_repository_type="ECR",
                    image_configuration=apprunner.CfnService.ImageConfigurationProperty(
                        port=CONTAINER_PORT,
                        runtime_environment_variables=[
                            apprunner.CfnService.KeyValuePairProperty(
                                name="COMMIT_SHA",
                                value=commit_sha,
                            ),
                        ],
                    ),
                ),
                auto_deployments_enabled=False,
            ),
            instance_configuration=apprunner.CfnService.InstanceConfigurationProperty(
                cpu=INSTANCE_CPU,
                memory=INSTANCE_MEMORY,
            ),
            health_check_configuration=apprunner.CfnService.HealthCheckConfigurationProperty(
                protocol="HTTP",
                path=HEALTH_CHECK_PATH,
                interval=HEALTH_CHECK_INTERVAL,
                timeout=HEALTH_CHECK_TIMEOUT,
                healthy_threshold=HEALTHY_THRESHOLD,
                unhealthy_threshold=UNHEALTHY_THRESHOLD,
            ),
            # CDK renders tags sorted by key (ManagedBy before Name)
            tags=[
                cdk.CfnTag(key="Name", value=app_runner_service_name),
                cdk.CfnTag(key="ManagedBy", value=MANAGED_BY),
            ],
        )

        # ── Outputs ───────────────────────────────────────────────────────────
        self.service_url = cdk.CfnOutput(
            self, "ServiceURL",
            description="The URL of the App Runner service",
            value=f"https://{self.service.attr_service_url}",
            export_name="AppRunnerServiceURL",
        )
        self.service_arn = cdk.CfnOutput(
            self, "ServiceARN",
            description="The ARN of the App Runner service",
            value=self.service.attr_service_arn,
            export_name="AppRunnerServiceARN",
        )
        cdk.CfnOutput(
            self, "ServiceId",
            description="The ID of the App Runner service",
            value=self.service.attr_service_id,
        )
        cdk.CfnOutput(
            self, "ServiceStatus",
            description="The status of the App Runner service",
            value=self.service.attr_status,
        )
        cdk.CfnOutput(
            self, "ECRRepositoryURL",
            description="The URL of the ECR repository",
            value=ecr_repository.repository_uri,
        )
