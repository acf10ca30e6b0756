"""
IAM role resolver for Lambda functions.
Resolves execution role names to role ARNs.
"""
import logging
import re
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lambda_integration.exceptions import RoleResolutionError

logger = logging.getLogger(__name__)

ROLE_ARN_PATTERN = re.compile(r"arn:aws[\w-]*:iam::")


class RoleResolver:
    """
    Resolves the execution role of a Lambda function.

    Roles are looked up on every call and never cached, so a role created
    just before a deployment is picked up.
    """

    def __init__(self, region_name: Optional[str] = None, iam_client=None):
        """
        Initialize the role resolver.

        Args:
            region_name: AWS region name. If not provided, uses the default region.
            iam_client: IAM client to use. If not provided, one is created.
        """
        self.iam_client = iam_client or boto3.client('iam', region_name=region_name)

    def resolve_role(self, identifier: str) -> str:
        """
        Resolve a role name or ARN to a role ARN.

        Args:
            identifier: Name or ARN of the IAM role

        Returns:
            ARN of the role

        Raises:
            RoleResolutionError: If the role does not exist or cannot be read
        """
        if not identifier:
            raise RoleResolutionError("No execution role configured")

        if ROLE_ARN_PATTERN.match(identifier):
            return identifier

        try:
            response = self.iam_client.get_role(RoleName=identifier)
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code')
            if error_code == 'NoSuchEntity':
                logger.error(f"IAM role {identifier} does not exist")
            else:
                logger.error(f"Error retrieving IAM role {identifier}: {e}")
            raise RoleResolutionError(f"Could not resolve IAM role {identifier}: {e}", error_code=error_code) from e
        except BotoCoreError as e:
            logger.error(f"Error retrieving IAM role {identifier}: {e}")
            raise RoleResolutionError(f"Could not resolve IAM role {identifier}: {e}") from e

        role_arn = response['Role']['Arn']
        logger.debug(f"Resolved IAM role {identifier} to {role_arn}")
        return role_arn
