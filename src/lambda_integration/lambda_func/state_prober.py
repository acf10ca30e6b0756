"""
Remote state prober for Lambda functions.
Checks whether a function already exists in AWS Lambda.
"""
import enum
import logging
from typing import Any, Dict, NamedTuple, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lambda_integration.exceptions import ProbeError

logger = logging.getLogger(__name__)


class ProbeStatus(enum.Enum):
    NOT_FOUND = "not_found"
    FOUND = "found"


class ProbeResult(NamedTuple):
    """Outcome of a probe. ``description`` is the get_function response when found."""

    status: ProbeStatus
    description: Optional[Dict[str, Any]] = None

    @property
    def found(self) -> bool:
        return self.status is ProbeStatus.FOUND


class RemoteStateProber:
    """
    Looks up a Lambda function by name.

    Only a "resource not found" answer means the function is not deployed;
    any other failure is raised as a ProbeError.
    """

    def __init__(self, region_name: Optional[str] = None, lambda_client=None):
        """
        Initialize the prober.

        Args:
            region_name: AWS region name. If not provided, uses the default region.
            lambda_client: Lambda client to use. If not provided, one is created.
        """
        self.lambda_client = lambda_client or boto3.client('lambda', region_name=region_name)

    def probe(self, function_name: str) -> ProbeResult:
        """
        Look up a Lambda function.

        Args:
            function_name: Name of the Lambda function

        Returns:
            FOUND with the function description, or NOT_FOUND

        Raises:
            ProbeError: If the lookup fails for any other reason
        """
        try:
            response = self.lambda_client.get_function(FunctionName=function_name)
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code')
            if error_code == 'ResourceNotFoundException':
                return ProbeResult(ProbeStatus.NOT_FOUND)
            logger.error(f"Error checking Lambda function {function_name}: {e}")
            raise ProbeError(f"Could not check Lambda function {function_name}: {e}", error_code=error_code) from e
        except BotoCoreError as e:
            logger.error(f"Error checking Lambda function {function_name}: {e}")
            raise ProbeError(f"Could not check Lambda function {function_name}: {e}") from e

        return ProbeResult(ProbeStatus.FOUND, response)

    def exists(self, function_name: str) -> bool:
        """
        Check if a Lambda function exists.

        Args:
            function_name: Name of the Lambda function to check

        Returns:
            True if the function exists, False otherwise
        """
        return self.probe(function_name).found
