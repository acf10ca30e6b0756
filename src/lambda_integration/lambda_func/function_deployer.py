"""
Lambda function deployer module.
Reconciles a local function definition with AWS Lambda.
"""
import copy
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lambda_integration.definition import FunctionDefinition
from lambda_integration.exceptions import RemoteOperationError
from lambda_integration.iam.role_resolver import RoleResolver
from lambda_integration.lambda_func.state_prober import ProbeStatus, RemoteStateProber
from lambda_integration.packaging.archive_builder import ArchiveBuilder

logger = logging.getLogger(__name__)


class LambdaFunctionDeployer:
    """
    Deploys zip packages to AWS Lambda functions.

    This class handles:
    - Checking whether the function already exists
    - Creating the function when it does not
    - Updating the code, then the configuration, when it does
    - Publishing a new version after either path

    A failed step stops the deployment. Nothing is retried or rolled back:
    if the configuration update fails after the code update succeeded, the
    function is left with the new code and its previous configuration.
    Concurrent deployments of the same function are not serialized.
    """

    def __init__(
        self,
        region_name: Optional[str] = None,
        lambda_client=None,
        role_resolver: Optional[RoleResolver] = None,
        archive_builder: Optional[ArchiveBuilder] = None,
    ):
        """
        Initialize the Lambda function deployer.

        Args:
            region_name: AWS region name. If not provided, uses the default region.
            lambda_client: Lambda client to use. If not provided, one is created.
            role_resolver: Resolver for execution roles. If not provided, one is created.
            archive_builder: Builder for packages. If not provided, one is created.
        """
        self.lambda_client = lambda_client or boto3.client('lambda', region_name=region_name)
        self.prober = RemoteStateProber(lambda_client=self.lambda_client)
        self.role_resolver = role_resolver or RoleResolver(region_name=region_name)
        self.archive_builder = archive_builder or ArchiveBuilder()

    def _call(self, operation: str, function_name: str, **params) -> Dict[str, Any]:
        """Call a Lambda API operation, raising RemoteOperationError on failure."""
        try:
            return getattr(self.lambda_client, operation)(**params)
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code')
            logger.error(f"Error calling {operation} for Lambda function {function_name}: {e}")
            raise RemoteOperationError(operation, str(e), error_code=error_code) from e
        except BotoCoreError as e:
            logger.error(f"Error calling {operation} for Lambda function {function_name}: {e}")
            raise RemoteOperationError(operation, str(e)) from e

    def build_package(self, definition: FunctionDefinition) -> bytes:
        return self.archive_builder.build_package(definition.handler_path, definition.include_libs)

    def _create_function(self, definition: FunctionDefinition) -> Dict[str, Any]:
        """
        Create a new Lambda function from a freshly built package.

        The package is built while the execution role is resolved.

        Args:
            definition: Definition of the function

        Returns:
            AWS description of the created function
        """
        params = copy.deepcopy(dict(definition.params))

        with ThreadPoolExecutor(max_workers=2) as executor:
            package_future = executor.submit(self.build_package, definition)
            role_future = executor.submit(self.role_resolver.resolve_role, params['Role'])
            package = package_future.result()
            role_arn = role_future.result()

        params['Code'] = {'ZipFile': package}
        params['Role'] = role_arn

        response = self._call('create_function', definition.function_name, **params)
        logger.info(f"Created Lambda function: {response.get('FunctionArn')}")
        return response

    def _update_function(self, definition: FunctionDefinition) -> Dict[str, Any]:
        """
        Update an existing Lambda function.

        The code is updated while the execution role is resolved; the
        configuration is updated once both are done.

        Args:
            definition: Definition of the function

        Returns:
            AWS description of the updated function
        """
        package = self.build_package(definition)
        function_name = definition.function_name

        with ThreadPoolExecutor(max_workers=2) as executor:
            code_future = executor.submit(
                self._call,
                'update_function_code',
                function_name,
                FunctionName=function_name,
                Publish=definition.params['Publish'],
                ZipFile=package,
            )
            role_future = executor.submit(self.role_resolver.resolve_role, definition.params['Role'])
            code_response = code_future.result()
            role_arn = role_future.result()

        logger.info(f"Updated Lambda function code: {code_response.get('FunctionArn')}")

        # Publishing is a separate step, never part of the configuration update
        config_params = copy.deepcopy(dict(definition.params))
        config_params.pop('Publish', None)
        config_params['Role'] = role_arn

        response = self._call('update_function_configuration', function_name, **config_params)
        logger.info(f"Updated Lambda function configuration: {response.get('FunctionArn')}")
        return response

    def _publish_version(self, function_name: str) -> Dict[str, Any]:
        """
        Publish a new version of a Lambda function.

        Args:
            function_name: Name of the Lambda function

        Returns:
            AWS description of the published version
        """
        response = self._call('publish_version', function_name, FunctionName=function_name)
        logger.info(f"Lambda function {function_name} published: version {response.get('Version')}")
        logger.info(f"Function ARN: {response.get('FunctionArn')}")
        return response

    def deploy(self, definition: FunctionDefinition) -> Dict[str, Any]:
        """
        Deploy a function to AWS Lambda.

        If the function doesn't exist, it will be created.
        If the function exists, its code and configuration will be updated.
        A new version is published in both cases.

        Args:
            definition: Definition of the function

        Returns:
            AWS description of the published version

        Raises:
            ProbeError: If the existence check fails
            PackagingError: If the package cannot be built
            RoleResolutionError: If the execution role cannot be resolved
            RemoteOperationError: If AWS Lambda rejects a request
        """
        logger.info(f"Deploying {definition}")
        function_name = definition.function_name
        probe_result = self.prober.probe(function_name)

        if probe_result.status is ProbeStatus.FOUND:
            logger.info(f"Lambda function {function_name} exists, updating it")
            self._update_function(definition)
        else:
            logger.info(f"Lambda function {function_name} does not exist, creating it")
            self._create_function(definition)

        logger.info(f"{definition} deployed")
        return self._publish_version(function_name)
