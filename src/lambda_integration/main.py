"""
Main deployment module for Lambda Integration.

This module provides the entry point for packaging a function and deploying it
to AWS Lambda.
"""
import logging
from typing import Any, Dict, List, Optional

from lambda_integration.definition import FunctionDefinition
from lambda_integration.iam.role_resolver import RoleResolver
from lambda_integration.integration.data_injector import IntegrationDataInjector
from lambda_integration.lambda_func.function_deployer import LambdaFunctionDeployer
from lambda_integration.packaging.archive_builder import ArchiveBuilder


class LambdaDeployer:
    """
    Main class for deploying a function to AWS Lambda.

    This class integrates all components of the Lambda Integration system:
    - Function definition with parameter defaults
    - Package building
    - IAM role resolution
    - Lambda function deployment and version publishing
    """

    def __init__(
        self,
        identifier: str,
        handler_path: str,
        include_libs: Optional[List[str]] = None,
        include_endpoints: bool = False,
        params: Optional[Dict[str, Any]] = None,
        region_name: Optional[str] = None,
        base_dir: Optional[str] = None,
        lambda_client=None,
        role_resolver: Optional[RoleResolver] = None,
        archive_builder: Optional[ArchiveBuilder] = None,
    ):
        """
        Initialize the Lambda Deployer.

        Args:
            identifier: Identifier of the function
            handler_path: Directory holding the function's code
            include_libs: Names of the libraries under ``libs/`` to bundle
            include_endpoints: Whether to bundle the ``endpoints`` directory
            params: AWS Lambda parameters overriding the defaults
            region_name: AWS region name. If not provided, uses the default region.
            base_dir: Project directory. If not provided, uses the current directory.
            lambda_client: Lambda client to use. If not provided, one is created.
            role_resolver: Resolver for execution roles. If not provided, one is created.
            archive_builder: Builder for packages. If not provided, one is created.

        Raises:
            ValueError: If identifier or handler_path is empty
        """
        self.region_name = region_name
        self.definition = FunctionDefinition.create(
            identifier=identifier,
            handler_path=handler_path,
            include_libs=include_libs,
            include_endpoints=include_endpoints,
            params=params,
            base_dir=base_dir,
        )
        self.archive_builder = archive_builder or ArchiveBuilder()
        self.function_deployer = LambdaFunctionDeployer(
            region_name=region_name,
            lambda_client=lambda_client,
            role_resolver=role_resolver,
            archive_builder=self.archive_builder,
        )
        self.logger = logging.getLogger(__name__)

    def build_package(self) -> bytes:
        """Build the zip package of the function."""
        return self.function_deployer.build_package(self.definition)

    def deploy(self) -> IntegrationDataInjector:
        """
        Deploy the function and publish a new version.

        Returns:
            Integration data of the published version

        Raises:
            LambdaIntegrationError: If any step of the deployment fails
        """
        self.logger.info(f"Deploy {self.definition.identifier}")
        description = self.function_deployer.deploy(self.definition)
        return IntegrationDataInjector(description)

    def __str__(self) -> str:
        return str(self.definition)
