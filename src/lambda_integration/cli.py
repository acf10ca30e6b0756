#!/usr/bin/env python3
"""
Command-line interface for the Lambda Integration system.
"""
import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError

from lambda_integration.definition import FunctionDefinition
from lambda_integration.exceptions import LambdaIntegrationError
from lambda_integration.main import LambdaDeployer
from lambda_integration.packaging.archive_builder import ArchiveBuilder


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def _add_function_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--identifier",
        required=True,
        help="Identifier of the function (default function name)"
    )
    parser.add_argument(
        "--handler-path",
        required=True,
        help="Directory holding the function's code"
    )
    parser.add_argument(
        "--include-lib",
        action="append",
        default=[],
        dest="include_libs",
        help="Library under libs/ to bundle with the function (repeatable)"
    )
    parser.add_argument(
        "--include-endpoints",
        action="store_true",
        help="Bundle the endpoints directory with the function"
    )
    parser.add_argument(
        "--base-dir",
        help="Project directory holding libs/ and endpoints/ (default: current directory)"
    )


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Package functions and deploy them to AWS Lambda"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Deploy command
    deploy_parser = subparsers.add_parser("deploy", help="Deploy a function and publish a new version")
    _add_function_arguments(deploy_parser)
    deploy_parser.add_argument(
        "--function-name",
        help="Name of the Lambda function (default: the identifier)"
    )
    deploy_parser.add_argument(
        "--handler",
        help="Entry point of the function, e.g. lambda_function.lambda_handler"
    )
    deploy_parser.add_argument(
        "--role",
        help="Name or ARN of the execution role"
    )
    deploy_parser.add_argument(
        "--runtime",
        help="Runtime of the function, e.g. python3.12"
    )
    deploy_parser.add_argument(
        "--timeout",
        type=int,
        help="Timeout for the Lambda function in seconds (default: 15)"
    )
    deploy_parser.add_argument(
        "--publish",
        action="store_true",
        help="Also publish a version when updating the code"
    )
    deploy_parser.add_argument(
        "--region",
        help="AWS region to use"
    )

    # Package command
    package_parser = subparsers.add_parser("package", help="Build the zip package of a function")
    _add_function_arguments(package_parser)
    package_parser.add_argument(
        "--output",
        required=True,
        help="Path of the zip file to write"
    )

    # General options
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser.parse_args(args)


def _params_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect the Lambda parameters given on the command line."""
    options = {
        "FunctionName": args.function_name,
        "Handler": args.handler,
        "Role": args.role,
        "Runtime": args.runtime,
        "Timeout": args.timeout,
    }
    params = {key: value for key, value in options.items() if value is not None}
    if args.publish:
        params["Publish"] = True
    return params


def deploy_command(args: argparse.Namespace) -> int:
    """Handle the deploy command."""
    logger = logging.getLogger("lambda_integration.cli")

    try:
        deployer = LambdaDeployer(
            identifier=args.identifier,
            handler_path=args.handler_path,
            include_libs=args.include_libs,
            include_endpoints=args.include_endpoints,
            params=_params_from_args(args),
            region_name=args.region,
            base_dir=args.base_dir,
        )
        integration_data = deployer.deploy()
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 1
    except LambdaIntegrationError as e:
        logger.error(f"Failed to deploy {args.identifier}: {e}")
        return 1
    except BotoCoreError as e:
        logger.error(f"AWS configuration error: {e}")
        return 1

    logger.info(f"Successfully deployed Lambda function: {integration_data.function_arn}")
    logger.info(f"Published version: {integration_data.version}")
    return 0


def package_command(args: argparse.Namespace) -> int:
    """Handle the package command."""
    logger = logging.getLogger("lambda_integration.cli")

    try:
        definition = FunctionDefinition.create(
            identifier=args.identifier,
            handler_path=args.handler_path,
            include_libs=args.include_libs,
            include_endpoints=args.include_endpoints,
            base_dir=args.base_dir,
        )
        ArchiveBuilder().write_package(definition.handler_path, definition.include_libs, args.output)
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 1
    except LambdaIntegrationError as e:
        logger.error(f"Failed to package {args.identifier}: {e}")
        return 1

    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parsed_args = parse_args(args)
    setup_logging(parsed_args.verbose)

    if parsed_args.command == "deploy":
        return deploy_command(parsed_args)
    elif parsed_args.command == "package":
        return package_command(parsed_args)
    else:
        print("No command specified. Use --help for usage information.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
