#!/usr/bin/env python3
"""
Example script for deploying a function with shared libraries to AWS Lambda.
"""
import argparse
import logging
import sys

from lambda_integration.main import LambdaDeployer


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Example script for deploying a function with shared libraries to AWS Lambda"
    )

    parser.add_argument(
        "--identifier",
        required=True,
        help="Identifier of the function"
    )
    parser.add_argument(
        "--handler-path",
        required=True,
        help="Directory holding the function's code"
    )
    parser.add_argument(
        "--role",
        required=True,
        help="Name or ARN of the execution role"
    )
    parser.add_argument(
        "--libs",
        help="Comma-separated list of libraries under libs/ to bundle"
    )

    # General options
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser.parse_args()


def main() -> int:
    """Main entry point for the example script."""
    args = parse_args()
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)
    logger.info("Starting example deployment")

    try:
        include_libs = args.libs.split(",") if args.libs else None

        deployer = LambdaDeployer(
            identifier=args.identifier,
            handler_path=args.handler_path,
            include_libs=include_libs,
            params={"Role": args.role},
        )

        integration_data = deployer.deploy()

        logger.info(f"Successfully deployed Lambda function: {integration_data.function_arn}")
        logger.info(f"Published version: {integration_data.version}")

        return 0

    except Exception as e:
        logger.error(f"Deployment failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
