"""
Unit tests for the command-line interface.
"""
import zipfile
from unittest.mock import patch, MagicMock

from botocore.exceptions import NoRegionError

from lambda_integration.cli import main, parse_args
from lambda_integration.exceptions import RemoteOperationError


def test_parse_deploy_args():
    args = parse_args([
        "deploy",
        "--identifier", "fn-a",
        "--handler-path", "src/fn-a",
        "--include-lib", "common",
        "--include-lib", "db",
        "--role", "lambda-test-role",
        "--timeout", "30",
    ])

    assert args.command == "deploy"
    assert args.include_libs == ["common", "db"]
    assert args.timeout == 30
    assert not args.publish
    assert not args.include_endpoints


@patch('lambda_integration.cli.LambdaDeployer')
def test_deploy_command(mock_lambda_deployer):
    """Test that only the parameters given on the command line override the defaults."""
    mock_lambda_deployer.return_value.deploy.return_value = MagicMock(
        function_arn='arn:aws:lambda:us-east-1:123456789012:function:fn-a:1',
        version='1',
    )

    result = main([
        "deploy",
        "--identifier", "fn-a",
        "--handler-path", "src/fn-a",
        "--include-lib", "common",
        "--role", "lambda-test-role",
        "--publish",
        "--region", "us-east-1",
    ])

    assert result == 0
    mock_lambda_deployer.assert_called_once_with(
        identifier="fn-a",
        handler_path="src/fn-a",
        include_libs=["common"],
        include_endpoints=False,
        params={"Role": "lambda-test-role", "Publish": True},
        region_name="us-east-1",
        base_dir=None,
    )
    mock_lambda_deployer.return_value.deploy.assert_called_once_with()


@patch('lambda_integration.cli.LambdaDeployer')
def test_deploy_command_failure(mock_lambda_deployer):
    mock_lambda_deployer.return_value.deploy.side_effect = RemoteOperationError(
        'create_function', 'rejected', error_code='InvalidParameterValueException'
    )

    assert main(["deploy", "--identifier", "fn-a", "--handler-path", "src/fn-a"]) == 1


@patch('lambda_integration.cli.LambdaDeployer')
def test_deploy_command_without_region(mock_lambda_deployer):
    mock_lambda_deployer.side_effect = NoRegionError()

    assert main(["deploy", "--identifier", "fn-a", "--handler-path", "src/fn-a"]) == 1


def test_deploy_command_validation_error():
    assert main(["deploy", "--identifier", "", "--handler-path", "src/fn-a"]) == 1


def test_package_command(project_dir, tmp_path):
    """Test writing a package from the command line."""
    output = tmp_path / "fn-a.zip"

    result = main([
        "package",
        "--identifier", "fn-a",
        "--handler-path", str(project_dir / "src" / "fn-a"),
        "--include-lib", "common",
        "--include-endpoints",
        "--base-dir", str(project_dir),
        "--output", str(output),
    ])

    assert result == 0
    with zipfile.ZipFile(output) as archive:
        names = archive.namelist()
    assert "lambda_function.py" in names
    assert "common/__init__.py" in names
    assert "endpoints/users.json" in names
    assert names[-1] == "env_config.json"


def test_package_command_missing_directory(tmp_path):
    result = main([
        "package",
        "--identifier", "fn-a",
        "--handler-path", str(tmp_path / "missing"),
        "--output", str(tmp_path / "fn-a.zip"),
    ])

    assert result == 1


def test_no_command():
    assert main([]) == 1
