"""
Pytest configuration file for Lambda Integration tests.
"""
import json
import pytest
from unittest.mock import patch

import boto3
import moto


@pytest.fixture
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    with patch.dict('os.environ', {
        'AWS_ACCESS_KEY_ID': 'testing',
        'AWS_SECRET_ACCESS_KEY': 'testing',
        'AWS_SECURITY_TOKEN': 'testing',
        'AWS_SESSION_TOKEN': 'testing',
        'AWS_DEFAULT_REGION': 'us-east-1',
    }):
        yield


@pytest.fixture
def mocked_aws(aws_credentials):
    """Moto mock of every AWS service."""
    with moto.mock_aws():
        yield


@pytest.fixture
def iam_client(mocked_aws):
    """IAM client fixture."""
    yield boto3.client('iam')


@pytest.fixture
def lambda_client(mocked_aws):
    """Lambda client fixture."""
    yield boto3.client('lambda')


@pytest.fixture
def lambda_role(iam_client):
    """Create a Lambda execution role and return its ARN."""
    response = iam_client.create_role(
        RoleName="lambda-test-role",
        AssumeRolePolicyDocument=json.dumps({
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"Service": "lambda.amazonaws.com"},
                    "Action": "sts:AssumeRole"
                }
            ]
        })
    )
    return response['Role']['Arn']


@pytest.fixture
def project_dir(tmp_path):
    """
    Project layout with one function, two libraries and endpoints:

        src/fn-a/lambda_function.py
        src/fn-a/helpers/format.py
        libs/common/__init__.py
        libs/common/utils/strings.py
        libs/db/client.py
        endpoints/users.json
    """
    files = {
        "src/fn-a/lambda_function.py": "def lambda_handler(event, context):\n    return event\n",
        "src/fn-a/helpers/format.py": "def fmt(value):\n    return str(value)\n",
        "libs/common/__init__.py": "",
        "libs/common/utils/strings.py": "UPPER = str.upper\n",
        "libs/db/client.py": "CLIENT = None\n",
        "endpoints/users.json": "{}\n",
    }
    for name, content in files.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return tmp_path
