"""
Unit tests for the integration data injector.
"""
import pytest

from lambda_integration.integration.data_injector import IntegrationDataInjector

FUNCTION_ARN = 'arn:aws:lambda:us-east-1:123456789012:function:fn-a:3'


@pytest.fixture
def integration_data():
    return IntegrationDataInjector({
        'FunctionName': 'fn-a',
        'FunctionArn': FUNCTION_ARN,
        'Version': '3',
        'CodeSha256': 'abc=',
    })


def test_properties(integration_data):
    assert integration_data.function_name == 'fn-a'
    assert integration_data.function_arn == FUNCTION_ARN
    assert integration_data.version == '3'
    assert integration_data.description['CodeSha256'] == 'abc='


def test_description_is_a_copy(integration_data):
    integration_data.description['Version'] = '4'

    assert integration_data.version == '3'


def test_integration_uri(integration_data):
    assert integration_data.get_integration_uri('eu-west-1') == (
        f"arn:aws:apigateway:eu-west-1:lambda:path/2015-03-31/functions/{FUNCTION_ARN}/invocations"
    )


def test_inject(integration_data):
    """Test that only operations bound to the function get its integration URI."""
    api_spec = {
        'swagger': '2.0',
        'paths': {
            '/users': {
                'get': {'x-lambda-name': 'fn-a'},
                'post': {
                    'x-lambda-name': 'fn-a',
                    'x-amazon-apigateway-integration': {'type': 'aws', 'httpMethod': 'POST'},
                },
                'parameters': [],
            },
            '/orders': {
                'get': {'x-lambda-name': 'fn-b'},
            },
        },
    }

    result = integration_data.inject(api_spec, 'fn-a', 'us-east-1')

    uri = integration_data.get_integration_uri('us-east-1')
    assert result['paths']['/users']['get']['x-amazon-apigateway-integration'] == {
        'uri': uri,
        'type': 'aws_proxy',
        'httpMethod': 'POST',
    }
    assert result['paths']['/users']['post']['x-amazon-apigateway-integration']['type'] == 'aws'
    assert result['paths']['/users']['post']['x-amazon-apigateway-integration']['uri'] == uri
    assert 'x-amazon-apigateway-integration' not in result['paths']['/orders']['get']
    assert 'x-amazon-apigateway-integration' not in api_spec['paths']['/users']['get']
