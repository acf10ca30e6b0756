"""
Integration data for deployed Lambda functions.
Wires a published function into API Gateway definitions.
"""
import copy
from typing import Any, Dict

INTEGRATION_KEY = "x-amazon-apigateway-integration"
LAMBDA_NAME_KEY = "x-lambda-name"
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "x-amazon-apigateway-any-method")


class IntegrationDataInjector:
    """
    Integration data of a published Lambda function.

    Built from the description AWS returned when the version was published.
    """

    def __init__(self, description: Dict[str, Any]):
        self._description = copy.deepcopy(description)

    @property
    def description(self) -> Dict[str, Any]:
        return copy.deepcopy(self._description)

    @property
    def function_name(self) -> str:
        return self._description['FunctionName']

    @property
    def function_arn(self) -> str:
        return self._description['FunctionArn']

    @property
    def version(self) -> str:
        return self._description['Version']

    def get_integration_uri(self, region: str) -> str:
        """API Gateway URI invoking the published function version."""
        return f"arn:aws:apigateway:{region}:lambda:path/2015-03-31/functions/{self.function_arn}/invocations"

    def inject(self, api_spec: Dict[str, Any], identifier: str, region: str) -> Dict[str, Any]:
        """
        Set the integration URI of the operations bound to this function.

        Operations are bound with an ``x-lambda-name`` key equal to the function
        identifier. The given document is not modified.

        Args:
            api_spec: Swagger/OpenAPI document
            identifier: Identifier of the function
            region: AWS region of the function

        Returns:
            Copy of the document with the integration URIs set
        """
        api_spec = copy.deepcopy(api_spec)
        uri = self.get_integration_uri(region)
        for path_item in api_spec.get('paths', {}).values():
            for method, operation in path_item.items():
                if method not in HTTP_METHODS or operation.get(LAMBDA_NAME_KEY) != identifier:
                    continue
                integration = operation.setdefault(INTEGRATION_KEY, {})
                integration['uri'] = uri
                integration.setdefault('type', 'aws_proxy')
                integration.setdefault('httpMethod', 'POST')
        return api_spec

    def __repr__(self) -> str:
        return f"IntegrationDataInjector({self.function_arn!r}, version={self.version!r})"
