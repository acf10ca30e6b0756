"""
Function definition for Lambda deployments.
Holds the identifier, source paths and AWS Lambda parameters of a function.
"""
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

DEFAULT_HANDLER = "lambda_function.lambda_handler"
DEFAULT_RUNTIME = "python3.12"
DEFAULT_TIMEOUT = 15
ROLE_PLACEHOLDER_PREFIX = "PLEASE-CONFIGURE-AN-EXECUTION-ROLE-FOR-"


def default_params(identifier: str) -> Dict[str, Any]:
    """
    Build the AWS Lambda parameters used when the caller does not provide them.

    Args:
        identifier: Identifier of the function

    Returns:
        Dictionary of default Lambda parameters
    """
    return {
        "FunctionName": identifier,
        "Handler": DEFAULT_HANDLER,
        "Role": ROLE_PLACEHOLDER_PREFIX + identifier,
        "Runtime": DEFAULT_RUNTIME,
        "Timeout": DEFAULT_TIMEOUT,
        "Publish": False,
    }


def merge_params(defaults: Mapping[str, Any], overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Layer caller overrides over defaults. Overrides take precedence."""
    merged = dict(defaults)
    merged.update(overrides or {})
    return merged


def resolve_include_paths(
    include_libs: Optional[List[str]],
    include_endpoints: bool = False,
    base_dir: Optional[str] = None,
) -> Tuple[str, ...]:
    """
    Resolve library names to the directories that get bundled with the function.

    Libraries live under ``<base_dir>/libs``. Absolute paths are kept as they are.
    When ``include_endpoints`` is set, ``<base_dir>/endpoints`` is bundled last.
    """
    base_dir = base_dir or os.getcwd()
    paths = [os.path.join(base_dir, "libs", lib) for lib in include_libs or []]
    if include_endpoints:
        paths.append(os.path.join(base_dir, "endpoints"))
    return tuple(paths)


@dataclass(frozen=True)
class FunctionDefinition:
    """
    Local definition of a Lambda function.

    Built once with :meth:`create`, which applies the parameter defaults;
    it is not modified afterwards.
    """

    identifier: str
    handler_path: str
    include_libs: Tuple[str, ...] = ()
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def create(
        cls,
        identifier: str,
        handler_path: str,
        include_libs: Optional[List[str]] = None,
        include_endpoints: bool = False,
        params: Optional[Mapping[str, Any]] = None,
        base_dir: Optional[str] = None,
    ) -> "FunctionDefinition":
        """
        Create a function definition with defaults applied.

        Args:
            identifier: Identifier of the function, also the default function name
            handler_path: Directory holding the function's own code
            include_libs: Names (or absolute paths) of shared libraries to bundle
            include_endpoints: Whether to bundle the ``endpoints`` directory
            params: AWS Lambda parameters overriding the defaults
            base_dir: Project directory; defaults to the current working directory

        Returns:
            The function definition

        Raises:
            ValueError: If identifier or handler_path is empty
        """
        if not identifier:
            raise ValueError("Function identifier is required")

        if not handler_path:
            raise ValueError("Handler path is required")

        return cls(
            identifier=identifier,
            handler_path=handler_path,
            include_libs=resolve_include_paths(include_libs, include_endpoints, base_dir),
            params=MappingProxyType(merge_params(default_params(identifier), params)),
        )

    @property
    def function_name(self) -> str:
        return self.params["FunctionName"]

    def __str__(self) -> str:
        return f"Lambda {self.identifier}"
