"""Configuration for C# operations generation.

Options accept the camelCase names used in codegen YAML/JSON configs
(``namespaceName``, ``typesafeOperation``, ...) as well as snake_case names.

Example:
    config = CSharpOperationsConfig.model_validate({
        "namespaceName": "MyCompany.Api",
        "typesafeOperation": True,
        "httpClientConfig": {
            "prodEndpoint": "https://api.example.com/graphql",
            "devEndpoint": "https://dev.example.com/graphql",
            "useDevIf": "UnityEngine.Debug.isDebugBuild",
        },
        "scalars": {"Money": "decimal", "Cursor": {"type": "Cursor", "valueType": True}},
    })
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .scalars import ScalarMapping, ScalarRegistry

DEFAULT_SUFFIX = "GQL"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class HttpClientConfig(_ConfigModel):
    """Endpoint configuration for the generated HTTP transport client.

    Attributes:
        prod_endpoint: Primary endpoint, used unconditionally when no
                       secondary endpoint and predicate are given
        dev_endpoint: Secondary endpoint
        use_dev_if: C# boolean expression choosing the secondary endpoint
    """

    prod_endpoint: str = Field(min_length=1)
    dev_endpoint: str | None = None
    use_dev_if: str | None = None

    @property
    def has_secondary(self) -> bool:
        return bool(self.dev_endpoint and self.use_dev_if)


class ScalarConfig(_ConfigModel):
    """Explicit scalar mapping with a value-type override."""

    type: str = Field(min_length=1)
    value_type: bool | None = None


class CSharpOperationsConfig(_ConfigModel):
    """All recognised generation options."""

    namespace_name: str = "GraphQLCodeGen"
    operations_class_name: str = "GraphQLClient"
    named_client: str | None = None
    # Accepted for config compatibility with other client plugins
    query_suffix: str = DEFAULT_SUFFIX
    mutation_suffix: str = DEFAULT_SUFFIX
    subscription_suffix: str = DEFAULT_SUFFIX
    typesafe_operation: bool = False
    http_client_config: HttpClientConfig | None = None
    scalars: dict[str, str | ScalarConfig] = Field(default_factory=dict)
    naming_convention: Literal["pascalCase", "keep"] = "pascalCase"
    document_mode: Literal["documentNode", "external"] = "documentNode"

    @property
    def interface_name(self) -> str:
        return f"I{self.operations_class_name}"

    def build_scalar_registry(self) -> ScalarRegistry:
        """Default scalar mappings overlaid with the configured ones."""
        mappings = {}
        for scalar_name, value in self.scalars.items():
            if isinstance(value, str):
                mappings[scalar_name] = ScalarMapping(value)
            else:
                mappings[scalar_name] = ScalarMapping(value.type, value.value_type)
        return ScalarRegistry(mappings)


def load_config(path: str | Path) -> CSharpOperationsConfig:
    """Load and validate a JSON configuration file."""
    return CSharpOperationsConfig.model_validate_json(Path(path).read_text())
