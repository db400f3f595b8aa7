"""Client surface generator.

Builds the client interface and its implementing class from the compiled
operation methods:

    public interface IGraphQLClient { ... }
    public class GraphQLClient : IGraphQLClient { ... }

When endpoint configuration is present, the class also owns a lazily created
static GraphQLHttpClient.
"""

from .config import CSharpOperationsConfig, HttpClientConfig
from .ir import IRMethod
from .renderer import (
    indent_multiline,
    render_block,
    render_interface_method,
    render_method,
)

NEWTONSOFT_SERIALIZER = "new NewtonsoftJsonSerializer()"


def _csharp_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


class ClientGenerator:
    """Generates the client interface and class declarations."""

    def __init__(self, config: CSharpOperationsConfig):
        self.config = config
        self.class_name = config.operations_class_name
        self.interface_name = config.interface_name

    def generate_interface(self, signatures: list[IRMethod]) -> str:
        """Interface listing every operation signature."""
        body = "\n".join(render_interface_method(m) for m in signatures)
        return render_block("interface", self.interface_name, indent_multiline(body) if body else "")

    def generate_class(self, methods: list[IRMethod]) -> str:
        """Client class implementing the interface."""
        parts = []
        declaration = self.generate_client_declaration()
        if declaration:
            parts.append(declaration)
        parts.extend(render_method(m) for m in methods)
        body = indent_multiline("\n\n".join(parts)) if parts else ""
        return render_block("class", self.class_name, body, implements=[self.interface_name])

    def generate_client_declaration(self) -> str:
        """Static transport client created once on first use.

        A single initialization flag guards the initializer, so the endpoint
        choice is made exactly once per process.
        """
        http_config = self.config.http_client_config
        if http_config is None:
            return ""
        lines = [
            "private static readonly object _clientLock = new object();",
            "private static volatile bool _clientInitialized;",
            "private static GraphQLHttpClient _client;",
            "",
            "private static GraphQLHttpClient client {",
            "  get {",
            "    if (!_clientInitialized) {",
            "      lock (_clientLock) {",
            "        if (!_clientInitialized) {",
        ]
        lines.extend("          " + line for line in self._client_initializer(http_config))
        lines.extend([
            "          _clientInitialized = true;",
            "        }",
            "      }",
            "    }",
            "",
            "    return _client;",
            "  }",
            "}",
        ])
        return "\n".join(lines)

    @staticmethod
    def _client_initializer(http_config: HttpClientConfig) -> list[str]:
        prod = _csharp_string(http_config.prod_endpoint)
        if not http_config.has_secondary:
            return [f"_client = new GraphQLHttpClient({prod}, {NEWTONSOFT_SERIALIZER});"]
        dev = _csharp_string(http_config.dev_endpoint)
        return [
            f"var endpoint = {http_config.use_dev_if} ? {dev} : {prod};",
            f"_client = new GraphQLHttpClient(endpoint, {NEWTONSOFT_SERIALIZER});",
        ]
