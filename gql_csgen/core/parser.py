"""Schema and document loading using graphql-core.

Parses SDL files into a GraphQLSchema (with the @namedClient directive
added) and operation files into DocumentNodes.
"""

import logging
import os

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    GraphQLSchema,
    build_ast_schema,
    concat_ast,
    parse,
)

from .generator import NAMED_CLIENT_DIRECTIVE

logger = logging.getLogger(__name__)

GRAPHQL_EXTENSIONS = (".graphql", ".graphqls", ".gql")


def collect_graphql_files(path: str) -> list[str]:
    """Collect GraphQL files from a file or directory path, sorted."""
    files = []
    if os.path.isfile(path):
        if path.endswith(GRAPHQL_EXTENSIONS):
            files.append(path)
    else:
        for root, _, filenames in os.walk(path):
            for filename in filenames:
                if filename.endswith(GRAPHQL_EXTENSIONS):
                    files.append(os.path.join(root, filename))
    return sorted(files)


def add_to_schema(document: DocumentNode) -> DocumentNode:
    """Append the @namedClient directive unless the SDL declares it already."""
    for definition in document.definitions:
        if isinstance(definition, DirectiveDefinitionNode) and definition.name.value == "namedClient":
            return document
    return concat_ast([document, parse(NAMED_CLIENT_DIRECTIVE)])


def build_schema_from_sdl(sdl: str) -> GraphQLSchema:
    """Build a schema from SDL text, with the @namedClient directive."""
    return build_ast_schema(add_to_schema(parse(sdl)))


class DocumentParser:
    """Loads the schema and operation documents for one generation run."""

    def __init__(self, schema_path: str, documents_path: str | None = None):
        """Initialize a parser with schema and document file or directory paths."""
        self.schema_path = schema_path
        self.documents_path = documents_path

    def _parse_file(self, file_path: str) -> DocumentNode:
        with open(file_path) as f:
            content = f.read()
        try:
            return parse(content)
        except Exception as e:
            logger.error("Error parsing %s: %s", os.path.basename(file_path), e)
            raise

    def parse_schema(self) -> GraphQLSchema:
        """Parse every schema file and build one schema."""
        schema_files = collect_graphql_files(self.schema_path)
        if not schema_files:
            raise FileNotFoundError(f"No GraphQL schema files found in {self.schema_path}")
        document = concat_ast([self._parse_file(p) for p in schema_files])
        logger.debug("Parsed %d schema files", len(schema_files))
        return build_ast_schema(add_to_schema(document))

    def parse_documents(self) -> list[DocumentNode]:
        """Parse every operation document file."""
        if not self.documents_path:
            return []
        documents = [self._parse_file(p) for p in collect_graphql_files(self.documents_path)]
        logger.debug("Parsed %d document files", len(documents))
        return documents
