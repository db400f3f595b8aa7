"""Command-line interface for gql-csgen."""

import logging
from pathlib import Path

import click
from graphql import GraphQLError
from pydantic import ValidationError

from .core.config import CSharpOperationsConfig, load_config
from .core.errors import CodegenError
from .core.generator import CodeGenerator, validate_output_file
from .core.parser import DocumentParser


@click.group()
@click.version_option(package_name="gql-csgen")
def main():
    """GraphQL operations code generator for C#.

    Generate typed C# client classes from a GraphQL schema and operations.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file or directory.",
)
@click.option(
    "--documents",
    "-d",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL operations file or directory.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output file for generated code (must end with .cs).",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True),
    help="JSON configuration file (camelCase option names).",
)
@click.option("--namespace", help="Namespace of the generated code.")
@click.option("--class-name", "-n", help="Name of the generated client class.")
@click.option(
    "--typesafe/--no-typesafe",
    default=None,
    help="Generate request, response, fragment, input and enum classes.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    documents: str,
    output: str,
    config_file: str | None,
    namespace: str | None,
    class_name: str | None,
    typesafe: bool | None,
    template_dir: str | None,
    verbose: bool,
):
    """Generate C# operations code from GraphQL schema and documents.

    Examples:

        gql-csgen generate --schema ./schema --documents ./operations --output ./Client.cs

        gql-csgen generate -s schema.graphql -d ops.graphql -o Api.cs --typesafe

        gql-csgen generate -s ./schema -d ./ops -o Api.cs -c codegen.json -n MyApiClient
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    output_path = Path(output).resolve()
    try:
        validate_output_file(output_path)

        config = load_config(config_file) if config_file else CSharpOperationsConfig()
        overrides = {
            "namespace_name": namespace,
            "operations_class_name": class_name,
            "typesafe_operation": typesafe,
        }
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if overrides:
            config = CSharpOperationsConfig.model_validate(
                {**config.model_dump(exclude_unset=True), **overrides}
            )

        if verbose:
            click.echo(f"Schema: {Path(schema).resolve()}")
            click.echo(f"Documents: {Path(documents).resolve()}")
            click.echo(f"Output: {output_path}")

        # Parse schema and documents
        click.echo("Parsing schema and documents...")
        parser = DocumentParser(schema, documents)
        graphql_schema = parser.parse_schema()
        parsed_documents = parser.parse_documents()

        generator = CodeGenerator(
            graphql_schema, parsed_documents, config, template_dir=template_dir
        )
        if verbose:
            click.echo(f"  Operations: {len(generator.operations)}")
            click.echo(f"  Fragments: {len(generator.fragments)}")
            click.echo(f"  Inputs: {len(generator.input_types)}")
            click.echo(f"  Enums: {len(generator.enum_types)}")

        # Generate code
        click.echo(f"Generating code (class: {config.operations_class_name})...")
        code = generator.write(output_path)

        if verbose:
            click.echo(f"  Lines: {len(code.splitlines())}")
        click.echo(f"Done! Generated code in {output_path}")
    except (CodegenError, GraphQLError, ValidationError, FileNotFoundError) as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
