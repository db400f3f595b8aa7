"""Errors raised while generating C# operations code.

Every error aborts the current generation run; there is no partial output.
"""


class CodegenError(Exception):
    """Base class for all code generation failures."""


class FieldSchemaNotFoundError(CodegenError):
    """A selected field does not exist on its parent schema type."""

    def __init__(self, field_name: str, parent_type: str):
        self.field_name = field_name
        self.parent_type = parent_type
        super().__init__(f"Field schema not found; {field_name} on {parent_type}")


class FragmentSchemaNotFoundError(CodegenError):
    """A fragment spread references an unknown fragment."""

    def __init__(self, fragment_name: str):
        self.fragment_name = fragment_name
        super().__init__(f"Fragment schema not found; {fragment_name}")


class TypeSchemaNotFoundError(CodegenError):
    """A variable references a type that is not part of the schema."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Type schema not found; {type_name}")


class OperationSchemaNotFoundError(CodegenError):
    """The schema has no root type for an operation kind."""

    def __init__(self, operation_type: str):
        self.operation_type = operation_type
        super().__init__(f"Operation schema not found; {operation_type}")


class UnsupportedSelectionError(CodegenError):
    """A selection uses a construct the compiler does not support."""

    def __init__(self, owner: str, kind: str):
        self.owner = owner
        self.kind = kind
        super().__init__(f"Unsupported kind; {owner} {kind}")


class UnknownOperationTypeError(CodegenError):
    """An operation is neither a query, a mutation nor a subscription."""

    def __init__(self, operation_type: str):
        self.operation_type = operation_type
        super().__init__(f"Unexpected operation type: {operation_type}")


class OutputExtensionError(CodegenError):
    """The requested output file does not have the .cs extension."""

    def __init__(self, output_file: str):
        self.output_file = output_file
        super().__init__(
            f'Plugin "c-sharp-operations" requires extension to be ".cs"! Got: {output_file}'
        )
