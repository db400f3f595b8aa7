"""Core modules for C# operations code generation."""

from .client_generator import ClientGenerator
from .config import CSharpOperationsConfig, HttpClientConfig, ScalarConfig, load_config
from .errors import (
    CodegenError,
    FieldSchemaNotFoundError,
    FragmentSchemaNotFoundError,
    OperationSchemaNotFoundError,
    OutputExtensionError,
    TypeSchemaNotFoundError,
    UnknownOperationTypeError,
    UnsupportedSelectionError,
)
from .generator import NAMED_CLIENT_DIRECTIVE, CodeGenerator, validate_output_file
from .ir import (
    CompiledField,
    IRBaseType,
    IRClass,
    IRConstructor,
    IREnum,
    IRFieldType,
    IRFragment,
    IRListType,
    IRMethod,
    IRParameter,
    IRProperty,
)
from .naming import NamingEngine, convert_safe_name, pascal_case
from .operations import OperationCompiler
from .parser import DocumentParser, add_to_schema, build_schema_from_sdl
from .scalars import ScalarMapping, ScalarRegistry, is_value_type
from .selection import SelectionCompiler
from .types import TypeResolver

__all__ = [
    # Config
    "CSharpOperationsConfig",
    "HttpClientConfig",
    "ScalarConfig",
    "load_config",
    # Errors
    "CodegenError",
    "FieldSchemaNotFoundError",
    "FragmentSchemaNotFoundError",
    "OperationSchemaNotFoundError",
    "OutputExtensionError",
    "TypeSchemaNotFoundError",
    "UnknownOperationTypeError",
    "UnsupportedSelectionError",
    # IR types
    "CompiledField",
    "IRBaseType",
    "IRClass",
    "IRConstructor",
    "IREnum",
    "IRFieldType",
    "IRFragment",
    "IRListType",
    "IRMethod",
    "IRParameter",
    "IRProperty",
    # Naming
    "NamingEngine",
    "convert_safe_name",
    "pascal_case",
    # Scalars
    "ScalarMapping",
    "ScalarRegistry",
    "is_value_type",
    # Compilers
    "TypeResolver",
    "SelectionCompiler",
    "OperationCompiler",
    "ClientGenerator",
    # Parser
    "DocumentParser",
    "add_to_schema",
    "build_schema_from_sdl",
    # Generator
    "CodeGenerator",
    "NAMED_CLIENT_DIRECTIVE",
    "validate_output_file",
]
