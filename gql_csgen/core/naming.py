"""Name derivation for generated C# declarations.

All functions are pure; the same input always produces the same name.
"""

import re

from graphql import OperationDefinitionNode

# C# reserved keywords; identifiers matching one are prefixed with '@'
CSHARP_KEYWORDS = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
    "checked", "class", "const", "continue", "decimal", "default", "delegate",
    "do", "double", "else", "enum", "event", "explicit", "extern", "false",
    "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
    "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
    "new", "null", "object", "operator", "out", "override", "params",
    "private", "protected", "public", "readonly", "ref", "return", "sbyte",
    "sealed", "short", "sizeof", "stackalloc", "static", "string", "struct",
    "switch", "this", "throw", "true", "try", "typeof", "uint", "ulong",
    "unchecked", "unsafe", "ushort", "using", "virtual", "void", "volatile",
    "while",
})

NAMING_CONVENTIONS = ("pascalCase", "keep")

RESPONSE_SUFFIX = "Payload"
REQUEST_SUFFIX = "Request"
RESULT_SUFFIX = "Result"
STRIPPED_RESPONSE_PREFIX = "Get"


def _split_words(name: str) -> list[str]:
    s1 = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", name)
    s2 = re.sub(r"([A-Z])([A-Z][a-z])", r"\1 \2", s1)
    return [w for w in re.split(r"[^A-Za-z0-9]+", s2) if w]


def pascal_case(name: str) -> str:
    """Convert camelCase, snake_case or kebab-case to PascalCase.

    Acronyms are treated as words ("userID" -> "UserId"); a word after the
    first that starts with a digit is joined with an underscore.
    """
    result = []
    for i, word in enumerate(_split_words(name)):
        first, rest = word[0], word[1:].lower()
        if i > 0 and first.isdigit():
            result.append(f"_{first}{rest}")
        else:
            result.append(f"{first.upper()}{rest}")
    return "".join(result)


def convert_safe_name(name: str) -> str:
    """Escape C# keywords with a verbatim '@' prefix."""
    if name in CSHARP_KEYWORDS:
        return f"@{name}"
    return name


class NamingEngine:
    """Derives class, member and method names for generated code.

    Args:
        convention: "pascalCase" (default) or "keep" for declared names of
                    operations, fragments, inputs and enums
    """

    def __init__(self, convention: str = "pascalCase"):
        if convention not in NAMING_CONVENTIONS:
            raise ValueError(f"Unknown naming convention: {convention}")
        self.convention = convention

    def convert_name(self, name: str) -> str:
        """Apply the configured convention to a declared GraphQL name."""
        if self.convention == "keep":
            return name
        return pascal_case(name)

    def operation_name(self, node: OperationDefinitionNode) -> str:
        return self.convert_name(node.name.value)

    def response_class_name(self, node: OperationDefinitionNode) -> str:
        """<Operation>Payload, with a leading 'Get' removed."""
        class_name = f"{self.operation_name(node)}{RESPONSE_SUFFIX}"
        if class_name.startswith(STRIPPED_RESPONSE_PREFIX):
            class_name = class_name[len(STRIPPED_RESPONSE_PREFIX):]
        return convert_safe_name(class_name)

    def request_class_name(self, node: OperationDefinitionNode) -> str:
        return convert_safe_name(f"{self.operation_name(node)}{REQUEST_SUFFIX}")

    def fragment_class_name(self, fragment_name: str) -> str:
        return convert_safe_name(self.convert_name(fragment_name))

    def type_name(self, type_name: str) -> str:
        """Declared name of a generated input class or enum."""
        return convert_safe_name(self.convert_name(type_name))

    @staticmethod
    def result_class_name(field_name: str, is_list: bool) -> str:
        """Nested class for a composite field: users -> UserResult."""
        base_name = pascal_case(field_name)
        if is_list and base_name.endswith("s"):
            base_name = base_name[:-1]
        return convert_safe_name(f"{base_name}{RESULT_SUFFIX}")

    @staticmethod
    def property_name(wire_name: str) -> str:
        """In-class member name for a wire field name."""
        return convert_safe_name(pascal_case(wire_name))

    @staticmethod
    def parameter_name(variable_name: str) -> str:
        return convert_safe_name(variable_name)

    def method_name(self, node: OperationDefinitionNode) -> str:
        """Client method name for a query or mutation."""
        return f"{self.operation_name(node)}Async"

    def subscription_method_name(self, node: OperationDefinitionNode) -> str:
        return f"Create{self.operation_name(node)}Stream"


class MemberScope:
    """Tracks member names already used inside one generated class.

    C# forbids duplicate member names and members named after their
    enclosing type.
    """

    def __init__(self, class_name: str = ""):
        self._taken: set[str] = {class_name} if class_name else set()

    def claim(self, name: str) -> str:
        """Reserve a name, appending 2, 3, ... when it is already taken."""
        candidate = name
        counter = 2
        while candidate in self._taken:
            candidate = f"{name}{counter}"
            counter += 1
        self._taken.add(candidate)
        return candidate
