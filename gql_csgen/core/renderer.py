"""Text rendering of IR declarations as C# source."""

from .ir import IRClass, IRConstructor, IREnum, IRMethod, IRParameter, IRProperty

INDENT = "  "


def indent_multiline(text: str, count: int = 1) -> str:
    """Indent every non-blank line of text by count levels."""
    indentation = INDENT * count
    return "\n".join(indentation + line if line else line for line in text.split("\n"))


def render_block(
    kind: str,
    name: str,
    body: str,
    access: str | None = "public",
    implements: list[str] | None = None,
) -> str:
    """Render `access kind name : implements { body }`."""
    header = " ".join(part for part in (access, kind, name) if part)
    if implements:
        header += " : " + ", ".join(implements)
    if not body:
        return f"{header} {{\n}}"
    return f"{header} {{\n{body}\n}}"


def render_property(prop: IRProperty) -> str:
    return "\n".join([
        f'[JsonProperty("{prop.wire_name}")]',
        f"public {prop.type_name} {prop.member_name} {{ get; set; }}",
    ])


def render_parameters(parameters: tuple[IRParameter, ...]) -> str:
    rendered = []
    for param in parameters:
        text = f"{param.type_name} {param.name}"
        if param.default is not None:
            text += f" = {param.default}"
        rendered.append(text)
    return ", ".join(rendered)


def render_constructor(constructor: IRConstructor) -> str:
    lines = [f"public {constructor.class_name}({render_parameters(constructor.parameters)}) {{"]
    for member_name, parameter_name in constructor.assignments:
        lines.append(f"{INDENT}this.{member_name} = {parameter_name};")
    lines.append("}")
    return "\n".join(lines)


def render_class(decl: IRClass) -> str:
    """Render a class with its nested classes, properties and constructor."""
    parts = []
    for member in decl.members:
        if isinstance(member, IRClass):
            parts.append(render_class(member))
        else:
            parts.append(render_property(member))
    if decl.constructor:
        parts.append(render_constructor(decl.constructor))
    return render_block("class", decl.name, indent_multiline("\n\n".join(parts)) if parts else "")


def render_enum(decl: IREnum) -> str:
    return render_block("enum", decl.name, indent_multiline(",\n".join(decl.values)))


def render_signature(method: IRMethod) -> str:
    return f"{method.return_type} {method.name}({render_parameters(method.parameters)})"


def render_interface_method(method: IRMethod) -> str:
    return f"{render_signature(method)};"


def render_method(method: IRMethod) -> str:
    """Render a concrete public method with its body."""
    return f"public {render_signature(method)} {{\n{indent_multiline(method.body or '')}\n}}"
