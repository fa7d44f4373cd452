"""Text constructors for the JSX and import nodes the pass emits."""


def string_literal(value: str) -> str:
    return '"' + value.replace("&", "&amp;").replace('"', "&quot;") + '"'


def jsx_attribute(name: str, value: str) -> str:
    return f"{name}={string_literal(value)}"


def jsx_opening_element(name: str, attributes: list[str], self_closing: bool = False) -> str:
    attrs = "".join(f" {attr}" for attr in attributes)
    return f"<{name}{attrs}{' />' if self_closing else '>'}"


def jsx_closing_element(name: str) -> str:
    return f"</{name}>"


def import_declaration(imported: str, local: str, source: str) -> str:
    specifier = imported if imported == local else f"{imported} as {local}"
    return f'import {{ {specifier} }} from "{source}";'
