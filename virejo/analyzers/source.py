"""Recovers functions, classes, components and imports from one TypeScript file."""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Tuple

from tree_sitter import Node

from ..logging import get_logger
from ..models import (
    AnalysisResult,
    ClassInfo,
    ComponentInfo,
    FunctionInfo,
    ImportInfo,
    ParameterInfo,
    PropertyInfo,
)
from .heuristics import generic_props, is_component_arrow, is_component_function, is_react_source
from .tree_sitter import TypeScriptParser, annotation_text, has_token, node_text

_METHOD_MEMBERS = {"method_definition", "abstract_method_signature"}
_PARAMETER_NODES = {"required_parameter", "optional_parameter"}


@dataclass(frozen=True)
class _ScanState:
    """Accumulated facts while walking the tree; export statements are resolved afterwards."""

    is_react_file: bool
    functions: Tuple[FunctionInfo, ...] = ()
    classes: Tuple[ClassInfo, ...] = ()
    components: Tuple[ComponentInfo, ...] = ()
    imports: Tuple[ImportInfo, ...] = ()
    default_exports: Tuple[str, ...] = ()
    named_exports: Tuple[str, ...] = ()


_Handler = Callable[[Node, _ScanState], _ScanState]


class SourceAnalyzer:
    """Builds an :class:`AnalysisResult` from TypeScript or TSX source text."""

    def __init__(self, parser: TypeScriptParser | None = None) -> None:
        self.parser = parser or TypeScriptParser()
        self.logger = get_logger("analyzer")

    def analyze(self, content: str, file_path: str) -> AnalysisResult:
        tree = self.parser.parse(content, file_path)
        state = _visit(tree.root_node, _ScanState(is_react_file=is_react_source(content, file_path)))
        result = _reconcile(state)
        self.logger.debug(
            "Analyzed %s: %d functions, %d classes, %d components, %d imports",
            file_path,
            len(result.functions),
            len(result.classes),
            len(result.components),
            len(result.imports),
        )
        return result


@lru_cache(maxsize=1)
def _shared_analyzer() -> SourceAnalyzer:
    return SourceAnalyzer()


def analyze(content: str, file_path: str) -> AnalysisResult:
    """Analyze ``content`` as the file at ``file_path``."""
    return _shared_analyzer().analyze(content, file_path)


def _visit(node: Node, state: _ScanState) -> _ScanState:
    handler = _HANDLERS.get(node.type)
    if handler is not None and node.is_named:
        state = handler(node, state)
    for child in node.children:
        state = _visit(child, state)
    return state


# Handlers


def _handle_import(node: Node, state: _ScanState) -> _ScanState:
    source = node.child_by_field_name("source")
    if source is None or source.type != "string":
        return state

    default_import: Optional[str] = None
    namespace_import: Optional[str] = None
    named: List[str] = []
    clause = _first_child(node, "import_clause")
    if clause is not None:
        for child in clause.named_children:
            if child.type == "identifier":
                default_import = node_text(child)
            elif child.type == "namespace_import":
                ident = _first_child(child, "identifier")
                if ident is not None:
                    namespace_import = node_text(ident)
            elif child.type == "named_imports":
                for specifier in child.named_children:
                    if specifier.type != "import_specifier":
                        continue
                    local = specifier.child_by_field_name("alias") or specifier.child_by_field_name(
                        "name"
                    )
                    if local is not None:
                        named.append(node_text(local))

    info = ImportInfo(
        module_name=node_text(source)[1:-1],
        named_imports=tuple(named),
        default_import=default_import,
        namespace_import=namespace_import,
    )
    return replace(state, imports=state.imports + (info,))


def _handle_function(node: Node, state: _ScanState) -> _ScanState:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return state
    if node.type == "function_expression" and not _is_default_declaration(node):
        return state

    info = _function_info(node, node_text(name_node), is_exported=_is_exported(node))
    if state.is_react_file and is_component_function(info.name, info.return_type):
        if _is_default_declaration(node):
            state = replace(state, default_exports=state.default_exports + (info.name,))
        component = ComponentInfo(
            name=info.name,
            is_exported=info.is_exported,
            props=_first_parameter_type(info),
        )
        return replace(state, components=state.components + (component,))
    return replace(state, functions=state.functions + (info,))


def _handle_variables(node: Node, state: _ScanState) -> _ScanState:
    exported = _is_exported(node)
    for declarator in node.named_children:
        if declarator.type != "variable_declarator":
            continue
        name_node = declarator.child_by_field_name("name")
        value = declarator.child_by_field_name("value")
        if name_node is None or name_node.type != "identifier":
            continue
        if value is None or value.type != "arrow_function":
            continue

        info = _function_info(value, node_text(name_node), is_exported=exported)
        annotation = annotation_text(declarator.child_by_field_name("type"))
        if state.is_react_file and is_component_arrow(info.name, annotation, info.return_type):
            props = _first_parameter_type(info) or generic_props(annotation)
            component = ComponentInfo(name=info.name, is_exported=exported, props=props)
            state = replace(state, components=state.components + (component,))
        else:
            state = replace(state, functions=state.functions + (info,))
    return state


def _handle_class(node: Node, state: _ScanState) -> _ScanState:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return state

    methods: List[FunctionInfo] = []
    properties: List[PropertyInfo] = []
    body = node.child_by_field_name("body")
    members = body.named_children if body is not None else []
    for member in members:
        member_name = member.child_by_field_name("name")
        if member_name is None or member_name.type != "property_identifier":
            continue
        name = node_text(member_name)
        if member.type in _METHOD_MEMBERS:
            if name == "constructor" or has_token(member, "get") or has_token(member, "set"):
                continue
            methods.append(_function_info(member, name, is_exported=False))
        elif member.type == "public_field_definition":
            properties.append(
                PropertyInfo(
                    name=name,
                    type=annotation_text(member.child_by_field_name("type")),
                    is_optional=has_token(member, "?"),
                )
            )

    info = ClassInfo(
        name=node_text(name_node),
        is_exported=_is_exported(node),
        methods=tuple(methods),
        properties=tuple(properties),
        is_abstract=node.type == "abstract_class_declaration",
    )
    return replace(state, classes=state.classes + (info,))


def _handle_export(node: Node, state: _ScanState) -> _ScanState:
    if has_token(node, "default"):
        value = node.child_by_field_name("value")
        if value is not None and value.type == "identifier":
            return replace(state, default_exports=state.default_exports + (node_text(value),))
        return state

    # Re-exports from another module describe that module, not this one.
    if node.child_by_field_name("source") is not None:
        return state
    clause = _first_child(node, "export_clause")
    if clause is None:
        return state
    for specifier in clause.named_children:
        if specifier.type != "export_specifier":
            continue
        name = node_text(specifier.child_by_field_name("name"))
        alias = specifier.child_by_field_name("alias")
        if alias is None:
            state = replace(state, named_exports=state.named_exports + (name,))
        elif node_text(alias) == "default":
            state = replace(state, default_exports=state.default_exports + (name,))
    return state


_HANDLERS: Dict[str, _Handler] = {
    "import_statement": _handle_import,
    "function_declaration": _handle_function,
    "function_expression": _handle_function,
    "lexical_declaration": _handle_variables,
    "variable_declaration": _handle_variables,
    "class_declaration": _handle_class,
    "abstract_class_declaration": _handle_class,
    "export_statement": _handle_export,
}


# Reconciliation


def _reconcile(state: _ScanState) -> AnalysisResult:
    """Apply export statements that refer back to earlier (or later) declarations."""
    functions = list(state.functions)
    classes = list(state.classes)
    components = list(state.components)

    for name in state.named_exports:
        functions = [replace(f, is_exported=True) if f.name == name else f for f in functions]
        classes = [replace(c, is_exported=True) if c.name == name else c for c in classes]
        components = [replace(c, is_exported=True) if c.name == name else c for c in components]

    for name in state.default_exports:
        index = next((i for i, c in enumerate(components) if c.name == name), None)
        if index is not None:
            components[index] = replace(
                components[index], is_default_export=True, is_exported=True
            )
            continue
        func = next((f for f in functions if f.name == name), None)
        if func is None:
            continue
        if state.is_react_file:
            functions = [f for f in functions if f.name != name]
            components.append(
                ComponentInfo(
                    name=name,
                    is_exported=True,
                    is_default_export=True,
                    props=_first_parameter_type(func),
                )
            )
        else:
            functions = [replace(f, is_exported=True) if f.name == name else f for f in functions]

    return AnalysisResult(
        functions=tuple(functions),
        classes=tuple(classes),
        components=tuple(components),
        imports=state.imports,
        is_react_file=state.is_react_file,
    )


# Helpers


def _function_info(node: Node, name: str, *, is_exported: bool) -> FunctionInfo:
    return FunctionInfo(
        name=name,
        is_async=has_token(node, "async"),
        parameters=_parameters(node),
        return_type=annotation_text(node.child_by_field_name("return_type")),
        is_exported=is_exported,
    )


def _parameters(node: Node) -> Tuple[ParameterInfo, ...]:
    single = node.child_by_field_name("parameter")
    if single is not None:
        return (ParameterInfo(name=node_text(single)),)
    params = node.child_by_field_name("parameters")
    if params is None:
        return ()
    return tuple(
        ParameterInfo(
            name=_pattern_name(param.child_by_field_name("pattern")),
            type=annotation_text(param.child_by_field_name("type")),
            is_optional=param.type == "optional_parameter",
        )
        for param in params.named_children
        if param.type in _PARAMETER_NODES
    )


def _pattern_name(pattern: Optional[Node]) -> str:
    # `...args` binds `args`
    if pattern is not None and pattern.type == "rest_pattern" and pattern.named_children:
        pattern = pattern.named_children[0]
    return node_text(pattern)


def _first_parameter_type(info: FunctionInfo) -> Optional[str]:
    return info.parameters[0].type if info.parameters else None


def _first_child(node: Node, node_type: str) -> Optional[Node]:
    return next((child for child in node.named_children if child.type == node_type), None)


def _is_exported(node: Node) -> bool:
    parent = node.parent
    return parent is not None and parent.type == "export_statement"


def _is_default_declaration(node: Node) -> bool:
    return _is_exported(node) and has_token(node.parent, "default")


__all__ = ["SourceAnalyzer", "analyze"]
