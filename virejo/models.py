"""Structural model shared by the analyzer, the mock selector and the generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ParameterInfo:
    """One declared parameter of a function, arrow function or method."""

    name: str
    type: Optional[str] = None
    is_optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "isOptional": self.is_optional}
        if self.type is not None:
            data["type"] = self.type
        return data


@dataclass(frozen=True)
class FunctionInfo:
    """A free function, arrow-function-bound constant or class method."""

    name: str
    is_async: bool = False
    parameters: Tuple[ParameterInfo, ...] = ()
    return_type: Optional[str] = None
    is_exported: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "isAsync": self.is_async,
            "parameters": [param.to_dict() for param in self.parameters],
            "isExported": self.is_exported,
        }
        if self.return_type is not None:
            data["returnType"] = self.return_type
        return data


@dataclass(frozen=True)
class PropertyInfo:
    """A class field."""

    name: str
    type: Optional[str] = None
    is_optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "isOptional": self.is_optional}
        if self.type is not None:
            data["type"] = self.type
        return data


@dataclass(frozen=True)
class ClassInfo:
    """A class declaration with its methods and fields."""

    name: str
    is_exported: bool = False
    methods: Tuple[FunctionInfo, ...] = ()
    properties: Tuple[PropertyInfo, ...] = ()
    is_abstract: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "isExported": self.is_exported,
            "isAbstract": self.is_abstract,
            "methods": [method.to_dict() for method in self.methods],
            "properties": [prop.to_dict() for prop in self.properties],
        }


@dataclass(frozen=True)
class ComponentInfo:
    """A function or arrow function that looks like a React component."""

    name: str
    is_exported: bool = False
    is_default_export: bool = False
    props: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "isExported": self.is_exported,
            "isDefaultExport": self.is_default_export,
        }
        if self.props is not None:
            data["props"] = self.props
        return data


@dataclass(frozen=True)
class ImportInfo:
    """One import declaration with a string-literal module specifier."""

    module_name: str
    named_imports: Tuple[str, ...] = ()
    default_import: Optional[str] = None
    namespace_import: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "moduleName": self.module_name,
            "namedImports": list(self.named_imports),
        }
        if self.default_import is not None:
            data["defaultImport"] = self.default_import
        if self.namespace_import is not None:
            data["namespaceImport"] = self.namespace_import
        return data


@dataclass(frozen=True)
class AnalysisResult:
    """Everything the generator needs to know about one source file.

    Each sequence keeps declaration order; the generated test file follows it.
    """

    functions: Tuple[FunctionInfo, ...] = ()
    classes: Tuple[ClassInfo, ...] = ()
    components: Tuple[ComponentInfo, ...] = ()
    imports: Tuple[ImportInfo, ...] = ()
    is_react_file: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase JSON shape used by the CLI and the service."""
        return {
            "functions": [func.to_dict() for func in self.functions],
            "classes": [cls.to_dict() for cls in self.classes],
            "components": [component.to_dict() for component in self.components],
            "imports": [info.to_dict() for info in self.imports],
            "isReactFile": self.is_react_file,
        }
