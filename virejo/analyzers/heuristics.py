"""Syntactic heuristics used to classify declarations.

Each predicate captures exactly one rule so that false positives and false
negatives can be pinned down independently.
"""

from __future__ import annotations

import re
from typing import Optional

from ..paths import is_react_file

_REACT_IMPORT_MARKERS = ("import React", "from 'react'", 'from "react"')
_ELEMENT_RETURN_MARKERS = ("JSX", "ReactElement", "React.FC")
_COMPONENT_TYPE_MARKERS = ("React.FC", "ReactFC", "FunctionComponent")
_GENERIC_PROPS = re.compile(r"(?:React\.)?(?:FC|FunctionComponent)<([^>]+)>")


def is_react_source(content: str, file_path: str) -> bool:
    """A file is React-flavoured when it is a .tsx file or imports React."""
    if is_react_file(file_path):
        return True
    return any(marker in content for marker in _REACT_IMPORT_MARKERS)


def is_component_name(name: Optional[str]) -> bool:
    """Component names start with an uppercase letter."""
    return bool(name) and name[0].isupper()


def returns_element(return_type: Optional[str]) -> bool:
    """Return type text mentions JSX or a React element type."""
    if not return_type:
        return False
    return any(marker in return_type for marker in _ELEMENT_RETURN_MARKERS)


def has_component_annotation(type_annotation: Optional[str]) -> bool:
    """Declared variable type is a React functional-component type."""
    if not type_annotation:
        return False
    return any(marker in type_annotation for marker in _COMPONENT_TYPE_MARKERS)


def is_component_function(name: Optional[str], return_type: Optional[str]) -> bool:
    """Function declarations need both a component name and an element return type."""
    return is_component_name(name) and returns_element(return_type)


def is_component_arrow(
    name: Optional[str], type_annotation: Optional[str], return_type: Optional[str]
) -> bool:
    """Arrow functions qualify on any single signal."""
    return (
        has_component_annotation(type_annotation)
        or is_component_name(name)
        or returns_element(return_type)
    )


def generic_props(type_annotation: Optional[str]) -> Optional[str]:
    """Extract ``Props`` from annotations such as ``React.FC<Props>``."""
    if not type_annotation:
        return None
    match = _GENERIC_PROPS.search(type_annotation)
    if match is None:
        return None
    props = match.group(1).strip()
    return props or None


__all__ = [
    "generic_props",
    "has_component_annotation",
    "is_component_arrow",
    "is_component_function",
    "is_component_name",
    "is_react_source",
    "returns_element",
]
