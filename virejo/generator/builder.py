"""Renders Vitest scaffolds from an :class:`AnalysisResult`."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path, PurePath
from typing import Collection, Iterable, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from ..logging import get_logger
from ..models import AnalysisResult, ClassInfo, ComponentInfo, FunctionInfo, ParameterInfo
from .constants import (
    ANY_PROPS,
    ASSERTION_HINT,
    FRAMEWORK_IMPORT,
    INDENT,
    MOCK_INDENT,
    PLACEHOLDER_RULES,
    RENDER_IMPORT,
    UNDEFINED_PLACEHOLDER,
)
from .lines import BLANK, CodeBlock, Fragment, render
from .mocks import MockSet, MockStrategy, generate_mocks, select_strategy

_WHITESPACE = re.compile(r"\s")

DEFAULT_MOCK_STRATEGIES = frozenset({MockStrategy.STATE_HOOKS, MockStrategy.COMPONENT})


def placeholder_value(type_text: Optional[str]) -> str:
    """Return a stand-in argument for a parameter annotated with ``type_text``."""
    if not type_text:
        return UNDEFINED_PLACEHOLDER
    cleaned = _WHITESPACE.sub("", type_text.lower())
    for markers, value in PLACEHOLDER_RULES:
        if any(marker in cleaned for marker in markers):
            return value
    return UNDEFINED_PLACEHOLDER


def module_name_for(source_file_path: str) -> str:
    """Base name of the source file without its extension."""
    return PurePath(source_file_path.replace("\\", "/")).stem


class ScaffoldGenerator:
    """Assembles test-file text from line trees and the ``test_file.j2`` template."""

    TEMPLATE_NAME = "test_file.j2"

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        mocks_enabled: bool = True,
        mock_strategies: Collection[MockStrategy] = DEFAULT_MOCK_STRATEGIES,
    ) -> None:
        self.templates_dir = templates_dir
        self.mocks_enabled = mocks_enabled
        self.mock_strategies = frozenset(mock_strategies)
        self.logger = get_logger("generator")
        self._env = self._create_env(templates_dir)

    def generate(
        self, analysis: AnalysisResult, source_file_path: str, source_text: str = ""
    ) -> str:
        module_name = module_name_for(source_file_path)
        header = self._header_lines(analysis, module_name)

        sections: List[str] = []
        sections.extend(self._mock_sections(analysis, source_file_path, source_text))
        if analysis.functions:
            suite = CodeBlock(f"describe('{module_name}', () => {{")
            suite.add(*_separated(_function_group(func) for func in analysis.functions))
            sections.append(render([suite], indent=INDENT))
        for class_info in analysis.classes:
            sections.append(render([_class_group(class_info)], indent=INDENT))
        for component in analysis.components:
            sections.append(render([_component_group(component)], indent=INDENT))

        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(header=header, sections=sections)

    def _header_lines(self, analysis: AnalysisResult, module_name: str) -> List[str]:
        lines = [FRAMEWORK_IMPORT]
        if analysis.is_react_file and analysis.components:
            lines.append(RENDER_IMPORT)
        module_import = _module_import(analysis, f"./{module_name}")
        if module_import:
            lines.append(module_import)
        return lines

    def _mock_sections(
        self, analysis: AnalysisResult, source_file_path: str, source_text: str
    ) -> List[str]:
        if not self.mocks_enabled:
            return []
        strategy = select_strategy(source_file_path)
        if strategy not in self.mock_strategies:
            return []
        mocks = generate_mocks(strategy, analysis.imports, source_text)
        self.logger.debug(
            "Mock strategy %r produced %d mocks and %d registrations",
            strategy.value,
            len(mocks.mock_names),
            len(mocks.registrations),
        )
        if mocks.is_empty:
            return []

        sections: List[str] = []
        hoisted = _hoisted_block(mocks)
        if hoisted is not None:
            sections.append(render([hoisted], indent=MOCK_INDENT))
        sections.extend(render([block], indent=MOCK_INDENT) for block in mocks.registrations)
        return sections

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


@lru_cache(maxsize=1)
def _shared_generator() -> ScaffoldGenerator:
    return ScaffoldGenerator()


def generate(analysis: AnalysisResult, source_file_path: str, source_text: str = "") -> str:
    """Render the test file for ``analysis`` with the default settings."""
    return _shared_generator().generate(analysis, source_file_path, source_text)


def _module_import(analysis: AnalysisResult, relative_path: str) -> str:
    named = [func.name for func in analysis.functions if func.is_exported]
    named.extend(cls.name for cls in analysis.classes if cls.is_exported)
    default: Optional[str] = None
    for component in analysis.components:
        if component.is_default_export:
            default = component.name
        elif component.is_exported:
            named.append(component.name)

    parts: List[str] = []
    if default:
        parts.append(default)
    if named:
        parts.append("{ " + ", ".join(named) + " }")
    if not parts:
        return ""
    return f"import {', '.join(parts)} from '{relative_path}';"


def _function_group(func: FunctionInfo) -> CodeBlock:
    if func.parameters:
        title = "should execute with parameters"
        call = f"{func.name}({_arguments(func.parameters)})"
    else:
        title = "should execute without parameters"
        call = f"{func.name}()"
    return CodeBlock(f"describe('{func.name}', () => {{").add(
        _case("should be defined", [f"expect({func.name}).toBeDefined();"]),
        BLANK,
        _execution_case(title, call, func.is_async),
    )


def _class_group(class_info: ClassInfo) -> CodeBlock:
    name = class_info.name
    group = CodeBlock(f"describe('{name}', () => {{")
    group.add(f"let instance: {name};")
    if class_info.is_abstract:
        group.add(f"// TODO: {name} is abstract; construct a concrete subclass instead.")
    group.add(
        BLANK,
        CodeBlock("beforeEach(() => {", [f"instance = new {name}();"]),
        BLANK,
        _case(
            "should be instantiated",
            ["expect(instance).toBeDefined();", f"expect(instance).toBeInstanceOf({name});"],
        ),
    )
    for method in class_info.methods:
        group.add(BLANK, _method_group(method))
    return group


def _method_group(method: FunctionInfo) -> CodeBlock:
    call = f"instance.{method.name}({_arguments(method.parameters)})"
    return CodeBlock(f"describe('{method.name}', () => {{").add(
        _case("should be defined", [f"expect(instance.{method.name}).toBeDefined();"]),
        BLANK,
        _execution_case("should execute", call, method.is_async),
    )


def _component_group(component: ComponentInfo) -> CodeBlock:
    name = component.name
    group = CodeBlock(f"describe('{name}', () => {{")
    group.add(
        _case(
            "should render without crashing",
            [f"const {{ container }} = render(<{name} />);", "expect(container).toBeInTheDocument();"],
        ),
        BLANK,
    )
    if component.props and component.props != ANY_PROPS:
        group.add(
            _case(
                "should render with props",
                [
                    CodeBlock(
                        "const mockProps = {",
                        ["// Add mock props based on your component's prop types"],
                        closer="};",
                    ),
                    f"const {{ container }} = render(<{name} {{...mockProps}} />);",
                    "expect(container).toBeInTheDocument();",
                ],
            ),
            BLANK,
        )
    group.add(
        _case(
            "should match snapshot",
            [f"const {{ container }} = render(<{name} />);", "expect(container.firstChild).toMatchSnapshot();"],
        )
    )
    return group


def _case(title: str, body: Sequence[Fragment], *, is_async: bool = False) -> CodeBlock:
    prefix = "async " if is_async else ""
    return CodeBlock(f"it('{title}', {prefix}() => {{", list(body))


def _execution_case(title: str, call: str, is_async: bool) -> CodeBlock:
    awaited = f"await {call}" if is_async else call
    return _case(
        title,
        [f"const result = {awaited};", ASSERTION_HINT, "expect(result).toBeDefined();"],
        is_async=is_async,
    )


def _arguments(parameters: Sequence[ParameterInfo]) -> str:
    return ", ".join(placeholder_value(param.type) for param in parameters)


def _hoisted_block(mocks: MockSet) -> Optional[CodeBlock]:
    if not mocks.mock_names:
        return None
    names = ", ".join(mocks.mock_names)
    return CodeBlock(
        f"const {{ {names} }} = vi.hoisted(() => {{",
        [*mocks.hoisted_declarations, f"return {{ {names} }};"],
    )


def _separated(blocks: Iterable[CodeBlock]) -> List[Fragment]:
    fragments: List[Fragment] = []
    for block in blocks:
        if fragments:
            fragments.append(BLANK)
        fragments.append(block)
    return fragments


__all__ = ["ScaffoldGenerator", "generate", "module_name_for", "placeholder_value"]
