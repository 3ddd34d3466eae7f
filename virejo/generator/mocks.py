"""Mock strategy selection and ``vi.mock`` generation for component and hook modules."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Iterable, List, Sequence

from ..models import ImportInfo
from .lines import CodeBlock, Fragment, comma_separated

STATE_MODULE = "jotai"
UI_MODULE = "react"
STATE_HOOKS = ("useAtom", "useAtomValue")
ATOM_SUFFIX = "Atom"
MOCK_SUFFIX = "Mock"

_HOOK_FILE = re.compile(r"^use[A-Z]\w*\.tsx?$")
_COMPONENT_FILE = re.compile(r"^[A-Z]\w*\.tsx$")
_HOOK_NAME = re.compile(r"^use[A-Z]")


class MockStrategy(str, Enum):
    """How the dependencies of a module under test should be mocked."""

    STATE_HOOKS = "React custom hooks"
    COMPONENT = "React component"
    OTHER = "Other"


@dataclass
class MockSet:
    """Hoisted mock declarations, ``vi.mock`` registrations and the declared mock names."""

    hoisted_declarations: List[Fragment] = field(default_factory=list)
    registrations: List[CodeBlock] = field(default_factory=list)
    mock_names: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.hoisted_declarations and not self.registrations

    def declare(self, name: str, *declarations: Fragment) -> bool:
        """Record ``name`` with its declarations unless it was already declared."""
        if name in self.mock_names:
            return False
        self.mock_names.append(name)
        self.hoisted_declarations.extend(declarations)
        return True


@dataclass(frozen=True)
class _AtomUsage:
    name: str
    is_function: bool
    in_use_atom: bool
    in_use_atom_value: bool


def select_strategy(file_name: str) -> MockStrategy:
    """Pick the strategy from the base name of ``file_name``."""
    basename = PurePath(file_name.replace("\\", "/")).name
    if _HOOK_FILE.match(basename):
        return MockStrategy.STATE_HOOKS
    if _COMPONENT_FILE.match(basename):
        return MockStrategy.COMPONENT
    return MockStrategy.OTHER


def mock_name(original: str) -> str:
    return f"{original}{MOCK_SUFFIX}"


def is_state_hook(name: str) -> bool:
    return name in STATE_HOOKS


def is_atom(name: str) -> bool:
    return name.endswith(ATOM_SUFFIX) and not is_state_hook(name)


def is_component_import(name: str, module_name: str) -> bool:
    return name[:1].isupper() and STATE_MODULE not in module_name


def is_hook_import(name: str) -> bool:
    return bool(_HOOK_NAME.match(name))


def generate_mocks(
    strategy: MockStrategy, imports: Sequence[ImportInfo], source_text: str
) -> MockSet:
    """Build the mocks ``strategy`` prescribes for ``imports``."""
    if strategy is MockStrategy.STATE_HOOKS:
        return _state_hook_mocks(imports, source_text)
    if strategy is MockStrategy.COMPONENT:
        return _component_mocks(imports)
    return _other_mocks(imports)


def _state_hook_mocks(imports: Sequence[ImportInfo], source_text: str) -> MockSet:
    mocks = MockSet()
    atoms: List[_AtomUsage] = []
    hook_entries: List[str] = []

    for info in imports:
        if info.module_name == STATE_MODULE:
            for name in info.named_imports:
                if not is_state_hook(name):
                    continue
                mock = mock_name(name)
                if mocks.declare(mock, _atom_dispatcher(mock, name)):
                    hook_entries.append(f"{name}: {mock}")
            continue
        if _is_framework_module(info.module_name):
            continue

        atom_entries: List[str] = []
        plain_entries: List[str] = []
        for name in info.named_imports:
            if is_atom(name):
                usage = _AtomUsage(
                    name=name,
                    is_function=f"{name}(" in source_text,
                    in_use_atom=f"useAtom({name}" in source_text,
                    in_use_atom_value=f"useAtomValue({name}" in source_text,
                )
                atoms.append(usage)
                if usage.is_function:
                    atom_entries.append(f'{name}: () => "{name}"')
                else:
                    atom_entries.append(f'{name}: "{name}"')
            else:
                mock = mock_name(name)
                mocks.declare(mock, f"const {mock} = vi.fn();")
                plain_entries.append(f"{name}: {mock}")
        if atom_entries or plain_entries:
            mocks.registrations.append(_registration(info.module_name, atom_entries + plain_entries))

    for atom in atoms:
        base = atom.name[: -len(ATOM_SUFFIX)]
        value_mock = f"{base}{MOCK_SUFFIX}"
        if atom.in_use_atom:
            setter_mock = f"set{base[:1].upper()}{base[1:]}{MOCK_SUFFIX}"
            mocks.declare(
                value_mock,
                f'const {value_mock} = {{ id: "{atom.name.lower()}_id", value: 42 }};',
            )
            mocks.declare(setter_mock, f"const {setter_mock} = vi.fn();")
        if atom.in_use_atom_value:
            mocks.declare(value_mock, f"const {value_mock} = -3;")

    if hook_entries:
        mocks.registrations.append(
            CodeBlock(
                f'vi.mock(import("{STATE_MODULE}"), async (importOriginal) => {{',
                [
                    "const mod = await importOriginal();",
                    CodeBlock("return {", comma_separated(["...mod", *hook_entries]), closer="};"),
                ],
            )
        )
    return mocks


def _component_mocks(imports: Sequence[ImportInfo]) -> MockSet:
    mocks = MockSet()
    for info in _relative_imports(imports):
        if STATE_MODULE in info.module_name:
            continue
        component_entries: List[str] = []
        hook_entries: List[str] = []
        plain_entries: List[str] = []

        for name in info.named_imports:
            mock = mock_name(name)
            if is_component_import(name, info.module_name):
                mocks.declare(mock, _element_mock(mock, name))
                component_entries.append(f"{name}: {mock}")
            elif is_hook_import(name):
                return_value = f"{name}ReturnValue{MOCK_SUFFIX}"
                mocks.declare(return_value, f'const {return_value} = {{ id: "test", value: 42 }};')
                mocks.declare(mock, f"const {mock} = vi.fn().mockReturnValue({return_value});")
                hook_entries.append(f"{name}: {mock}")
            else:
                mocks.declare(mock, f"const {mock} = vi.fn();")
                plain_entries.append(f"{name}: {mock}")

        entries = component_entries + hook_entries + plain_entries
        if info.default_import:
            mock = mock_name(info.default_import)
            if is_component_import(info.default_import, info.module_name):
                mocks.declare(mock, _element_mock(mock, info.default_import))
            else:
                mocks.declare(mock, f"const {mock} = vi.fn();")
            entries.append(f"default: {mock}")

        if entries:
            mocks.registrations.append(_registration(info.module_name, entries))
    return mocks


def _other_mocks(imports: Sequence[ImportInfo]) -> MockSet:
    mocks = MockSet()
    for info in _relative_imports(imports):
        entries: List[str] = []
        for name in info.named_imports:
            mock = mock_name(name)
            mocks.declare(mock, f"const {mock} = vi.fn();")
            entries.append(f"{name}: {mock}")
        if info.default_import:
            mock = mock_name(info.default_import)
            mocks.declare(mock, f"const {mock} = vi.fn();")
            entries.append(f"default: {mock}")
        if entries:
            mocks.registrations.append(_registration(info.module_name, entries))
    return mocks


def _relative_imports(imports: Iterable[ImportInfo]) -> Iterable[ImportInfo]:
    return (info for info in imports if info.module_name.startswith("."))


def _is_framework_module(module_name: str) -> bool:
    return module_name in (STATE_MODULE, UI_MODULE) or module_name.startswith(
        (f"{STATE_MODULE}/", f"{UI_MODULE}/")
    )


def _registration(module_name: str, entries: Sequence[str]) -> CodeBlock:
    return CodeBlock(f'vi.mock("{module_name}", () => ({{', comma_separated(entries), closer="}));")


def _atom_dispatcher(mock: str, hook: str) -> CodeBlock:
    return CodeBlock(
        f"const {mock} = (atom: string) => {{",
        [
            CodeBlock(
                "switch (atom) {",
                [
                    f"// Add cases based on atoms used in {hook}",
                    'default: throw new Error("Invalid atom");',
                ],
                closer="}",
            )
        ],
        closer="};",
    )


def _element_mock(mock: str, name: str) -> str:
    return f'const {mock} = <div data-testid="{name.lower()}"></div>;'


__all__ = [
    "MockSet",
    "MockStrategy",
    "generate_mocks",
    "is_atom",
    "is_component_import",
    "is_hook_import",
    "is_state_hook",
    "mock_name",
    "select_strategy",
]
