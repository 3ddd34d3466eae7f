"""Tests for mock strategy selection and mock generation."""

from __future__ import annotations

import pytest

from virejo.generator.lines import render
from virejo.generator.mocks import (
    MockSet,
    MockStrategy,
    generate_mocks,
    is_atom,
    is_component_import,
    is_hook_import,
    select_strategy,
)
from virejo.models import ImportInfo


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("useCounter.ts", MockStrategy.STATE_HOOKS),
        ("src/hooks/useCounter.tsx", MockStrategy.STATE_HOOKS),
        ("Button.tsx", MockStrategy.COMPONENT),
        ("C:\\app\\Button.tsx", MockStrategy.COMPONENT),
        ("Button.ts", MockStrategy.OTHER),
        ("button.tsx", MockStrategy.OTHER),
        ("user.ts", MockStrategy.OTHER),
        ("utils.ts", MockStrategy.OTHER),
    ],
)
def test_select_strategy(file_name: str, expected: MockStrategy) -> None:
    assert select_strategy(file_name) is expected


def test_name_predicates() -> None:
    assert is_atom("countAtom") is True
    assert is_atom("useAtom") is False
    assert is_atom("count") is False
    assert is_component_import("Header", "./Header") is True
    assert is_component_import("Provider", "jotai/react") is False
    assert is_hook_import("useTheme") is True
    assert is_hook_import("user") is False


def test_mock_set_declares_each_name_once() -> None:
    mocks = MockSet()

    assert mocks.declare("aMock", "const aMock = vi.fn();") is True
    assert mocks.declare("aMock", "const aMock = -3;") is False
    assert mocks.mock_names == ["aMock"]
    assert mocks.hoisted_declarations == ["const aMock = vi.fn();"]
    assert not mocks.is_empty


def test_component_strategy_mocks_relative_imports() -> None:
    imports = (
        ImportInfo("react", named_imports=("useState",), default_import="React"),
        ImportInfo("./Header", named_imports=("Header", "useTheme", "format"), default_import="Logo"),
        ImportInfo("../state/atoms", named_imports=("Panel",)),
        ImportInfo("./jotaiStore", named_imports=("store",)),
    )

    mocks = generate_mocks(MockStrategy.COMPONENT, imports, "")

    assert mocks.mock_names == [
        "HeaderMock",
        "useThemeReturnValueMock",
        "useThemeMock",
        "formatMock",
        "LogoMock",
        "PanelMock",
    ]
    assert mocks.hoisted_declarations[:4] == [
        'const HeaderMock = <div data-testid="header"></div>;',
        'const useThemeReturnValueMock = { id: "test", value: 42 };',
        "const useThemeMock = vi.fn().mockReturnValue(useThemeReturnValueMock);",
        "const formatMock = vi.fn();",
    ]
    assert len(mocks.registrations) == 2
    assert render(mocks.registrations[:1], indent="    ") == "\n".join(
        [
            'vi.mock("./Header", () => ({',
            "    Header: HeaderMock,",
            "    useTheme: useThemeMock,",
            "    format: formatMock,",
            "    default: LogoMock",
            "}));",
        ]
    )


def test_component_strategy_declares_plain_default_import() -> None:
    imports = (ImportInfo("./api", default_import="client"),)

    mocks = generate_mocks(MockStrategy.COMPONENT, imports, "")

    assert mocks.mock_names == ["clientMock"]
    assert mocks.hoisted_declarations == ["const clientMock = vi.fn();"]


def test_state_hook_strategy() -> None:
    source = """
import { useAtom, useAtomValue } from 'jotai';
import { countAtom, limitAtom, increment } from './atoms';

export const useCounter = () => {
  const [count, setCount] = useAtom(countAtom);
  const limit = useAtomValue(limitAtom);
  return { count, setCount, limit, increment };
};
"""
    imports = (
        ImportInfo("jotai", named_imports=("useAtom", "useAtomValue")),
        ImportInfo("./atoms", named_imports=("countAtom", "limitAtom", "increment")),
    )

    mocks = generate_mocks(MockStrategy.STATE_HOOKS, imports, source)

    assert mocks.mock_names == [
        "useAtomMock",
        "useAtomValueMock",
        "incrementMock",
        "countMock",
        "setCountMock",
        "limitMock",
    ]
    declarations = render(mocks.hoisted_declarations, indent="    ")
    assert "const useAtomMock = (atom: string) => {" in declarations
    assert "    switch (atom) {" in declarations
    assert '        default: throw new Error("Invalid atom");' in declarations
    assert 'const countMock = { id: "countatom_id", value: 42 };' in declarations
    assert "const setCountMock = vi.fn();" in declarations
    assert "const limitMock = -3;" in declarations

    atoms_mock, jotai_mock = (render([block], indent="    ") for block in mocks.registrations)
    assert atoms_mock == "\n".join(
        [
            'vi.mock("./atoms", () => ({',
            '    countAtom: "countAtom",',
            '    limitAtom: "limitAtom",',
            "    increment: incrementMock",
            "}));",
        ]
    )
    assert jotai_mock == "\n".join(
        [
            'vi.mock(import("jotai"), async (importOriginal) => {',
            "    const mod = await importOriginal();",
            "    return {",
            "        ...mod,",
            "        useAtom: useAtomMock,",
            "        useAtomValue: useAtomValueMock",
            "    };",
            "});",
        ]
    )


def test_state_hook_strategy_mocks_atom_families_as_functions() -> None:
    source = "const [item] = useAtom(itemAtom(id));"
    imports = (ImportInfo("./atoms", named_imports=("itemAtom",)),)

    mocks = generate_mocks(MockStrategy.STATE_HOOKS, imports, source)

    assert render(mocks.registrations, indent="    ").splitlines()[1] == '    itemAtom: () => "itemAtom"'
    assert mocks.mock_names == ["itemMock", "setItemMock"]


def test_state_hook_strategy_skips_framework_modules() -> None:
    imports = (
        ImportInfo("react", named_imports=("useMemo",)),
        ImportInfo("jotai/utils", named_imports=("atomWithStorage",)),
    )

    assert generate_mocks(MockStrategy.STATE_HOOKS, imports, "").is_empty


def test_other_strategy_only_mocks_relative_modules() -> None:
    imports = (
        ImportInfo("lodash", named_imports=("debounce",)),
        ImportInfo("./client", named_imports=("request",), default_import="Client"),
    )

    mocks = generate_mocks(MockStrategy.OTHER, imports, "")

    assert mocks.mock_names == ["requestMock", "ClientMock"]
    assert len(mocks.registrations) == 1
