"""pytest configuration and fixtures for onvif_interfaces tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from onvif_interfaces import InterfaceGenerator, TypeRegistry
from tests.fixture_loader import SCHEMA_TEMPLATE, SPECS_DIR


@pytest.fixture
def generator() -> InterfaceGenerator:
    """Provide an InterfaceGenerator instance."""
    return InterfaceGenerator()


@pytest.fixture
def registry() -> TypeRegistry:
    """Provide an empty TypeRegistry."""
    return TypeRegistry()


@pytest.fixture
def specs_dir(tmp_path: Path) -> Path:
    """Copy the fixture specification tree to a temporary directory."""
    target = tmp_path / "specs"
    shutil.copytree(SPECS_DIR, target)
    return target


@pytest.fixture
def broken_specs_dir(tmp_path: Path) -> Path:
    """Create a specification tree with an extension and its own sequence."""
    target = tmp_path / "broken" / "ver10" / "schema"
    target.mkdir(parents=True)
    body = """
    <xs:complexType name="Broken">
        <xs:sequence>
            <xs:element name="Own" type="xs:int"/>
        </xs:sequence>
        <xs:complexContent>
            <xs:extension base="tt:Base">
                <xs:sequence>
                    <xs:element name="Inherited" type="xs:int"/>
                </xs:sequence>
            </xs:extension>
        </xs:complexContent>
    </xs:complexType>
    """
    (target / "broken.xsd").write_text(SCHEMA_TEMPLATE.format(body=body), encoding="utf-8")
    return tmp_path / "broken"
