"""Tests for the two-pass generation pipeline."""

from __future__ import annotations

from pathlib import Path

import pytest

from onvif_interfaces import InterfaceGenerator, SchemaContractError
from onvif_interfaces.errors import DiagnosticKind
from onvif_interfaces.generator import discover_documents
from onvif_interfaces.primitives import BASIC_TYPES
from onvif_interfaces.registry import TypeRegistry
from tests.fixture_loader import build_document

COMMON_TS = """\
/** Status of a PTZ move. */
export type MoveStatus = 'Idle' | 'Active';

/**
 * Unique identifier for a physical or logical resource.
 * Tokens should be assigned such that they are unique within a device.
 */
export type ReferenceToken = string;

export interface Vector {
  x?: number;
  y?: number;
}
"""

VIDEO_SOURCE_TS = """\
/** Representation of a physical video input. */
export interface VideoSource extends DeviceEntity {
  /** Frame rate in frames per second. */
  framerate: number;
  resolution: VideoResolution;
  imaging?: ImagingSettings;
  extension?: VideoSourceExtension;
}"""

SERVICE_TS = """\
export interface Service {
  /** Namespace of the service being described. */
  namespace: AnyURI;
  XAddr: AnyURI;
  capabilities?: Capabilities;
}"""


class TestDiscoverDocuments:
    """Tests for document discovery."""

    def test_schemas_before_service_descriptions(self, specs_dir: Path) -> None:
        paths = discover_documents(specs_dir)
        assert [p.name for p in paths] == ["common.xsd", "onvif.xsd", "devicemgmt.wsdl", "ptz.wsdl"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert discover_documents(tmp_path) == []


class TestGenerate:
    """Tests for InterfaceGenerator.generate."""

    def test_module_order(self, generator: InterfaceGenerator, specs_dir: Path) -> None:
        result = generator.generate(specs_dir)
        assert [m.module_name for m in result.modules] == ["common", "onvif", "devicemgmt", "ptz2"]
        assert result.basics.module_name == "basics"

    def test_basics_seed_the_registry(self, generator: InterfaceGenerator) -> None:
        registry = TypeRegistry()
        basics = generator.build_basics(registry)
        assert [d.name for d in basics.declarations] == list(BASIC_TYPES)
        assert all(registry.owner(name) == "basics" for name in BASIC_TYPES)

    def test_cross_module_imports(self, generator: InterfaceGenerator, specs_dir: Path) -> None:
        result = generator.generate(specs_dir)
        modules = {m.module_name: m for m in result.modules}

        assert modules["common"].imports == []
        assert [(i.module, i.names) for i in modules["onvif"].imports] == [
            ("common", ["ReferenceToken", "Vector"]),
            ("basics", ["AnyURI"]),
        ]
        assert [(i.module, i.names) for i in modules["devicemgmt"].imports] == [
            ("basics", ["AnyURI"]),
            ("onvif", ["VideoSource"]),
        ]
        assert [(i.module, i.names) for i in modules["ptz2"].imports] == [
            ("common", ["ReferenceToken", "MoveStatus", "Vector"]),
        ]

    def test_no_module_imports_its_own_declarations(
        self, generator: InterfaceGenerator, specs_dir: Path
    ) -> None:
        result = generator.generate(specs_dir)
        for module in result.modules:
            imported = {name for i in module.imports for name in i.names}
            assert not imported & module.declared_types

    def test_diagnostics(self, generator: InterfaceGenerator, specs_dir: Path) -> None:
        result = generator.generate(specs_dir)
        assert [(d.kind, d.module, d.type_name) for d in result.diagnostics] == [
            (DiagnosticKind.SELF_EXTENSION, "onvif", "SelfExtending"),
            (DiagnosticKind.UNRESOLVED_TYPE, "onvif", "ImagingSettings"),
        ]
        assert result.warning_count == 2

    def test_on_document_callback(self, specs_dir: Path) -> None:
        seen: list[Path] = []
        InterfaceGenerator(on_document=seen.append).generate(specs_dir)
        assert [p.name for p in seen] == ["common.xsd", "onvif.xsd", "devicemgmt.wsdl", "ptz.wsdl"]

    def test_contract_violation_aborts(
        self, generator: InterfaceGenerator, broken_specs_dir: Path
    ) -> None:
        with pytest.raises(SchemaContractError) as excinfo:
            generator.generate(broken_specs_dir)
        assert excinfo.value.source.endswith("broken.xsd")


class TestCompileDocuments:
    """Tests for InterfaceGenerator.compile_documents."""

    def test_first_document_owns_duplicates(self, generator: InterfaceGenerator) -> None:
        first = build_document(
            '<xs:complexType name="Vector"><xs:attribute name="x" type="xs:float"/></xs:complexType>',
            "common.xsd",
        )
        second = build_document(
            """
            <xs:complexType name="Vector"><xs:attribute name="y" type="xs:float"/></xs:complexType>
            <xs:element name="Move">
                <xs:complexType>
                    <xs:sequence><xs:element name="Translation" type="tt:Vector"/></xs:sequence>
                </xs:complexType>
            </xs:element>
            """,
            "ptz.xsd",
        )
        result = generator.compile_documents([first, second])
        common, ptz = result.modules

        assert "Vector" in common.declared_types
        assert "Vector" not in ptz.declared_types
        assert [(i.module, i.names) for i in ptz.imports] == [("common", ["Vector"])]
        assert [d.kind for d in result.diagnostics] == [DiagnosticKind.DUPLICATE_DECLARATION]

    def test_schema_time_type_is_not_a_basic(self, generator: InterfaceGenerator) -> None:
        """Test a schema type named like a time primitive keeps its own module."""
        document = build_document(
            """
            <xs:complexType name="Time">
                <xs:sequence>
                    <xs:element name="Hour" type="xs:int"/>
                    <xs:element name="Minute" type="xs:int"/>
                    <xs:element name="Second" type="xs:int"/>
                </xs:sequence>
            </xs:complexType>
            <xs:complexType name="DateTime">
                <xs:sequence>
                    <xs:element name="Time" type="tt:Time"/>
                    <xs:element name="Started" type="xs:time"/>
                </xs:sequence>
            </xs:complexType>
            """
        )
        result = generator.compile_documents([document])
        (onvif,) = result.modules

        assert onvif.declared_types == {"Time", "DateTime"}
        assert onvif.imports == []
        assert result.diagnostics == []
        date_time = onvif.get_declaration("DateTime")
        assert date_time.get_property("time").type_name == "Time"
        assert date_time.get_property("started").type_name == "string"


class TestRun:
    """Tests for InterfaceGenerator.run."""

    def test_writes_one_file_per_document(
        self, generator: InterfaceGenerator, specs_dir: Path, tmp_path: Path
    ) -> None:
        output = tmp_path / "out" / "interfaces"
        result = generator.run(specs_dir, output)

        assert output.is_dir()
        assert [p.name for p in result.written] == [
            "common.ts",
            "onvif.ts",
            "devicemgmt.ts",
            "ptz2.ts",
            "basics.ts",
        ]
        assert all(p.exists() for p in result.written)

    def test_rendered_modules(
        self, generator: InterfaceGenerator, specs_dir: Path, tmp_path: Path
    ) -> None:
        generator.run(specs_dir, tmp_path)

        assert (tmp_path / "common.ts").read_text(encoding="utf-8") == COMMON_TS

        onvif = (tmp_path / "onvif.ts").read_text(encoding="utf-8")
        assert onvif.startswith(
            "import { ReferenceToken, Vector } from './common';\n"
            "import { AnyURI } from './basics';\n\n"
        )
        assert VIDEO_SOURCE_TS in onvif
        assert "export type IntList = number[];" in onvif
        assert "export type ReferenceTokenList = ReferenceToken[];" in onvif
        assert "export interface VideoSourceConfiguration extends VideoSource {}" in onvif
        assert "export interface OnvifObject {\n  objectId?: number;\n  appearance?: Appearance;\n}" in onvif
        assert "  utcTime: Date;\n  contentType?: any;\n  object?: OnvifObject[];\n" in onvif
        assert "/** Optional extension point. */" in onvif
        assert "export type Token = string;" in onvif
        assert "SelfExtending" not in onvif

        devicemgmt = (tmp_path / "devicemgmt.ts").read_text(encoding="utf-8")
        assert SERVICE_TS in devicemgmt
        assert "export interface Capabilities {\n  [key: string]: any;\n}" in devicemgmt
        assert "  service?: Service[];\n" in devicemgmt
        assert "export interface GetVideoSources {}" in devicemgmt
        assert "import { VideoSource } from './onvif';" in devicemgmt

        basics = (tmp_path / "basics.ts").read_text(encoding="utf-8")
        assert "export type AnyURI = string;" in basics
        assert "import" not in basics
