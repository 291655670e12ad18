from decimal import Decimal
from pathlib import Path

import pytest

from domain.characteristics import DebtModel
from domain.document import DocumentNode
from domain.errors import MalformedDocumentError
from domain.importer import DuplicateKeyPolicy, ModelImporter
from domain.remediation import RemediationFunction
from domain.report import ValidationReport
from domain.rules import Rule, RuleCatalog, RuleReference
from domain.work_unit import TimeUnit, WorkUnit
from infrastructure.document import parse_document
from infrastructure.rules import InMemoryRuleCatalog

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def _catalog() -> InMemoryRuleCatalog:
    return InMemoryRuleCatalog([Rule(repository="checkstyle", key="Regexp", name="Regular expression")])


def _import_fixture(
    name: str,
    catalog: RuleCatalog | None = None,
    **importer_kwargs,
) -> tuple[DebtModel, ValidationReport]:
    root = parse_document((FIXTURES / name).read_bytes())
    return ModelImporter(**importer_kwargs).import_document(root, catalog or _catalog())


def _import_text(xml: str, catalog: RuleCatalog | None = None, **importer_kwargs) -> tuple[DebtModel, ValidationReport]:
    return ModelImporter(**importer_kwargs).import_document(parse_document(xml), catalog or _catalog())


def _requirement(
    *,
    function: str = "linear",
    factor: str = "3.2",
    unit: str = "h",
    repository: str = "checkstyle",
    key: str = "Regexp",
    extra: str = "",
) -> str:
    return (
        "<requirement>"
        f"<rule-repository>{repository}</rule-repository><rule-key>{key}</rule-key>"
        f"<function>{function}</function>"
        f"<factor-value>{factor}</factor-value><factor-unit>{unit}</factor-unit>"
        f"{extra}"
        "</requirement>"
    )


def _document(*requirements: str) -> str:
    return (
        "<characteristics><characteristic><key>EFFICIENCY</key><name>Efficiency</name>"
        + "".join(requirements)
        + "</characteristic></characteristics>"
    )


def _check_correctly_imported(model: DebtModel, report: ValidationReport, offset: WorkUnit | None = None) -> None:
    assert report.errors == []

    # characteristics
    assert len(model.roots) == 2
    efficiency = model.characteristic_by_key("EFFICIENCY")
    assert efficiency is not None
    assert efficiency.name == "Efficiency"

    # sub-characteristics
    assert len(efficiency.children) == 1
    memory_efficiency = model.characteristic_by_key("MEMORY_EFFICIENCY")
    assert memory_efficiency.name == "Memory use"
    assert model.parent_of(memory_efficiency) is efficiency

    # requirement
    assert len(memory_efficiency.requirements) == 1
    requirement = memory_efficiency.requirements[0]
    assert requirement.rule.repository == "checkstyle"
    assert requirement.rule.key == "Regexp"
    assert requirement.factor == WorkUnit(Decimal("3.2"), TimeUnit.HOURS)
    assert requirement.offset == (offset if offset is not None else WorkUnit.create())


def test_import_characteristics() -> None:
    model, report = _import_fixture("import_characteristics.xml")

    assert not report.has_messages()
    assert [root.key for root in model.roots] == ["PORTABILITY", "MAINTAINABILITY"]

    portability = model.characteristic_by_key("PORTABILITY")
    assert portability.order == 1
    assert portability.is_root
    assert [child.key for child in portability.children] == [
        "COMPILER_RELATED_PORTABILITY",
        "HARDWARE_RELATED_PORTABILITY",
    ]
    assert model.parent_of(model.characteristic_by_key("COMPILER_RELATED_PORTABILITY")).key == "PORTABILITY"
    assert model.parent_of(model.characteristic_by_key("HARDWARE_RELATED_PORTABILITY")).key == "PORTABILITY"

    maintainability = model.characteristic_by_key("MAINTAINABILITY")
    assert maintainability.order == 2
    assert [child.key for child in maintainability.children] == ["READABILITY"]
    readability = model.characteristic_by_key("READABILITY")
    assert readability.parent_key == "MAINTAINABILITY"
    assert readability.order is None


def test_root_order_follows_document_position() -> None:
    xml = (
        "<characteristics>"
        "<characteristic key='ZULU' name='Zulu'/>"
        "<characteristic key='ALPHA' name='Alpha'/>"
        "<characteristic key='MIKE' name='Mike'/>"
        "</characteristics>"
    )
    model, _ = _import_text(xml)
    assert [(root.key, root.order) for root in model.roots] == [("ZULU", 1), ("ALPHA", 2), ("MIKE", 3)]


def test_index_covers_every_reachable_characteristic() -> None:
    model, _ = _import_fixture("import_characteristics.xml")
    reachable = {characteristic.key for root in model.roots for characteristic in root.walk()}
    assert model.keys() == reachable
    assert len(reachable) == 5


def test_import_with_linear_function() -> None:
    model, report = _import_fixture("linear.xml")

    _check_correctly_imported(model, report)
    requirement = model.characteristic_by_key("MEMORY_EFFICIENCY").requirements[0]
    assert requirement.function is RemediationFunction.LINEAR
    assert report.warnings == []


def test_import_with_linear_with_offset_function() -> None:
    model, report = _import_fixture("linear_with_offset.xml")

    _check_correctly_imported(model, report, WorkUnit(1, TimeUnit.HOURS))
    requirement = model.characteristic_by_key("MEMORY_EFFICIENCY").requirements[0]
    assert requirement.function is RemediationFunction.LINEAR_WITH_OFFSET


def test_linear_with_offset_without_offset_gets_zero_offset() -> None:
    model, report = _import_text(_document(_requirement(function="linear_with_offset")))

    assert not report.has_messages()
    requirement = model.characteristic_by_key("EFFICIENCY").requirements[0]
    assert requirement.function is RemediationFunction.LINEAR_WITH_OFFSET
    assert requirement.offset.is_zero()


def test_deprecated_linear_with_threshold_is_converted_to_linear() -> None:
    model, report = _import_fixture("deprecated_linear_with_threshold.xml")

    _check_correctly_imported(model, report, WorkUnit(0, TimeUnit.HOURS))
    requirement = model.characteristic_by_key("MEMORY_EFFICIENCY").requirements[0]
    assert requirement.function is RemediationFunction.LINEAR
    assert len(report.warnings) == 1
    assert "checkstyle:Regexp" in report.warnings[0]


def test_deprecated_constant_per_file_is_ignored() -> None:
    model, report = _import_fixture("deprecated_constant_per_file.xml")

    assert len(report.warnings) == 1
    assert "checkstyle:Regexp" in report.warnings[0]
    assert report.errors == []

    assert len(model.roots) == 1
    efficiency = model.characteristic_by_key("EFFICIENCY")
    assert efficiency.requirements == ()
    assert model.requirements() == []


def test_badly_formatted_document_is_imported() -> None:
    model, report = _import_fixture("badly_formatted.xml")

    _check_correctly_imported(model, report)
    assert report.warnings == []


def test_warning_when_rule_not_found() -> None:
    model, report = _import_fixture("rule_not_found.xml")

    assert report.warnings == ["Rule not found: [repository=findbugs, key=Foo]"]
    assert report.errors == []

    assert len(model.roots) == 1
    assert model.characteristic_by_key("EFFICIENCY").requirements == ()


def test_rule_is_resolved_before_function_handling() -> None:
    model, report = _import_text(_document(_requirement(function="exponential", repository="findbugs", key="Foo")))

    assert report.warnings == ["Rule not found: [repository=findbugs, key=Foo]"]
    assert report.errors == []
    assert model.requirements() == []


def test_error_on_non_numeric_factor() -> None:
    catalog = InMemoryRuleCatalog.of("checkstyle:Regexp", "checkstyle:LineLength")
    model, report = _import_fixture("invalid_value.xml", catalog)

    assert report.errors == ["Cannot import value 'abc' for field factor - Expected a numeric value instead"]
    assert report.warnings == []

    # the sibling requirement is still imported
    requirements = model.characteristic_by_key("MEMORY_EFFICIENCY").requirements
    assert [requirement.rule.key for requirement in requirements] == ["LineLength"]
    assert requirements[0].factor == WorkUnit(10, TimeUnit.MINUTES)


def test_error_on_non_numeric_offset() -> None:
    xml = _document(
        _requirement(
            function="linear_with_offset",
            extra="<offset-value>1,5</offset-value><offset-unit>h</offset-unit>",
        )
    )
    model, report = _import_text(xml)

    assert report.errors == ["Cannot import value '1,5' for field offset - Expected a numeric value instead"]
    assert model.requirements() == []


@pytest.mark.parametrize("raw", ["1_000", "٣"])
def test_error_on_non_plain_numeric_factor(raw: str) -> None:
    model, report = _import_text(_document(_requirement(factor=raw)))

    assert report.errors == [f"Cannot import value '{raw}' for field factor - Expected a numeric value instead"]
    assert model.requirements() == []


def test_error_on_unknown_function() -> None:
    model, report = _import_text(_document(_requirement(function="exponential")))

    assert report.errors == ["Function 'exponential' is unknown on rule 'checkstyle:Regexp'"]
    assert model.characteristic_by_key("EFFICIENCY").requirements == ()


def test_error_on_unknown_unit() -> None:
    model, report = _import_text(_document(_requirement(unit="weeks")))

    assert report.errors == ["Cannot import value 'weeks' for field factor-unit - Expected one of d, h, mn instead"]
    assert model.requirements() == []


def test_missing_unit_uses_default_unit() -> None:
    xml = _document(
        "<requirement rule-repository='checkstyle' rule-key='Regexp' function='linear' factor-value='2'/>"
    )
    model, report = _import_text(xml)

    assert not report.has_messages()
    assert model.requirements()[0].factor == WorkUnit(2, TimeUnit.HOURS)


def test_errors_on_missing_requirement_fields() -> None:
    xml = _document(
        "<requirement><rule-key>Regexp</rule-key><function>linear</function><factor-value>1</factor-value></requirement>",
        "<requirement><rule-repository>checkstyle</rule-repository><rule-key>Regexp</rule-key>"
        "<factor-value>1</factor-value></requirement>",
        "<requirement><rule-repository>checkstyle</rule-repository><rule-key>Regexp</rule-key>"
        "<function>linear</function></requirement>",
    )
    model, report = _import_text(xml)

    assert report.errors == [
        "Cannot import requirement in characteristic 'EFFICIENCY' - Missing field rule-repository",
        "Cannot import requirement on rule 'checkstyle:Regexp' - Missing field function",
        "Cannot import requirement on rule 'checkstyle:Regexp' - Missing field factor-value",
    ]
    assert model.requirements() == []


def test_repeated_problems_are_reported_each_time() -> None:
    xml = _document(
        _requirement(repository="findbugs", key="Foo"),
        _requirement(repository="findbugs", key="Foo"),
        _requirement(repository="pmd", key="Bar"),
    )
    _, report = _import_text(xml)

    assert report.warnings == [
        "Rule not found: [repository=findbugs, key=Foo]",
        "Rule not found: [repository=findbugs, key=Foo]",
        "Rule not found: [repository=pmd, key=Bar]",
    ]


def test_characteristic_without_key_is_dropped_with_its_subtree() -> None:
    xml = (
        "<characteristics>"
        "<characteristic><name>No key</name>"
        "<characteristic key='CHILD' name='Child'/>"
        "</characteristic>"
        "<characteristic key='SECOND' name='Second'><characteristic key='ORPHAN'/></characteristic>"
        "<characteristic key='THIRD' name='Third'/>"
        "</characteristics>"
    )
    model, report = _import_text(xml)

    assert report.errors == [
        "Cannot import characteristic - Missing field key",
        "Cannot import characteristic 'ORPHAN' - Missing field name",
    ]
    assert [(root.key, root.order) for root in model.roots] == [("SECOND", 1), ("THIRD", 2)]
    assert model.keys() == {"SECOND", "THIRD"}


def test_duplicate_key_warns_and_last_occurrence_wins_lookups() -> None:
    xml = (
        "<characteristics>"
        "<characteristic key='A' name='First'><characteristic key='DUP' name='Under A'/></characteristic>"
        "<characteristic key='B' name='Second'><characteristic key='DUP' name='Under B'/></characteristic>"
        "</characteristics>"
    )
    model, report = _import_text(xml)

    assert report.warnings == ["Duplicate characteristic key 'DUP' - the last occurrence is used for lookups"]
    assert model.characteristic_by_key("DUP").name == "Under B"
    # both nodes stay in the tree
    assert [child.name for root in model.roots for child in root.children] == ["Under A", "Under B"]


def test_duplicate_key_last_wins_silently() -> None:
    xml = "<characteristics><characteristic key='A' name='One'/><characteristic key='A' name='Two'/></characteristics>"
    model, report = _import_text(xml, duplicate_keys=DuplicateKeyPolicy.LAST_WINS)

    assert not report.has_messages()
    assert len(model.roots) == 2
    assert model.characteristic_by_key("A").name == "Two"


def test_duplicate_key_rejected() -> None:
    xml = (
        "<characteristics>"
        "<characteristic key='A' name='One'/>"
        "<characteristic key='A' name='Two'><characteristic key='C' name='Child'/></characteristic>"
        "<characteristic key='B' name='Three'/>"
        "</characteristics>"
    )
    model, report = _import_text(xml, duplicate_keys=DuplicateKeyPolicy.REJECT)

    assert report.errors == ["Cannot import characteristic 'A' - Duplicate key"]
    assert [(root.key, root.name, root.order) for root in model.roots] == [("A", "One", 1), ("B", "Three", 2)]
    assert model.keys() == {"A", "B"}


def test_day_length_comes_from_the_importer() -> None:
    model, _ = _import_text(_document(_requirement(factor="1", unit="d")), hours_in_day=10)

    factor = model.requirements()[0].factor
    assert factor == WorkUnit(10, TimeUnit.HOURS)
    assert factor.hours_in_day == 10


def test_legacy_sqale_document_is_imported() -> None:
    catalog = InMemoryRuleCatalog.of("checkstyle:Regexp", "checkstyle:LineLength")
    model, report = _import_fixture("legacy_sqale.xml", catalog)

    assert report.errors == []
    assert len(report.warnings) == 1
    assert "checkstyle:LineLength" in report.warnings[0]

    assert [(root.key, root.order) for root in model.roots] == [("USABILITY", 1), ("EFFICIENCY", 2)]
    requirement = model.requirement_for_rule(RuleReference(repository="checkstyle", key="Regexp"))
    assert requirement.function is RemediationFunction.LINEAR_WITH_OFFSET
    assert requirement.factor == WorkUnit(Decimal("3.2"), TimeUnit.HOURS)
    assert requirement.offset == WorkUnit(1, TimeUnit.DAYS)
    assert model.requirement_for_rule(RuleReference(repository="checkstyle", key="LineLength")) is None


def test_import_is_deterministic() -> None:
    catalog = InMemoryRuleCatalog.of("checkstyle:Regexp", "checkstyle:LineLength")
    first_model, first_report = _import_fixture("invalid_value.xml", catalog)
    second_model, second_report = _import_fixture("invalid_value.xml", catalog)

    assert first_model.model_dump() == second_model.model_dump()
    assert first_report.as_dict() == second_report.as_dict()


def test_reports_are_not_shared_between_imports() -> None:
    importer = ModelImporter()
    root = parse_document((FIXTURES / "rule_not_found.xml").read_bytes())

    _, first = importer.import_document(root, _catalog())
    _, second = importer.import_document(root, _catalog())

    assert first is not second
    assert len(first.warnings) == len(second.warnings) == 1


def test_empty_document_gives_empty_model() -> None:
    model, report = _import_text("<characteristics/>")

    assert model.is_empty()
    assert model.keys() == set()
    assert not report.has_messages()


def test_root_must_be_characteristics() -> None:
    with pytest.raises(MalformedDocumentError):
        ModelImporter().import_document(DocumentNode(tag="rules"), _catalog())


def test_invalid_day_length_is_rejected() -> None:
    with pytest.raises(ValueError):
        ModelImporter(hours_in_day=0)
