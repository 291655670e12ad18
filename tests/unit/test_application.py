import json
import shutil
from pathlib import Path

import pytest

import main as cli
from application import import_debt_model, import_debt_model_file, report_payload, serialize_report
from application.constants import EXIT_IMPORT_ERRORS, EXIT_MALFORMED_DOCUMENT, EXIT_OK
from domain.errors import MalformedDocumentError
from infrastructure.config import ImporterConfig
from infrastructure.observability import get_log_context
from infrastructure.rules import InMemoryRuleCatalog

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"
RULES_YAML = "rules:\n  checkstyle: [Regexp, LineLength]\n"


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated working directory with a rule catalog and no config/env files."""
    monkeypatch.chdir(tmp_path)
    for suffix in ("HOURS_IN_DAY", "DUPLICATE_KEYS", "RULES_FILE", "LOG_FILE"):
        monkeypatch.delenv(f"DEBTMODEL_{suffix}", raising=False)
    # keep pytest's own log capture in place
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)
    (tmp_path / "rules.yaml").write_text(RULES_YAML, encoding="utf-8")
    return tmp_path


def test_import_debt_model_from_text() -> None:
    xml = (FIXTURES / "linear.xml").read_text(encoding="utf-8")
    model, report = import_debt_model(xml, InMemoryRuleCatalog.of("checkstyle:Regexp"))

    assert not report.has_messages()
    assert len(model.requirements()) == 1
    assert get_log_context()["stage"] == "-"


def test_text_import_does_not_inherit_previous_document() -> None:
    catalog = InMemoryRuleCatalog.of("checkstyle:Regexp")
    import_debt_model_file(FIXTURES / "linear.xml", catalog)
    assert get_log_context()["document_id"] == str(FIXTURES / "linear.xml")

    xml = (FIXTURES / "rule_not_found.xml").read_text(encoding="utf-8")
    model, report = import_debt_model(xml, catalog)

    assert report_payload(report, model)["document_id"] == "-"
    assert get_log_context()["document_tag"] == "-"


def test_text_import_with_document_id() -> None:
    xml = (FIXTURES / "linear.xml").read_text(encoding="utf-8")
    model, report = import_debt_model(xml, InMemoryRuleCatalog.of("checkstyle:Regexp"), document_id="inline-model")

    assert report_payload(report, model)["document_id"] == "inline-model"


def test_import_uses_configured_day_length() -> None:
    xml = (
        "<characteristics><characteristic key='A' name='A'>"
        "<requirement rule-repository='checkstyle' rule-key='Regexp' function='linear' factor-value='1' factor-unit='d'/>"
        "</characteristic></characteristics>"
    )
    model, _ = import_debt_model(xml, InMemoryRuleCatalog.of("checkstyle:Regexp"), ImporterConfig(hours_in_day=6))

    assert model.requirements()[0].factor.to_minutes() == 360


def test_import_malformed_document_raises() -> None:
    with pytest.raises(MalformedDocumentError):
        import_debt_model("<characteristics>", InMemoryRuleCatalog())


def test_serialize_report(tmp_path: Path) -> None:
    catalog = InMemoryRuleCatalog.of("checkstyle:Regexp", "checkstyle:LineLength")
    model, report = import_debt_model_file(FIXTURES / "invalid_value.xml", catalog)

    path = serialize_report(report, model, tmp_path / "out" / "report.json")
    payload = json.loads(path.read_text(encoding="utf-8"))

    assert payload == report_payload(report, model)
    assert payload["document_id"] == str(FIXTURES / "invalid_value.xml")
    assert payload["roots"] == ["EFFICIENCY"]
    assert payload["characteristics"] == 2
    assert payload["requirements"] == 1
    assert payload["errors"] == ["Cannot import value 'abc' for field factor - Expected a numeric value instead"]
    assert payload["warnings"] == []


def test_cli_success_writes_report(workdir: Path) -> None:
    report_path = workdir / "report.json"
    code = cli.main([str(FIXTURES / "linear.xml"), "--rules", "rules.yaml", "--report", str(report_path)])

    assert code == EXIT_OK
    payload = json.loads(report_path.read_text(encoding="utf-8"))
    assert payload["roots"] == ["USABILITY", "EFFICIENCY"]
    assert payload["errors"] == []


def test_cli_warnings_only_is_success(workdir: Path) -> None:
    assert cli.main([str(FIXTURES / "rule_not_found.xml"), "--rules", "rules.yaml"]) == EXIT_OK


def test_cli_import_errors(workdir: Path) -> None:
    assert cli.main([str(FIXTURES / "invalid_value.xml"), "--rules", "rules.yaml"]) == EXIT_IMPORT_ERRORS


def test_cli_malformed_document(workdir: Path) -> None:
    document = workdir / "broken.xml"
    document.write_text("<characteristics><characteristic>", encoding="utf-8")

    assert cli.main([str(document), "--rules", "rules.yaml"]) == EXIT_MALFORMED_DOCUMENT


def test_cli_reads_rules_file_from_config(workdir: Path) -> None:
    shutil.copy(FIXTURES / "linear.xml", workdir / "model.xml")
    (workdir / "importer.yaml").write_text("rules_file: rules.yaml\n", encoding="utf-8")

    assert cli.main(["model.xml", "--config", "importer.yaml"]) == EXIT_OK


def test_cli_missing_document(workdir: Path) -> None:
    with pytest.raises(FileNotFoundError):
        cli.main(["missing.xml", "--rules", "rules.yaml"])
