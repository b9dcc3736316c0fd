import json

import pandas as pd
import pytest

from seo_shell.app import main
from seo_shell.core.handlers.audit_handler import handle_audit
from seo_shell.core.managers.config_manager import ConfigManager
from seo_shell.core.utils.path_utils import PathUtils

PAGE = (
    '<html><head><title>t</title><meta name="keywords" content="k"/></head>'
    '<body><h1>x</h1><img src="a.png"/></body></html>'
)

MOCK_SETTINGS_CONTENT = {
    "debug": {"level": "WARNING"},
    "audit": {
        "default_rules": [0, 1, 2, 3, 4, 5, 6],
        "extra_rules": [
            {"tag": "link", "attr": "href"},
            {"tag": "div"}
        ]
    },
    "io": {"encoding": "utf-8"}
}


@pytest.fixture(autouse=True)
def settings(tmp_path, monkeypatch):
    """Elke test draait tegen een eigen, voorspelbare settings.json."""
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    monkeypatch.setattr(PathUtils, 'get_settings_file', lambda: settings_file)
    ConfigManager().reset()
    yield
    monkeypatch.undo()
    ConfigManager().reset()


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "index.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


def test_no_args_prints_help(capsys):
    assert handle_audit([]) == 0
    assert "usage: seo-audit" in capsys.readouterr().out


def test_rules_lists_catalog_with_configured_extra_rules(capsys):
    assert handle_audit(["rules"]) == 0
    out = capsys.readouterr().out
    assert "Rule Index : 0 => Check if <img> has attribute 'alt'." in out
    assert "Rule Index : 7 => Check if <link> has attribute 'href'." in out
    # De ongeldige {"tag": "div"} regel wordt overgeslagen
    assert "Rule Index : 8" not in out


def test_rules_with_added_rules(capsys):
    args = ["rules", "--add-count", "h2", "2", "--add-child", "head", "base", "--add-attr", "link", "href"]
    assert handle_audit(args) == 0
    out = capsys.readouterr().out
    assert "Rule Index : 8 => In <head>, check if there is '<base>'." in out
    assert "Rule Index : 9 => Check if there is more than 2 <h2> tag in this HTML." in out
    assert "not added (invalid or duplicate)" in out


def test_run_default_rules(page, capsys):
    assert handle_audit(["run", str(page)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "=== Results ==="
    assert lines[1] == "Total number of <img> tag : 1 ==> 0 of them with attribute : alt."
    assert "In <head>, there are 1 child tag <title>." in lines
    assert 'In <head>, there are 1 child tag <meta> with attribute-value : name="keywords".' in lines
    assert "In this HTML, there are 1 (more than or equal to 1) <h1>." in lines
    assert lines[-1] == "==============="


def test_run_is_default_subcommand(page, capsys):
    assert handle_audit([str(page), "--rules", "6,2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "=== Results ===",
        "In this HTML, there are 1 (more than or equal to 1) <h1>.",
        "In <head>, there are 1 child tag <title>.",
        "===============",
    ]


def test_run_with_added_rule(page, capsys):
    assert handle_audit([str(page), "--add-attr", "img", "src", "--rules", "8"]) == 0
    assert "Total number of <img> tag : 1 ==> 1 of them with attribute : src." in capsys.readouterr().out


def test_run_missing_file(tmp_path, capsys):
    assert handle_audit(["run", str(tmp_path / "missing.html")]) == 1
    assert "no such file" in capsys.readouterr().out


def test_run_index_out_of_range(page, capsys):
    assert handle_audit(["run", str(page), "--rules", "99"]) == 1
    assert "out of range" in capsys.readouterr().out


def test_run_invalid_indices(page, capsys):
    assert handle_audit(["run", str(page), "--rules", "a,b"]) == 1
    assert "Invalid rule indices" in capsys.readouterr().out


def test_run_output_and_export(page, tmp_path, capsys):
    second = tmp_path / "second.html"
    second.write_text("<p></p>", encoding="utf-8")
    output = tmp_path / "out" / "results.txt"
    export = tmp_path / "out" / "results.csv"

    code = handle_audit([
        "run", str(page), str(second), "--rules", "0,6",
        "--output", str(output), "--export", str(export)
    ])
    assert code == 0

    assert output.read_text(encoding="utf-8").splitlines() == [
        "Total number of <img> tag : 1 ==> 0 of them with attribute : alt.",
        "In this HTML, there are 1 (more than or equal to 1) <h1>.",
        "Total number of <img> tag : 0 ==> 0 of them with attribute : alt.",
        "In this HTML, there are 0 (less than 1) <h1>.",
    ]

    df = pd.read_csv(export)
    assert len(df) == 4
    assert df["rule_index"].tolist() == [0, 6, 0, 6]
    assert df["file"].tolist() == [str(page), str(page), str(second), str(second)]


def test_run_undecodable_file(tmp_path, capsys):
    """Een latin-1 bestand dat als utf-8 gelezen wordt geeft een nette fout."""
    path = tmp_path / "latin.html"
    path.write_bytes("<h1>café</h1>".encode("latin-1"))
    assert handle_audit(["run", str(path), "--rules", "6"]) == 1
    out = capsys.readouterr().out
    assert "is not valid utf-8" in out
    assert "--set io.encoding" in out


def test_run_with_encoding_override(tmp_path, capsys):
    path = tmp_path / "latin.html"
    path.write_bytes("<h1>café</h1>".encode("latin-1"))
    assert handle_audit(["run", str(path), "--rules", "6", "--set", "io.encoding=latin-1"]) == 0
    assert "In this HTML, there are 1 (more than or equal to 1) <h1>." in capsys.readouterr().out


def test_run_directory_is_not_a_source(tmp_path, capsys):
    assert handle_audit(["run", str(tmp_path)]) == 1
    assert "no such file" in capsys.readouterr().out


def test_run_invalid_default_rules_in_config(page, capsys):
    ConfigManager().set_nested("audit.default_rules", ["x"])
    assert handle_audit(["run", str(page)]) == 1
    assert "audit.default_rules must be a list of rule indices" in capsys.readouterr().out


def test_run_unknown_encoding_in_config(page, capsys):
    assert handle_audit(["run", str(page), "--set", "io.encoding=klingon-8"]) == 1
    assert "Unknown io.encoding" in capsys.readouterr().out


def test_run_with_default_rules_override(page, capsys):
    assert handle_audit(["run", str(page), "--set", "audit.default_rules=6"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "=== Results ===",
        "In this HTML, there are 1 (more than or equal to 1) <h1>.",
        "===============",
    ]


def test_run_rejects_malformed_override(page, capsys):
    assert handle_audit(["run", str(page), "--set", "audit.default_rules"]) == 1
    assert "Invalid config override" in capsys.readouterr().out


def test_run_unwritable_output(page, tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    assert handle_audit(["run", str(page), "--rules", "6", "--output", str(blocker / "out.txt")]) == 1
    assert "❌" in capsys.readouterr().out


def test_main_entrypoint(page, capsys, monkeypatch):
    monkeypatch.setattr("seo_shell.app.configure_logger", lambda *args, **kwargs: None)
    assert main(["run", str(page), "--rules", "2"]) == 0
    assert "In <head>, there are 1 child tag <title>." in capsys.readouterr().out
