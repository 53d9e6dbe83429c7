import json

from codescan import cli


def test_cli_reports_findings_table_and_json(samples_dir, tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    output_path = tmp_path / "codescan.json"

    exit_code = cli.main([str(samples_dir / "vulnerable"), "--out", str(output_path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Possible bad practices found" in captured.out
    assert "Direct ObjectManager usage" in captured.out
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["passed"] is False
    assert [
        (item["kind"], item["module"], item["file"], item["line"]) for item in data["findings"]
    ] == [
        ("Direct ObjectManager usage", "Acme", "Acme/Block/Banner.php", "10"),
        ("Direct instantiation with new", "Acme", "Acme/Block/Banner.php", "11"),
        ("Debug function: var_dump", "Acme", "Acme/Block/Banner.php", "12"),
        ("Plugin before without return", "Acme", "Acme/Plugin/ProductPlugin.php", "6"),
        ("Observer listening to generic event", "Acme", "Acme/etc/events.xml", ""),
        ("Block without class/template", "Acme", "Acme/view/frontend/layout/default.xml", ""),
    ]


def test_cli_passes_on_clean_tree(samples_dir, tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)

    exit_code = cli.main([str(samples_dir / "safe"), "--fail-on-findings"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "No bad practices found!" in captured.out


def test_cli_fail_on_findings(samples_dir, tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)

    exit_code = cli.main([str(samples_dir / "vulnerable"), "--fail-on-findings", "--workers", "2"])

    capsys.readouterr()
    assert exit_code == cli.EXIT_FINDINGS


def test_cli_missing_root_exits_with_error(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    output_path = tmp_path / "report.json"

    exit_code = cli.main([str(tmp_path / "missing"), "--out", str(output_path)])

    captured = capsys.readouterr()
    assert exit_code == cli.EXIT_ERROR
    assert "unavailable" in captured.err
    assert not output_path.exists()


def test_cli_honours_disabled_rules(samples_dir, tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_path = tmp_path / "codescan.yaml"
    config_path.write_text(
        "disabled_rules: [object_manager, direct_new, debug_functions, plugin_before_no_return]\n"
        "exclude: ['*.xml']\n",
        encoding="utf-8",
    )

    exit_code = cli.main([str(samples_dir / "vulnerable"), "--config", str(config_path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "No bad practices found!" in captured.out


def test_cli_rejects_bad_config(samples_dir, tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_path = tmp_path / "codescan.yaml"
    config_path.write_text("disabled_rules: [not_a_rule]\n", encoding="utf-8")

    exit_code = cli.main([str(samples_dir / "vulnerable"), "--config", str(config_path)])

    captured = capsys.readouterr()
    assert exit_code == cli.EXIT_ERROR
    assert "not_a_rule" in captured.err
