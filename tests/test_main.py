from charger_uptime.main import main


def test_prints_report(report_file, capsys):
    assert main([str(report_file)]) == 0
    assert capsys.readouterr().out == "0 100\n1 0\n2 75\n"


def test_missing_argument_prints_error(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == "ERROR\n"


def test_missing_file_prints_error(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt")]) == 1
    assert capsys.readouterr().out == "ERROR\n"


def test_invalid_report_prints_only_error(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text(
        "[Stations]\n0 1\n1 2\n\n[Charger Availability Reports]\n1 0 10 true\n2 9 3 true\n",
        encoding="utf-8",
    )
    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == "ERROR\n"


def test_writes_html_report(report_file, tmp_path, capsys):
    html = tmp_path / "site" / "index.html"
    assert main([str(report_file), "--html", str(html)]) == 0
    page = html.read_text(encoding="utf-8")
    assert "Station Uptime" in page
    assert "<td>2</td>" in page
    assert capsys.readouterr().out == "0 100\n1 0\n2 75\n"
