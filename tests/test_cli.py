import io
import json
import logging

from urlnorm import cli


def test_cli_prints_key_per_url(capsys):
    exit_code = cli.main(["http://www.google.com", "http://www.capradio.org/news/npr/story?storyid=382276026"])
    assert exit_code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "google.com:\thttp://www.google.com",
        "capradio.org:news:npr:story:storyid=382276026:\thttp://www.capradio.org/news/npr/story?storyid=382276026",
    ]


def test_cli_reads_stdin_and_clusters():
    stdin = io.StringIO("# seen today\nhttp://x.com/a\n\nhttps://www.x.com/a/\nhttp://x.com/b\n")
    stdout = io.StringIO()
    assert cli.main(["--cluster"], stdin=stdin, stdout=stdout) == 0
    assert stdout.getvalue().splitlines() == [
        "x.com:a: (2)",
        "  http://x.com/a",
        "  https://www.x.com/a/",
        "x.com:b: (1)",
        "  http://x.com/b",
    ]


def test_cli_reads_input_file_and_writes_json(tmp_path):
    source = tmp_path / "urls.txt"
    source.write_text("http://x.com/?utm_source=a\nhttp://x.com/?id=1\n", encoding="utf-8")
    output = tmp_path / "out" / "keys.json"
    stdout = io.StringIO()
    assert cli.main(["--input", str(source), "--json-output", str(output)], stdout=stdout) == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload == {
        "urls": [
            {"url": "http://x.com/?utm_source=a", "key": "x.com:"},
            {"url": "http://x.com/?id=1", "key": "x.com:id=1:"},
        ]
    }


def test_cli_applies_extra_rules():
    stdout = io.StringIO()
    argv = ["--host-prefix", "shop.", "--drop-param", "session", "--strip-repeated", "http://shop.m.x.com/?session=1"]
    assert cli.main(argv, stdout=stdout) == 0
    assert stdout.getvalue() == "x.com:\thttp://shop.m.x.com/?session=1\n"


def test_cli_reports_invalid_pattern(caplog):
    with caplog.at_level(logging.ERROR, logger="urlnorm.cli"):
        exit_code = cli.main(["--drop-param", "(broken", "http://x.com"], stdout=io.StringIO())
    assert exit_code == cli.EXIT_CONFIG_ERROR
    assert "(broken" in caplog.text


def test_cli_skips_unparsable_urls():
    stdout = io.StringIO()
    assert cli.main(["http://[broken", "http://x.com"], stdout=stdout) == 0
    assert stdout.getvalue() == "x.com:\thttp://x.com\n"


def test_cli_reports_missing_input_file(tmp_path, caplog):
    missing = tmp_path / "absent.txt"
    with caplog.at_level(logging.ERROR, logger="urlnorm.cli"):
        exit_code = cli.main(["--input", str(missing)], stdout=io.StringIO())
    assert exit_code == cli.EXIT_INPUT_ERROR
    assert "absent.txt" in caplog.text


def test_cli_reports_undecodable_input_file(tmp_path):
    source = tmp_path / "urls.bin"
    source.write_bytes(b"http://x.com/\xff\xfe\n")
    assert cli.main(["--input", str(source)], stdout=io.StringIO()) == cli.EXIT_INPUT_ERROR


def test_cli_applies_host_prefix_pattern():
    stdout = io.StringIO()
    assert cli.main(["--host-prefix-pattern", r"cdn[0-9]+\.", "http://cdn42.x.com/a"], stdout=stdout) == 0
    assert stdout.getvalue() == "x.com:a:\thttp://cdn42.x.com/a\n"
