import json

import pytest

from main import main
from tasks.self_contained import generate_self_contained, verify_self_contained
from utils.debug_logger import DebugLogger
from utils.html_compressor import compress_to_m8
from utils.script_builder import extract_embedded_payload
from workflows.generate import run_generation

SOURCE = """<!DOCTYPE html>
<html>
<head>
  <title>T</title>
</head>
<body>
  <h1 class="big">Hi</h1>
  <p>It's a \\ test</p>
</body>
</html>
"""


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "index.source.html"
    path.write_text(SOURCE, encoding="utf-8")
    return path


class TestGenerateSelfContained:

    def test_embeds_exact_payload(self):
        result = generate_self_contained(SOURCE)
        assert extract_embedded_payload(result.html) == compress_to_m8(SOURCE)

    def test_stats(self):
        result = generate_self_contained(SOURCE)
        assert result.stats.original_size == len(SOURCE.encode("utf-8"))
        assert result.stats.compressed_size == len(compress_to_m8(SOURCE).encode("utf-8"))
        assert result.self_contained_size == len(result.html.encode("utf-8"))
        assert result.decompressor_overhead == result.self_contained_size - result.stats.compressed_size

    def test_net_savings_negative_for_tiny_pages(self):
        result = generate_self_contained("<p>x</p>")
        assert result.net_savings_percent < 0

    def test_verify_passes(self):
        result = generate_self_contained(SOURCE)
        assert verify_self_contained(SOURCE, result.html)

    def test_verify_detects_tampering(self):
        result = generate_self_contained(SOURCE)
        assert not verify_self_contained(SOURCE, result.html.replace("Hi", "Bye"))

    def test_verify_page_without_payload(self):
        assert not verify_self_contained(SOURCE, "<html></html>")


class TestRunGeneration:

    def test_writes_output_and_report(self, source_file, tmp_path):
        output = tmp_path / "index.m8.html"
        report_path = tmp_path / "report.json"
        result, report = run_generation(str(source_file), str(output), verify=True, report_path=str(report_path))

        assert output.read_text(encoding="utf-8") == result.html
        assert report.verified is True
        data = json.loads(report_path.read_text(encoding="utf-8"))
        assert data["original_size"] == result.stats.original_size
        assert data["self_contained_size"] == result.self_contained_size
        assert data["decompressor_overhead"] == result.decompressor_overhead

    def test_url_input(self, tmp_path, monkeypatch):
        import workflows.generate as generate

        monkeypatch.setattr(generate, "http_fetch", lambda url: "<div>\n<p>remote</p>\n</div>")
        result, report = run_generation("https://example.com/page", str(tmp_path / "out.html"))
        assert extract_embedded_payload(result.html) == "<1><3>remote</3></1>"
        assert report.input == "https://example.com/page"
        assert report.verified is None


class TestCli:

    def test_success(self, source_file, tmp_path, capsys):
        output = tmp_path / "out.html"
        assert main([str(source_file), str(output)]) == 0
        assert output.exists()
        out = capsys.readouterr().out
        assert "Generation complete" in out
        assert "Original HTML:" in out
        assert "Decompressor size:" in out
        assert "Net savings:" in out

    def test_verify_flag(self, source_file, tmp_path, capsys):
        assert main([str(source_file), str(tmp_path / "out.html"), "--verify"]) == 0
        assert "Round-trip check:     passed" in capsys.readouterr().out

    def test_missing_arguments(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code != 0
        assert "usage:" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys):
        missing = tmp_path / "missing.html"
        assert main([str(missing), str(tmp_path / "out.html")]) == 1
        assert f"Error: Input file '{missing}' not found" in capsys.readouterr().err
        assert not (tmp_path / "out.html").exists()

    def test_unwritable_output(self, source_file, tmp_path, capsys):
        assert main([str(source_file), str(tmp_path / "no" / "such" / "out.html")]) == 1
        assert "Error:" in capsys.readouterr().err


class TestDebugLogger:

    def test_log_generation(self, source_file, tmp_path, capsys):
        _, report = run_generation(str(source_file), str(tmp_path / "out.html"))
        logger = DebugLogger(str(tmp_path / "logs"))
        log_file = logger.log_generation(report)
        data = json.loads(log_file.read_text(encoding="utf-8"))
        assert data["compressed_size"] == report.compressed_size
        assert "[DEBUG] Generation logged to" in capsys.readouterr().out

    def test_log_compression(self, tmp_path):
        logger = DebugLogger(str(tmp_path / "logs"))
        log_file = logger.log_compression("/about.m8", "cached")
        data = json.loads(log_file.read_text(encoding="utf-8"))
        assert data["page"] == "/about.m8"
        assert "original_size" not in data
