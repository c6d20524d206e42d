import json
import re
import shutil
import subprocess

import pytest

from models.dictionaries import TOKEN_ATTRIBUTES, TOKEN_TAGS
from utils.html_compressor import compress_to_m8, decompress_m8
from utils.script_builder import (
    build_loader_page,
    build_self_contained_page,
    decompressor_script,
    escape_for_script,
    extract_embedded_payload,
    unescape_script_literal,
)


ESCAPE_CASES = [
    {"id": "backslash_quote_newline", "payload": "a\\b'c\nd"},
    {"id": "crlf_and_tab", "payload": "<3>x</3>\r\n\t<3>y</3>"},
    {"id": "lone_cr", "payload": "a\rb"},
    {"id": "script_close", "payload": "<32>var s='</32>';</32>"},
    {"id": "html_comment", "payload": "<!-- c --><1></1>"},
    {"id": "unicode", "payload": "<3>héllo ✓</3>"},
    {"id": "escaped_looking_text", "payload": "\\n is not a newline"},
]


class TestEscaping:

    @pytest.mark.parametrize("case", ESCAPE_CASES, ids=lambda x: x["id"])
    def test_literal_round_trip(self, case):
        escaped = escape_for_script(case["payload"])
        assert unescape_script_literal(escaped) == case["payload"]

    @pytest.mark.parametrize("case", ESCAPE_CASES, ids=lambda x: x["id"])
    def test_literal_is_single_line_and_safe(self, case):
        escaped = escape_for_script(case["payload"])
        assert "\n" not in escaped and "\r" not in escaped and "\t" not in escaped
        assert "</" not in escaped
        # every quote in the literal is escaped
        assert re.search(r"(?<!\\)(?:\\\\)*'", escaped) is None

    def test_known_escapes(self):
        assert escape_for_script("a\\b'c\nd") == "a\\\\b\\'c\\nd"


class TestPages:

    def _object_literal(self, script, var):
        match = re.search(rf"var {var}=(\{{.*?\}});", script)
        assert match, f"{var} table missing"
        return json.loads(match.group(1))

    def test_decompressor_uses_shared_tables(self):
        script = decompressor_script()
        assert script.startswith("function m8Decompress(m){")
        assert self._object_literal(script, "t") == dict(TOKEN_TAGS)
        assert self._object_literal(script, "a") == dict(TOKEN_ATTRIBUTES)

    def test_decompressor_custom_name(self):
        assert decompressor_script("d").startswith("function d(m){")

    def test_loader_page(self):
        page = build_loader_page()
        assert page.startswith("<!DOCTYPE html>")
        assert "fetch(m8Path)" in page
        assert "document.write(html)" in page
        assert "Error Loading .m8" in page
        assert '".source.html"' in page
        assert '"index.m8"' in page
        assert decompressor_script() in page

    @pytest.mark.parametrize("case", ESCAPE_CASES, ids=lambda x: x["id"])
    def test_self_contained_payload_recoverable(self, case):
        page = build_self_contained_page(case["payload"])
        assert extract_embedded_payload(page) == case["payload"]

    def test_self_contained_has_no_fetch(self):
        page = build_self_contained_page("<1>x</1>")
        assert "fetch(" not in page
        assert decompressor_script() in page
        assert page.count("</script>") == 1

    def test_payload_placeholders_not_expanded(self):
        payload = "<3>__DECOMPRESSOR__ __PAYLOAD__</3>"
        page = build_self_contained_page(payload)
        assert extract_embedded_payload(page) == payload

    def test_extract_without_payload(self):
        assert extract_embedded_payload("<html></html>") is None


NODE = shutil.which("node")

BROWSER_CASES = ESCAPE_CASES + [
    {"id": "compressed_page", "payload": compress_to_m8(
        '<div class="card" id="x">\r\n<a href="/" target="_blank">Home</a><img src="a.png" alt=\'q\'>\r\n</div>')},
    {"id": "prototype_named_tags", "payload": "<constructor>a</constructor><toString>b</toString><__proto__></__proto__>"},
    {"id": "attribute_after_newline", "payload": '<1\nc="a"\ti="b"></1>'},
    {"id": "unknown_tokens", "payload": "<999 z=\"1\">x</999>"},
]


@pytest.mark.skipif(NODE is None, reason="node is not installed")
class TestBrowserDecompressor:
    """Runs the generated page script under node with a stub document."""

    def _run_page_script(self, page, tmp_path):
        script = re.search(r"<script>\n(.*)</script>", page, re.DOTALL).group(1)
        program = (
            "var written=[];\n"
            "var document={open:function(){},write:function(h){written.push(h);},close:function(){}};\n"
            + script
            + "\nprocess.stdout.write(JSON.stringify(written.join('')));\n"
        )
        path = tmp_path / "page.js"
        path.write_text(program, encoding="utf-8")
        result = subprocess.run([NODE, str(path)], capture_output=True, check=True, timeout=30)
        return json.loads(result.stdout.decode("utf-8"))

    @pytest.mark.parametrize("case", BROWSER_CASES, ids=lambda x: x["id"])
    def test_self_contained_page_matches_python_decoder(self, case, tmp_path):
        page = build_self_contained_page(case["payload"])
        assert self._run_page_script(page, tmp_path) == decompress_m8(case["payload"])

    def test_literal_decodes_to_exact_payload(self, tmp_path):
        literals = ",".join(f"'{escape_for_script(case['payload'])}'" for case in BROWSER_CASES)
        path = tmp_path / "literals.js"
        path.write_text(f"process.stdout.write(JSON.stringify([{literals}]));\n", encoding="utf-8")
        result = subprocess.run([NODE, str(path)], capture_output=True, check=True, timeout=30)
        assert json.loads(result.stdout.decode("utf-8")) == [case["payload"] for case in BROWSER_CASES]

    def test_source_round_trips_through_browser(self, tmp_path):
        html = '<!DOCTYPE html>\r\n<html>\r\n<body>\r\n<h1 class="t">Hi</h1>\r\n<p style="a">x</p>\r\n</body>\r\n</html>'
        page = build_self_contained_page(compress_to_m8(html))
        assert self._run_page_script(page, tmp_path) == decompress_m8(compress_to_m8(html))
