"""Browser-side pieces: inlined decompressor, loader page, self-contained page"""
import json
import re

from config import COMPRESSED_EXTENSION, DEFAULT_PAGE, SOURCE_SUFFIX, VIEWER_EXTENSION
from models.dictionaries import TOKEN_ATTRIBUTES, TOKEN_TAGS

# Per-character escapes, applied in one translate() pass
_CHAR_ESCAPES = str.maketrans({'\\': '\\\\', "'": "\\'", '\n': '\\n', '\r': '\\r', '\t': '\\t'})
# Keep the literal from closing its <script> element or opening an HTML comment
_MARKUP_ESCAPES = (('</', '<\\/'), ('<!--', '<\\!--'))

_LITERAL_ESCAPE = re.compile(r'\\(.)', re.DOTALL)
_LITERAL_CONTROLS = {'n': '\n', 'r': '\r', 't': '\t'}
_EMBEDDED_PAYLOAD = re.compile(r"const m8='((?:[^'\\]|\\.)*)';", re.DOTALL)

_js = lambda value: json.dumps(value, separators=(',', ':'), ensure_ascii=False)

_DECOMPRESSOR_TEMPLATE = r"""function __NAME__(m){
var t=__TAGS__;
var a=__ATTRS__;
var ap=new RegExp('(\\s)('+Object.keys(a).join('|')+')=','g');
var name=function(tag){return Object.prototype.hasOwnProperty.call(t,tag)?t[tag]:tag;};
var h=m.replace(/<(\w+)([^>]*)>/g,function(match,tag,attrs){
return '<'+name(tag)+attrs.replace(ap,function(x,ws,s){return ws+a[s]+'=';})+'>';
});
return h.replace(/<\/(\w+)>/g,function(match,tag){return '</'+name(tag)+'>';});
}"""

_LOADER_TEMPLATE = r"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Loading .m8...</title>
</head>
<body>
<div style="text-align:center;padding:50px;font-family:sans-serif;">
<h2>Loading .m8 content...</h2>
<p style="color:#666;">Decompressing page...</p>
</div>
<script>
(function(){
if(window.m8Loaded)return;
window.m8Loaded=true;
__DECOMPRESSOR__
var viewerExt=new RegExp(__VIEWER_EXT__+'$','i');
var path=window.location.pathname;
var m8Path=/\/$/.test(path)?path+__DEFAULT_M8__:path.replace(viewerExt,__M8_EXT__);
var sourcePath=m8Path.slice(0,m8Path.length-__M8_EXT__.length)+__SOURCE_SUFFIX__;
var esc=function(s){return String(s).replace(/[&<>"]/g,function(c){return {'&':'&amp;','<':'&lt;','>':'&gt;','"':'&quot;'}[c];});};
fetch(m8Path)
.then(function(r){if(!r.ok)throw new Error('HTTP '+r.status+' while fetching '+m8Path);return r.text();})
.then(function(m8){
var html=m8Decompress(m8);
document.open();
document.write(html);
document.close();
})
.catch(function(e){
document.body.innerHTML='<div style="text-align:center;padding:50px;font-family:sans-serif;"><h1 style="color:#e53e3e;">Error Loading .m8</h1><p>'+esc(e.message)+'</p><p style="color:#666;margin-top:20px;">Make sure the '+esc(sourcePath)+' file exists</p></div>';
});
})();
</script>
</body>
</html>"""

_SELF_CONTAINED_TEMPLATE = r"""<!DOCTYPE html>
<html><head><meta charset="UTF-8"><title>Loading...</title></head><body>
<script>
(function(){
const m8='__PAYLOAD__';
__DECOMPRESSOR__
const html=m8Decompress(m8);
document.open();
document.write(html);
document.close();
})();
</script>
</body></html>"""


def decompressor_script(name: str = 'm8Decompress') -> str:
    """
    JavaScript source of the decompressor as a named function.

    Token tables are serialized from the same mappings the Python codec uses.
    """
    return (_DECOMPRESSOR_TEMPLATE
            .replace('__NAME__', name)
            .replace('__TAGS__', _js(dict(TOKEN_TAGS)))
            .replace('__ATTRS__', _js(dict(TOKEN_ATTRIBUTES))))


def escape_for_script(text: str) -> str:
    """Escape .m8 text for a single-quoted, single-line JS string literal."""
    escaped = text.translate(_CHAR_ESCAPES)
    for raw, safe in _MARKUP_ESCAPES:
        escaped = escaped.replace(raw, safe)
    return escaped


def unescape_script_literal(literal: str) -> str:
    """Read an escaped literal back the way a JS engine would."""
    return _LITERAL_ESCAPE.sub(lambda m: _LITERAL_CONTROLS.get(m.group(1), m.group(1)), literal)


def build_loader_page() -> str:
    """Generic page that fetches name.m8 for name.html, expands it and replaces the document."""
    return (_LOADER_TEMPLATE
            .replace('__DECOMPRESSOR__', decompressor_script())
            .replace('__VIEWER_EXT__', _js(re.escape(VIEWER_EXTENSION)))
            .replace('__DEFAULT_M8__', _js(DEFAULT_PAGE + COMPRESSED_EXTENSION))
            .replace('__M8_EXT__', _js(COMPRESSED_EXTENSION))
            .replace('__SOURCE_SUFFIX__', _js(SOURCE_SUFFIX)))


def build_self_contained_page(m8: str) -> str:
    """Single HTML file carrying the escaped payload and the decompressor."""
    page = _SELF_CONTAINED_TEMPLATE.replace('__DECOMPRESSOR__', decompressor_script())
    # Payload goes in last so its contents are never scanned for placeholders
    head, tail = page.split('__PAYLOAD__', 1)
    return head + escape_for_script(m8) + tail


def extract_embedded_payload(page: str):
    """
    Recover the .m8 payload from a page made by build_self_contained_page.

    Returns:
        Unescaped payload, or None if the page has no embedded literal
    """
    match = _EMBEDDED_PAYLOAD.search(page)
    if not match:
        return None
    return unescape_script_literal(match.group(1))
