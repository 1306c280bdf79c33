"""Рендеринг markdown в безопасный HTML-фрагмент.

Одна и та же функция используется и для предпросмотра, и для показа
сохранённой пасты, поэтому предпросмотр всегда совпадает с результатом.
"""
import html
import re

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import AMP_SUBSTITUTE

SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto", "ftp"})

_SCHEME_RE = re.compile(r"^([a-z][a-z0-9+.\-]*):", re.IGNORECASE)
_ESCAPE_PLACEHOLDER_RE = re.compile("\x02(\\d+)\x03")
_IGNORED_URL_CHARS_RE = re.compile(r"[\x00-\x20\x7f]+")


def _normalize_url(value: str) -> str:
    """URL в том виде, в котором его увидит браузер"""
    value = value.replace(AMP_SUBSTITUTE, "&")
    value = _ESCAPE_PLACEHOLDER_RE.sub(lambda m: chr(int(m.group(1))), value)
    value = html.unescape(value)
    return _IGNORED_URL_CHARS_RE.sub("", value)


def is_safe_url(value: str) -> bool:
    match = _SCHEME_RE.match(_normalize_url(value))
    if match is None:
        # Относительная ссылка или якорь
        return True
    return match.group(1).lower() in SAFE_URL_SCHEMES


class SafeUrlTreeprocessor(Treeprocessor):
    """Удаляет href/src с опасными схемами (javascript:, data: и т.п.)"""

    def run(self, root):
        for element in root.iter():
            for attribute in ("href", "src"):
                value = element.get(attribute)
                if value is not None and not is_safe_url(value):
                    del element.attrib[attribute]


class EscapeHtmlExtension(Extension):
    """Сырой HTML в исходнике экранируется, а не передаётся как есть"""

    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        md.treeprocessors.register(SafeUrlTreeprocessor(md), "safe_urls", 1)


EXTENSIONS = ("fenced_code", "tables", "sane_lists")


def render_markdown(raw: str) -> str:
    """Чистая функция: одинаковый вход всегда даёт одинаковый HTML"""
    # Экземпляр Markdown не потокобезопасен, поэтому создаётся на каждый вызов
    md = markdown.Markdown(extensions=[EscapeHtmlExtension(), *EXTENSIONS], output_format="html")
    return md.convert(raw or "")
