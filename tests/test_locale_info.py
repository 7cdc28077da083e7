import pytest

from hostfetch.locale_info import LocaleInfo, get_locale, parse_locale
from hostfetch.util import ModuleError


def test_parse_language_and_encoding():
    info = parse_locale("en_GB.UTF-8")
    assert info.language == "en_GB"
    assert info.encoding == "UTF-8"


def test_parse_without_encoding():
    info = parse_locale("C")
    assert info.language == "C"
    assert info.encoding == "Unknown"


def test_parse_extra_dots_keeps_second_part():
    info = parse_locale("de_DE.ISO-8859-1.extra")
    assert info.language == "de_DE"
    assert info.encoding == "ISO-8859-1"


def test_replace_placeholders():
    info = LocaleInfo(language="fr_FR", encoding="UTF-8")
    assert info.replace_placeholders("{language} ({encoding})") == "fr_FR (UTF-8)"


def test_get_locale_reads_lang(monkeypatch):
    monkeypatch.setenv("LANG", "ja_JP.EUC-JP")
    assert get_locale() == LocaleInfo(language="ja_JP", encoding="EUC-JP")


def test_get_locale_without_lang_raises(monkeypatch):
    monkeypatch.delenv("LANG", raising=False)
    with pytest.raises(ModuleError) as excinfo:
        get_locale()
    assert excinfo.value.module == "Locale"