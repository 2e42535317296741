"""Shared test fixtures."""

from __future__ import annotations

import pytest

from charsleuth.models import ProfileSet, load_profile_set
from charsleuth.registry import REGISTRY, EncodingInfo

ENGLISH = (
    b"The quick brown fox and the dog went to the park. "
    b"This is the end of the story and that was all."
)
GERMAN = (
    "Die Größe des Gebäudes überraschte die Besucher. Natürlich können wir "
    "das ändern und für die Zukunft sichern."
)
RUSSIAN = (
    "Привет, это простой текст на русском языке. Мы проверяем, что "
    "кодировка определяется правильно и что все работает."
)
JAPANESE = (
    "これは日本語のテキストです。私たちは毎日新しいことを学んでいます。"
    "今日はとても良い天気ですね。"
)
CHINESE_SIMPLIFIED = (
    "这是一个中文测试文本，我们在这里检测编码。"  # noqa: RUF001
    "中国的人民和政府都在努力工作，发展经济和社会。"  # noqa: RUF001
)
CHINESE_TRADITIONAL = (
    "這是一個中文測試文本，我們在這裡檢測編碼。"  # noqa: RUF001
    "中國的人民和政府都在努力工作，發展經濟和社會。"  # noqa: RUF001
)
KOREAN = (
    "안녕하세요. 이것은 한국어 문장입니다. 우리는 매일 새로운 것을 배우고 "
    "있습니다. 오늘은 날씨가 정말 좋습니다."
)
PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x10"


def profile(name: str) -> EncodingInfo:
    """Return the registry entry reported as *name*."""
    return next(enc for enc in REGISTRY if enc.name == name)


@pytest.fixture(scope="session")
def profile_set() -> ProfileSet:
    return load_profile_set()
