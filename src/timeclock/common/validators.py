from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_UPPER_RE = re.compile(r"[A-Z]")
_SYMBOL_RE = re.compile(r"[^A-Za-z0-9]")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name}を入力してください")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name}は{min_len}文字以上で入力してください")
    return value


def require_email(value: str) -> str:
    value = require_non_empty(value, "メールアドレス")
    if not _EMAIL_RE.match(value):
        raise ValidationError("メールアドレスの形式が正しくありません")
    return value.lower()


def require_strong_password(value: str, min_len: int) -> str:
    """At least ``min_len`` chars with one uppercase letter and one symbol."""
    require_min_length(value, "パスワード", min_len)
    if not _UPPER_RE.search(value):
        raise ValidationError("パスワードには大文字を1文字以上含めてください")
    if not _SYMBOL_RE.search(value):
        raise ValidationError("パスワードには記号を1文字以上含めてください")
    return value
