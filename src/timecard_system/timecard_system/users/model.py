from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Thực thể miền (domain): User.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    user_id: int
    username: str
    email: str
    password_hash: str
    is_active: bool = True
