import math
from dataclasses import dataclass, replace
from typing import List, Tuple

ITEMS_PER_PAGE = 5
ROLES = ["user", "admin"]
STATUSES = ["active", "inactive", "banned"]


@dataclass
class ManagedUser:
    id: int
    name: str
    email: str
    role: str
    status: str
    last_login: str


def initial_users() -> List[ManagedUser]:
    rows = [
        ("Chulsoo Kim", "kim@example.com", "user", "active", "2024-05-20 14:30"),
        ("Younghee Lee", "lee@example.com", "admin", "active", "2024-05-21 09:15"),
        ("Minsoo Park", "park@example.com", "user", "inactive", "2024-04-10 11:20"),
        ("Jiwoo Choi", "choi@example.com", "user", "active", "2024-05-19 18:45"),
        ("Woosung Jung", "jung@example.com", "user", "banned", "2024-03-01 10:00"),
        ("Dongwon Kang", "kang@example.com", "user", "active", "2024-05-21 15:00"),
        ("Hyegyo Song", "song@example.com", "user", "active", "2024-05-18 09:30"),
        ("Bin Hyun", "hyun@example.com", "admin", "active", "2024-05-21 08:20"),
        ("Yejin Son", "son@example.com", "user", "inactive", "2024-04-05 14:10"),
        ("Yoo Gong", "gong@example.com", "user", "active", "2024-05-20 11:45"),
        ("Taeri Kim", "kim2@example.com", "user", "active", "2024-05-19 16:20"),
        ("Dongseok Ma", "ma@example.com", "user", "banned", "2024-02-15 10:30"),
        ("Jieun Lee", "iu@example.com", "admin", "active", "2024-05-21 10:00"),
        ("Seojun Park", "park2@example.com", "user", "active", "2024-05-17 19:20"),
        ("Soohyun Kim", "kim3@example.com", "user", "inactive", "2024-04-25 13:40"),
    ]
    return [ManagedUser(i, *row) for i, row in enumerate(rows, start=1)]


def filter_users(users: List[ManagedUser], term: str) -> List[ManagedUser]:
    t = (term or "").strip().lower()
    if not t:
        return list(users)
    return [u for u in users if t in u.name.lower() or t in u.email.lower()]


def paginate(items: list, page: int, per_page: int = ITEMS_PER_PAGE) -> Tuple[list, int, int]:
    """(items on page, clamped page number, total pages); an empty list has one empty page."""
    total_pages = max(1, math.ceil(len(items) / per_page))
    page = max(1, min(page, total_pages))
    start = (page - 1) * per_page
    return items[start:start + per_page], page, total_pages


def update_user(users: List[ManagedUser], updated: ManagedUser) -> List[ManagedUser]:
    if updated.role not in ROLES:
        raise ValueError(f"Unknown role: {updated.role}")
    if updated.status not in STATUSES:
        raise ValueError(f"Unknown status: {updated.status}")
    return [replace(updated) if u.id == updated.id else u for u in users]


def delete_user(users: List[ManagedUser], user_id: int) -> List[ManagedUser]:
    return [u for u in users if u.id != user_id]


# Analytics tab (static demo figures)
WEEKLY_ACTIVITY = [("Mon", 45), ("Tue", 52), ("Wed", 38), ("Thu", 65), ("Fri", 48), ("Sat", 25), ("Sun", 15)]
ERROR_COUNTS = [("404", 12), ("500", 5), ("403", 3), ("Other", 2)]
SUMMARY_CARDS = [
    ("Total users", "1,234", "+12% vs last week"),
    ("Analysis requests", "856", "+5% vs last week"),
    ("Avg. response time", "245ms", "Stable"),
    ("Error rate", "0.8%", "+0.2% increase"),
]
