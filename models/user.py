from dataclasses import dataclass


@dataclass
class User:
    id: int
    email: str
    password_hash: str
    created_at: str = ""


@dataclass
class Session:
    user_id: int
    email: str
    signed_in_at: str = ""
