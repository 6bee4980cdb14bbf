from dataclasses import dataclass


@dataclass
class Profile:
    id: int             # same as the owning user id
    name: str
    email: str
    created_at: str = ""
    updated_at: str = ""
