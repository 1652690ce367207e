"""Built-in demo dataset: five members and their friendship requests."""
from __future__ import annotations

from typing import List

from friendgraph.graph.labels import FRIENDSHIP, MEMBER, PENDING_FRIENDSHIP

from .models import EdgeSpec, VertexRecord

_MEMBER_ROWS = [
    # userid, username, pw, firstname, lastname, gender, dob, jdate, ldate, address, email, tel, imageid, thumbnailid
    ("user1", "Bob", "password123", "Bob", "Doe", "male", "1990-01-01", "2022-01-01", "2025-01-01",
     "123 Main St, Los Angeles, CA", "john.doe@example.com", "123-456-7890", "img1", "thumb1"),
    ("user2", "Jill", "password456", "Jill", "Doe", "female", "1992-05-10", "2023-01-01", "2025-05-10",
     "456 Elm St, Los Angeles, CA", "jane.doe@example.com", "987-654-3210", "img2", "thumb2"),
    ("user3", "Kate", "password789", "Kate", "Smith", "male", "1985-07-15", "2021-07-01", "2025-07-15",
     "789 Maple St, Los Angeles, CA", "alex.smith@example.com", "555-555-5555", "img3", "thumb3"),
    ("user4", "Jane", "password101", "Jane", "Brown", "female", "1995-03-25", "2024-03-01", "2025-03-25",
     "321 Oak St, Los Angeles, CA", "emma.brown@example.com", "444-444-4444", "img4", "thumb4"),
    ("user5", "Mike", "password202", "Mike", "Jones", "male", "1988-10-20", "2020-10-01", "2025-10-20",
     "654 Pine St, Los Angeles, CA", "mike.jones@example.com", "666-666-6666", "img5", "thumb5"),
]

MEMBER_PROPERTIES = (
    "userid", "username", "pw", "firstname", "lastname", "gender", "dob",
    "jdate", "ldate", "address", "email", "tel", "imageid", "thumbnailid",
)

_FRIENDSHIP_ROWS = [
    ("Bob", "Jill", FRIENDSHIP),
    ("Jill", "Kate", FRIENDSHIP),
    ("Jill", "Mike", PENDING_FRIENDSHIP),
    ("Jane", "Kate", FRIENDSHIP),
    ("Mike", "Jane", FRIENDSHIP),
    ("Jane", "Bob", PENDING_FRIENDSHIP),
]


def sample_members(label: str = MEMBER) -> List[VertexRecord]:
    return [VertexRecord(label=label, properties=dict(zip(MEMBER_PROPERTIES, row))) for row in _MEMBER_ROWS]


def sample_friendships() -> List[EdgeSpec]:
    return [EdgeSpec(from_name=a, to_name=b, label=rel) for a, b, rel in _FRIENDSHIP_ROWS]
