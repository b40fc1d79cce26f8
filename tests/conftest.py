"""Shared fixtures: small families built from storage-style records."""

import pytest

from lineage.graph import build_graph


def person(pid, first, last="Ashford", born=None, died=None, gender="male", legitimacy=None):
    record = {
        "id": pid,
        "firstName": first,
        "lastName": last,
        "dateOfBirth": born,
        "dateOfDeath": died,
        "gender": gender,
    }
    if legitimacy is not None:
        record["legitimacyStatus"] = legitimacy
    return record


def parent(rid, parent_id, child_id, adopted=False):
    return {
        "id": rid,
        "person1Id": parent_id,
        "person2Id": child_id,
        "relationshipType": "adopted-parent" if adopted else "parent",
    }


def spouse(rid, a, b, married=None, divorced=None, status=None):
    return {
        "id": rid,
        "person1Id": a,
        "person2Id": b,
        "relationshipType": "spouse",
        "marriageDate": married,
        "divorceDate": divorced,
        "marriageStatus": status,
    }


@pytest.fixture
def family_records():
    """
    Three generations of House Ashford.

        Edmund (1230) = Margery (1234)
          ├── Cedric (1255) = Isolde (1258)
          │     ├── Rosalind (1280, f)
          │     └── Tristan (1283)
          ├── Alice (1260, f)
          └── Bob (1262)
        Edmund and Joan (1240, f) had Hugh (1265), a half-brother.
        Bob = Wenna (1265, f); Wenna's son Piers (1285) by an earlier husband.
    """
    people = [
        person(1, "Edmund", born="1230"),
        person(2, "Margery", born="1234", gender="female"),
        person(3, "Cedric", born="1255"),
        person(4, "Isolde", "Vane", born="1258", gender="female"),
        person(5, "Rosalind", born="1280", gender="female"),
        person(6, "Tristan", born="1283"),
        person(7, "Alice", born="1260", gender="female"),
        person(8, "Bob", born="1262"),
        person(9, "Joan", "Hale", born="1240", gender="female"),
        person(10, "Hugh", born="1265"),
        person(11, "Wenna", "Pell", born="1265", gender="female"),
        person(12, "Piers", "Pell", born="1285"),
        person(13, "Oswin", "Pell", born="1260", died="1284"),
    ]
    relationships = [
        spouse(100, 1, 2, married="1253"),
        parent(101, 1, 3),
        parent(102, 2, 3),
        parent(103, 1, 7),
        parent(104, 2, 7),
        parent(105, 1, 8),
        parent(106, 2, 8),
        spouse(107, 3, 4, married="1278"),
        parent(108, 3, 5),
        parent(109, 4, 5),
        parent(110, 3, 6),
        parent(111, 4, 6),
        parent(112, 1, 10),
        parent(113, 9, 10),
        spouse(114, 11, 13, married="1283", status="widowed"),
        parent(115, 11, 12),
        parent(116, 13, 12),
        spouse(117, 8, 11, married="1288"),
    ]
    return people, relationships


@pytest.fixture
def family(family_records):
    people, relationships = family_records
    return build_graph(people, relationships)
