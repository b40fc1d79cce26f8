"""Kinship vocabulary shared by the resolver and the cadency helpers."""

from lineage.models import Gender, Person

# role -> (male, female, neutral)
ROLE_TERMS = {
    "parent": ("Father", "Mother", "Parent"),
    "child": ("Son", "Daughter", "Child"),
    "sibling": ("Brother", "Sister", "Sibling"),
    "aunt-uncle": ("Uncle", "Aunt", "Aunt/Uncle"),
    "niece-nephew": ("Nephew", "Niece", "Niece/Nephew"),
    "spouse": ("Husband", "Wife", "Spouse"),
    "cousin": ("Cousin", "Cousin", "Cousin"),
}


def gendered(person: Person | None, role: str) -> str:
    """Pick the male, female or neutral word for a role based on the person's recorded gender."""
    male, female, neutral = ROLE_TERMS[role]
    gender = person.gender if person is not None else Gender.UNKNOWN
    if gender == Gender.MALE:
        return male
    if gender == Gender.FEMALE:
        return female
    return neutral


def ordinal(n: int) -> str:
    """1 -> "1st", 2 -> "2nd", 11 -> "11th", 23 -> "23rd"."""
    suffixes = ["th", "st", "nd", "rd"]
    v = n % 100
    if 11 <= v <= 13:
        return f"{n}th"
    return f"{n}{suffixes[v % 10] if v % 10 < 4 else 'th'}"


def removal_text(removal: int) -> str:
    if removal == 0:
        return ""
    if removal == 1:
        return "Once Removed"
    if removal == 2:
        return "Twice Removed"
    return f"{removal}x Removed"
