from __future__ import annotations

# Sentinel the wizard sends for "no preference" on body and fuel type.
ANY = "Any"

STANDARD_TAGS: dict[str, list[str]] = {
    "usage": [
        "City driving",
        "Long trips",
        "Mixed",
        "Winter conditions",
        "Family-focused",
        "Sport",
    ],
    "priorities": [
        "Safety",
        "Low consumption",
        "Performance",
        "Comfort",
        "Technology/ADAS",
        "Low maintenance cost",
    ],
}

# User-facing label -> catalog label
FUEL_LABELS: dict[str, str] = {
    "Electric": "Electricity",
    "Gasoline": "Petrol",
    "Petrol": "Petrol",
    "Diesel": "Diesel",
    "Hybrid": "Hybrid",
}


def is_any(label: str | None) -> bool:
    """True when *label* expresses no preference."""
    if label is None:
        return True
    cleaned = label.strip()
    return not cleaned or cleaned.lower() == ANY.lower()


def translate_fuel_label(label: str | None) -> str | None:
    """Map a wizard fuel label to the catalog's vocabulary.

    Returns ``None`` for "any"-equivalent labels. Labels missing from
    ``FUEL_LABELS`` pass through unchanged.
    """
    if is_any(label):
        return None
    return FUEL_LABELS.get(label, label)


def all_tags() -> list[str]:
    return [*STANDARD_TAGS["usage"], *STANDARD_TAGS["priorities"]]


def suggest_tags(
    body: str | None = None,
    fuel: str | None = None,
    horsepower: float | None = None,
    drivetrain: str | None = None,
) -> list[str]:
    """Rule-based tag suggestions for a vehicle imported without tags."""
    suggested: list[str] = []

    if fuel and "electric" in fuel.lower():
        suggested.append("Low consumption")

    if horsepower:
        if horsepower > 200:
            suggested.extend(["Performance", "Sport"])
        if horsepower < 120:
            suggested.append("Low consumption")

    body_lower = (body or "").strip().lower()
    if body_lower == "suv":
        suggested.extend(["Family-focused", "Winter conditions"])
    elif body_lower == "sedan":
        suggested.extend(["Comfort", "City driving"])
    elif body_lower == "hatchback":
        suggested.extend(["City driving", "Mixed"])

    drive_lower = (drivetrain or "").lower()
    if "awd" in drive_lower or "4wd" in drive_lower:
        suggested.append("Winter conditions")

    return list(dict.fromkeys(suggested))
