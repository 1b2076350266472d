"""
Car recommendation engine.

Responsibilities:
- Accept the wizard's selection criteria (budget, body type, fuel, tags).
- Filter the car catalog down to matching candidates.
- Rank candidates by tag overlap and editorial quality score.
- Return structured recommendations ready for API serialisation.
"""
