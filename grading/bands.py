"""
Règles des tranches de notes (grade bands), sans accès base de données.

- validate_bands(bands): contrôle structurel d'un jeu de tranches proposé
  (champs requis, min < max, pas de chevauchement). Les trous sont permis.
- resolve(percentage, bands): tranche correspondant à un pourcentage,
  avec repli "non classé" (note d'échec, 0 point) si aucune ne correspond.

Une tranche peut être un dict (payload validé) ou un objet GradeBand.
"""
from collections import namedtuple
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from .exceptions import ValidationError

BAND_FIELDS = ("grade_name", "min_percentage", "max_percentage", "points")
NUMERIC_FIELDS = BAND_FIELDS[1:]

# Nom utilisé quand le système n'a aucune tranche
FALLBACK_GRADE = "F"
D0 = Decimal("0")

Resolution = namedtuple("Resolution", ["grade_name", "points", "classified"])


def _get(band, field):
    if isinstance(band, Mapping):
        return band.get(field)
    return getattr(band, field, None)


def _decimal(value, field):
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        d = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not d.is_finite():
        raise ValidationError(f"{field} must be a number")
    return d


def validate_bands(bands):
    """
    Valide un jeu de tranches (ordre d'entrée quelconque).
    Retourne les tranches normalisées (Decimal), triées par min croissant.
    Lève ValidationError à la première violation.
    """
    normalized = []
    for band in bands:
        for field in BAND_FIELDS:
            raw = _get(band, field)
            if raw is None or (isinstance(raw, str) and not raw.strip()):
                raise ValidationError(f"{field} is required")

        values = {f: _decimal(_get(band, f), f) for f in NUMERIC_FIELDS}
        if values["min_percentage"] >= values["max_percentage"]:
            raise ValidationError("min must be less than max")
        normalized.append({"grade_name": str(_get(band, "grade_name")).strip(), **values})

    # Le contrôle se fait sur la séquence triée: le front envoie souvent A -> F
    ordered = sorted(normalized, key=lambda b: b["min_percentage"])
    for lower, upper in zip(ordered, ordered[1:]):
        if lower["max_percentage"] > upper["min_percentage"]:
            raise ValidationError("overlapping ranges")
    return ordered


def unclassified(bands):
    """Repli: nom de la tranche la plus basse (échec), 0 point."""
    bands = list(bands)
    if not bands:
        return Resolution(FALLBACK_GRADE, D0, False)
    lowest = min(bands, key=lambda b: Decimal(str(_get(b, "min_percentage"))))
    return Resolution(_get(lowest, "grade_name"), D0, False)


def resolve(percentage, bands):
    """
    Tranche dont [min, max] (bornes incluses) contient le pourcentage.
    Si plusieurs correspondent, la plus petite min_percentage gagne.
    Ne lève jamais pour un pourcentage hors tranches.
    """
    bands = list(bands)
    p = Decimal(str(percentage))

    match, match_min = None, None
    for band in bands:
        lo = Decimal(str(_get(band, "min_percentage")))
        hi = Decimal(str(_get(band, "max_percentage")))
        if lo <= p <= hi and (match is None or lo < match_min):
            match, match_min = band, lo

    if match is None:
        return unclassified(bands)
    return Resolution(_get(match, "grade_name"), Decimal(str(_get(match, "points"))), True)
