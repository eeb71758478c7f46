from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from grading.exceptions import ValidationError


def clean_marks(raw, full_marks):
    """
    Valide une note saisie: numérique, >= 0, <= full_marks.
    Retourne un Decimal arrondi à 2 décimales.
    """
    if raw is None or isinstance(raw, bool) or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("marks must be a number")
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("marks must be a number")
    if not value.is_finite():
        raise ValidationError("marks must be a number")
    if value < 0:
        raise ValidationError("marks cannot be negative")
    if value > Decimal(str(full_marks)):
        raise ValidationError(f"marks cannot exceed full marks ({full_marks})")
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
