"""
Grading System Store: persistance des systèmes de notation et de leurs tranches.

Invariants tenus ici:
  - au plus un système `is_default=True`: verrou consultatif (PostgreSQL), puis
    on retire les autres défauts dans la même transaction que celle qui pose le
    nouveau; la contrainte unique partielle `grading_one_default_system` sert de filet;
  - un système référencé par un Result ne peut pas être supprimé
    (vérification + suppression dans la même transaction, FK PROTECT en filet);
  - une mise à jour des tranches remplace tout le jeu (delete-all puis recreate).
"""
import logging
from contextlib import contextmanager

from django.db import DatabaseError, IntegrityError, connection, transaction
from django.db.models import Prefetch, ProtectedError

from .bands import validate_bands
from .exceptions import (
    ConflictError, NotFoundError, ReferentialIntegrityError, StorageError, ValidationError,
)
from .models import GradingSystem, GradeBand

logger = logging.getLogger(__name__)


@contextmanager
def atomic_write(operation, conflict=None):
    """
    transaction.atomic() + politique d'erreurs de stockage:
    rollback, cause loggée pour les opérateurs, StorageError opaque pour l'appelant.
    `conflict`: exception à lever à la place si la base signale une IntegrityError.
    """
    try:
        with transaction.atomic():
            yield
    except IntegrityError as exc:
        if conflict is None:
            logger.exception("[%s] integrity error", operation)
            raise StorageError() from exc
        logger.warning("[%s] integrity error mapped to %s: %s", operation, type(conflict).__name__, exc)
        raise conflict from exc
    except DatabaseError as exc:
        logger.exception("[%s] database error", operation)
        raise StorageError() from exc


def _hydrated():
    return GradingSystem.objects.prefetch_related(
        Prefetch("bands", queryset=GradeBand.objects.order_by("-min_percentage"))
    )


def list_grading_systems():
    """Tous les systèmes, défaut en premier; tranches par min décroissant."""
    return _hydrated().order_by("-is_default", "name")


def get_grading_system(pk):
    try:
        return _hydrated().get(pk=pk)
    except (GradingSystem.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Grading system not found")


def get_active_grading_system(pk=None):
    """Système demandé explicitement, sinon le système par défaut."""
    if pk:
        return get_grading_system(pk)
    system = _hydrated().filter(is_default=True).first()
    if system is None:
        raise NotFoundError("No active grading system found")
    return system


def _clean_name(name):
    name = (name or "").strip()
    if not name:
        raise ValidationError("name is required")
    return name


def _clean_bands(bands):
    if not bands:
        raise ValidationError("At least one grade band is required")
    return validate_bands(bands)


# clé du verrou consultatif PostgreSQL qui sérialise les changements de défaut
DEFAULT_LOCK_KEY = 7_201_001

# nom ou défaut pris entre la vérification et l'écriture
CONCURRENT_CHANGE = "Grading system was changed concurrently, please retry"


def _lock_default_slot():
    """
    Verrou de transaction pris avant toute réassignation du défaut.
    select_for_update ne verrouille que les défauts déjà visibles: deux
    transactions concurrentes pourraient chacune poser le leur.
    SQLite sérialise déjà les écritures.
    """
    if connection.vendor == "postgresql":
        with connection.cursor() as cursor:
            cursor.execute("SELECT pg_advisory_xact_lock(%s)", [DEFAULT_LOCK_KEY])


def _clear_defaults(exclude_pk=None):
    _lock_default_slot()
    qs = GradingSystem.objects.select_for_update().filter(is_default=True)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    # verrouille d'abord les lignes concernées, puis les met à jour
    pks = list(qs.values_list("pk", flat=True))
    if pks:
        GradingSystem.objects.filter(pk__in=pks).update(is_default=False)
    return pks


def _create_bands(system, bands):
    GradeBand.objects.bulk_create([
        GradeBand(
            grading_system=system,
            grade_name=b["grade_name"],
            min_percentage=b["min_percentage"],
            max_percentage=b["max_percentage"],
            points=b["points"],
        )
        for b in bands
    ])


def create_grading_system(name, bands, is_default=False):
    name = _clean_name(name)
    clean = _clean_bands(bands)
    if GradingSystem.objects.filter(name=name).exists():
        raise ConflictError()

    with atomic_write("GRADING_SYSTEM_CREATE", conflict=ConflictError(CONCURRENT_CHANGE)):
        if is_default:
            cleared = _clear_defaults()
            if cleared:
                logger.info("Default grading system moved away from %s", cleared)
        system = GradingSystem.objects.create(name=name, is_default=bool(is_default))
        _create_bands(system, clean)

    logger.info("Grading system %s created (%d bands, default=%s)", system.pk, len(clean), system.is_default)
    return get_grading_system(system.pk)


def update_grading_system(pk, name=None, is_default=None, bands=None):
    """
    Mise à jour partielle. `bands`, s'il est fourni, remplace tout le jeu existant.
    """
    if name is not None:
        name = _clean_name(name)
    clean = _clean_bands(bands) if bands is not None else None

    with atomic_write("GRADING_SYSTEM_UPDATE", conflict=ConflictError(CONCURRENT_CHANGE)):
        if is_default:
            # avant le verrou de ligne: même ordre que la création
            _lock_default_slot()
        try:
            system = GradingSystem.objects.select_for_update().get(pk=pk)
        except (GradingSystem.DoesNotExist, ValueError, TypeError):
            raise NotFoundError("Grading system not found")

        if name is not None and name != system.name:
            if GradingSystem.objects.filter(name=name).exclude(pk=system.pk).exists():
                raise ConflictError()
            system.name = name

        if is_default is not None:
            if is_default:
                _clear_defaults(exclude_pk=system.pk)
            system.is_default = bool(is_default)

        system.save()

        if clean is not None:
            system.bands.all().delete()
            _create_bands(system, clean)

    logger.info("Grading system %s updated (bands replaced=%s)", pk, clean is not None)
    return get_grading_system(pk)


def delete_grading_system(pk):
    with atomic_write("GRADING_SYSTEM_DELETE"):
        try:
            system = GradingSystem.objects.select_for_update().get(pk=pk)
        except (GradingSystem.DoesNotExist, ValueError, TypeError):
            raise NotFoundError("Grading system not found")

        if system.results.exists():
            raise ReferentialIntegrityError()
        try:
            system.delete()  # tranches supprimées en cascade
        except ProtectedError as exc:
            raise ReferentialIntegrityError() from exc

    logger.info("Grading system %s deleted", pk)
