"""
Bulk trip import: reconcile pasted rows against the fleet before committing.

Pipeline:
    pasted text → RawTripRow (parsers.tabular_parser)
                → duplicate groups keyed by plate + driver + origin
                → per-row validation and lane commission lookup
                → TripImportPreviewRow list (shown to the operator)
                → TripCreate list for valid and warning rows (on confirm)

The reconciliation functions are pure: every lookup goes through the
ReferenceSnapshot passed in, loaded once per preview.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional
import structlog

from config import settings
from models.vehicle import VehicleResponse
from models.driver import DriverResponse
from models.commission import CommissionRuleResponse
from models.trip import TripCreate, TripStatus
from models.trip_import import (
    IMPORTABLE_STATUSES,
    ImportStatus,
    RawTripRow,
    TripImportPreviewRow,
    TripImportSummary,
    TripImportPreviewResponse,
    TripImportResponse,
)
from parsers.tabular_parser import parse_trip_rows
from services import preview_cache_service
from services.vehicle_service import VehicleService, get_vehicle_service
from services.driver_service import DriverService, get_driver_service
from services.commission_service import CommissionService, get_commission_service
from services.trip_service import TripService, get_trip_service
from utils.text_utils import normalize_key, is_blank
from exceptions import (
    DatabaseError,
    ImportPreviewNotFoundError,
    NothingToImportError,
    TripImportCommitError,
)

logger = structlog.get_logger(__name__)

PREVIEW_KIND = "trips"

MSG_VEHICLE_NOT_FOUND = "Veículo não encontrado"
MSG_ORIGIN_EMPTY = "Origem vazia"
MSG_DESTINATION_EMPTY = "Destino vazio"
MSG_DRIVER_NOT_REGISTERED = "Motorista não cadastrado (comissão zerada)"
MSG_DUPLICATE = "Duplicado (viagem mantida: linha {row_index}). Comissão zerada."

GROUP_KEY_SEPARATOR = "|"


# ===================
# REFERENCE DATA
# ===================

@dataclass
class ReferenceSnapshot:
    """
    Vehicles, drivers, and commission rules as read at preview time.

    Lookups use normalized keys. When two records share a key, the first
    one in list order wins.
    """
    vehicles: list[VehicleResponse] = field(default_factory=list)
    drivers: list[DriverResponse] = field(default_factory=list)
    rules: list[CommissionRuleResponse] = field(default_factory=list)

    _vehicles_by_plate: dict[str, VehicleResponse] = field(init=False, repr=False)
    _drivers_by_name: dict[str, DriverResponse] = field(init=False, repr=False)
    _rules_by_lane: dict[frozenset, CommissionRuleResponse] = field(init=False, repr=False)

    def __post_init__(self):
        self._vehicles_by_plate = {}
        for vehicle in self.vehicles:
            self._vehicles_by_plate.setdefault(normalize_key(vehicle.plate), vehicle)

        self._drivers_by_name = {}
        for driver in self.drivers:
            self._drivers_by_name.setdefault(normalize_key(driver.name), driver)

        # Lanes are undirected: A → B and B → A share one key
        self._rules_by_lane = {}
        for rule in self.rules:
            if rule.commission_value <= 0:
                logger.warning(
                    "commission_rule_ignored",
                    rule_id=rule.id,
                    commission_value=rule.commission_value,
                )
                continue
            lane = frozenset((normalize_key(rule.origin), normalize_key(rule.destination)))
            self._rules_by_lane.setdefault(lane, rule)

    def find_vehicle(self, plate: str) -> Optional[VehicleResponse]:
        key = normalize_key(plate)
        return self._vehicles_by_plate.get(key) if key else None

    def find_driver(self, name: str) -> Optional[DriverResponse]:
        key = normalize_key(name)
        return self._drivers_by_name.get(key) if key else None

    def find_rule(self, origin: str, destination: str) -> Optional[CommissionRuleResponse]:
        lane = frozenset((normalize_key(origin), normalize_key(destination)))
        return self._rules_by_lane.get(lane)

    def lookup_commission(self, origin: str, destination: str) -> Optional[float]:
        """Commission for the lane, or None when no rule covers it."""
        rule = self.find_rule(origin, destination)
        return rule.commission_value if rule else None


# ===================
# RECONCILIATION
# ===================

def duplicate_group_key(row: RawTripRow) -> str:
    """
    Key shared by rows that represent the same trip request.

    Destination is not part of the key: the same plate, driver, and origin
    pasted twice with different destinations land in one group.
    """
    return GROUP_KEY_SEPARATOR.join((
        normalize_key(row.plate),
        normalize_key(row.driver_name),
        normalize_key(row.origin),
    ))


def group_rows(rows: list[RawTripRow]) -> dict[str, list[RawTripRow]]:
    """Group rows by duplicate key, in order of first appearance."""
    groups: dict[str, list[RawTripRow]] = {}
    for row in rows:
        groups.setdefault(duplicate_group_key(row), []).append(row)
    return groups


def select_kept_index(group: list[RawTripRow], snapshot: ReferenceSnapshot) -> int:
    """
    Pick the row to keep from a duplicate group.

    The row whose lane pays the highest commission wins; a lane without a
    rule counts as 0. Ties go to the earliest row. Driver registration is
    not considered here.
    """
    values = [
        snapshot.lookup_commission(row.origin, row.destination) or 0
        for row in group
    ]
    return values.index(max(values))


def validate_row(row: RawTripRow, snapshot: ReferenceSnapshot) -> TripImportPreviewRow:
    """
    Classify one row as valid, warning, or error.

    - error: vehicle not found, blank origin, or blank destination
    - warning: driver not registered; imported with commission 0
    - valid: everything matched; commission is None when no rule applies
    """
    vehicle = snapshot.find_vehicle(row.plate)
    driver = snapshot.find_driver(row.driver_name)

    errors: list[str] = []
    if vehicle is None:
        errors.append(MSG_VEHICLE_NOT_FOUND)
    if is_blank(row.origin):
        errors.append(MSG_ORIGIN_EMPTY)
    if is_blank(row.destination):
        errors.append(MSG_DESTINATION_EMPTY)

    commission = None
    if driver is not None:
        commission = snapshot.lookup_commission(row.origin, row.destination)

    fields = dict(
        row.model_dump(),
        vehicle_id=vehicle.id if vehicle else None,
        driver_id=driver.id if driver else None,
    )

    if errors:
        return TripImportPreviewRow(
            **fields,
            commission=commission,
            status=ImportStatus.ERROR,
            message=", ".join(errors),
        )

    if driver is None:
        return TripImportPreviewRow(
            **fields,
            commission=0,
            status=ImportStatus.WARNING,
            message=MSG_DRIVER_NOT_REGISTERED,
        )

    return TripImportPreviewRow(
        **fields,
        commission=commission,
        status=ImportStatus.VALID,
        message="",
    )


def reconcile_trip_rows(
    rows: list[RawTripRow],
    snapshot: ReferenceSnapshot,
) -> list[TripImportPreviewRow]:
    """
    Reconcile parsed rows into preview rows.

    Every input row yields exactly one preview row. Output follows group
    order (first appearance of each key), with rows in input order inside a
    group. In a group of two or more, all rows but the kept one become
    duplicates with commission 0.
    """
    preview: list[TripImportPreviewRow] = []

    for key, group in group_rows(rows).items():
        if len(group) == 1:
            preview.append(validate_row(group[0], snapshot))
            continue

        kept_index = select_kept_index(group, snapshot)
        kept_row_index = group[kept_index].row_index

        for i, row in enumerate(group):
            result = validate_row(row, snapshot)

            if i == kept_index:
                preview.append(result.model_copy(update={"duplicate_group": key}))
            else:
                preview.append(result.model_copy(update={
                    "status": ImportStatus.DUPLICATE,
                    "commission": 0,
                    "message": MSG_DUPLICATE.format(row_index=kept_row_index),
                    "duplicate_group": key,
                }))

        logger.debug(
            "duplicate_group_resolved",
            group=key,
            size=len(group),
            kept_row=kept_row_index,
        )

    return preview


def build_trip_preview(
    text: str,
    has_header: bool,
    snapshot: ReferenceSnapshot,
) -> list[TripImportPreviewRow]:
    """Parse pasted text and reconcile it in one step."""
    return reconcile_trip_rows(parse_trip_rows(text, has_header), snapshot)


def summarize_preview(preview: list[TripImportPreviewRow]) -> TripImportSummary:
    """Count preview rows by status."""
    counts = {status: 0 for status in ImportStatus}
    for row in preview:
        counts[row.status] += 1

    return TripImportSummary(
        total=len(preview),
        importable=counts[ImportStatus.VALID] + counts[ImportStatus.WARNING],
        valid=counts[ImportStatus.VALID],
        warnings=counts[ImportStatus.WARNING],
        duplicates=counts[ImportStatus.DUPLICATE],
        errors=counts[ImportStatus.ERROR],
    )


def build_commit_records(
    preview: list[TripImportPreviewRow],
    departure_date: date,
) -> list[TripCreate]:
    """
    Project valid and warning rows into trips ready to persist.

    driver_id is the registered driver's id, or the name as typed when the
    driver is not registered (commission 0 in that case). Every trip gets the
    same departure_date.
    """
    records: list[TripCreate] = []

    for row in preview:
        if row.status not in IMPORTABLE_STATUSES:
            continue

        records.append(TripCreate(
            vehicle_id=row.vehicle_id,
            driver_id=row.driver_id or row.driver_name,
            status=TripStatus.COMPLETED,
            origin=row.origin,
            destination=row.destination,
            departure_date=departure_date,
            arrival_date=None,
            freight_value=0,
            driver_commission=row.commission if row.driver_id else 0,
            cte="",
            nfe="",
            pallet_term="",
            mdfe="",
            receipt="",
            notes="",
        ))

    return records


# ===================
# SERVICE
# ===================

class TripImportService:
    """
    Preview-then-confirm flow for bulk trip import.

    preview() loads reference data, reconciles, and caches the result.
    confirm() writes the cached valid and warning rows.
    """

    def __init__(
        self,
        vehicle_service: Optional[VehicleService] = None,
        driver_service: Optional[DriverService] = None,
        commission_service: Optional[CommissionService] = None,
        trip_service: Optional[TripService] = None,
    ):
        self.vehicle_service = vehicle_service or get_vehicle_service()
        self.driver_service = driver_service or get_driver_service()
        self.commission_service = commission_service or get_commission_service()
        self.trip_service = trip_service or get_trip_service()

    def load_reference_data(self) -> ReferenceSnapshot:
        """Read vehicles, drivers, and commission rules once."""
        return ReferenceSnapshot(
            vehicles=self.vehicle_service.get_all(),
            drivers=self.driver_service.get_all(),
            rules=self.commission_service.get_rules(),
        )

    def preview(self, text: str, has_header: bool = False) -> TripImportPreviewResponse:
        """
        Reconcile pasted text and store the result for confirmation.

        Calling again (e.g. after toggling has_header) recomputes everything
        and returns a new preview_id.
        """
        snapshot = self.load_reference_data()
        rows = build_trip_preview(text, has_header, snapshot)
        summary = summarize_preview(rows)

        preview_id = preview_cache_service.store_preview(PREVIEW_KIND, {"rows": rows})

        logger.info(
            "trip_import_preview_created",
            preview_id=preview_id,
            total=summary.total,
            importable=summary.importable,
            duplicates=summary.duplicates,
            errors=summary.errors,
            has_header=has_header,
        )

        return TripImportPreviewResponse(
            preview_id=preview_id,
            rows=rows,
            summary=summary,
            expires_in_minutes=settings.import_preview_ttl_minutes,
        )

    def confirm(
        self,
        preview_id: str,
        departure_date: Optional[date] = None,
    ) -> TripImportResponse:
        """
        Commit the valid and warning rows of a preview.

        Args:
            preview_id: From preview()
            departure_date: Stamped on every trip; defaults to today

        Raises:
            ImportPreviewNotFoundError: Preview expired or unknown
            NothingToImportError: No valid or warning rows
            TripImportCommitError: A write failed; earlier writes are kept
        """
        payload = preview_cache_service.retrieve_preview(PREVIEW_KIND, preview_id)
        if payload is None:
            raise ImportPreviewNotFoundError(preview_id)

        rows: list[TripImportPreviewRow] = payload["rows"]
        summary = summarize_preview(rows)

        if summary.importable == 0:
            raise NothingToImportError(
                skipped_errors=summary.errors,
                skipped_duplicates=summary.duplicates,
            )

        departure = departure_date or date.today()
        records = build_commit_records(rows, departure)

        try:
            self.trip_service.create_many(records)
        except DatabaseError as e:
            logger.error(
                "trip_import_commit_failed",
                preview_id=preview_id,
                attempted=len(records),
                error=e.message,
            )
            raise TripImportCommitError(attempted=len(records), reason=e.message) from e

        preview_cache_service.delete_preview(preview_id)

        logger.info(
            "trip_import_committed",
            preview_id=preview_id,
            imported=len(records),
            skipped_duplicates=summary.duplicates,
            skipped_errors=summary.errors,
            departure_date=departure.isoformat(),
        )

        return TripImportResponse(
            success=True,
            imported=len(records),
            skipped_duplicates=summary.duplicates,
            skipped_errors=summary.errors,
            departure_date=departure,
            message=f"{len(records)} viagem(s) importada(s) com sucesso!",
        )


# Singleton instance
_service: Optional[TripImportService] = None


def get_trip_import_service() -> TripImportService:
    """Get or create TripImportService instance."""
    global _service
    if _service is None:
        _service = TripImportService()
    return _service
