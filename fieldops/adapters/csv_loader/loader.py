"""CSV loader: reads and normalizes technician, work order and user files."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from fieldops.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_list,
    parse_tag,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Pick the delimiter (comma/semicolon/tab) most frequent in the header line."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect
    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Raises:
        ValueError: if the file has no header row.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_technicians(file_path: Path) -> list[dict]:
    """Load and normalize the technicians CSV.

    Expected columns (after normalization):
        id, name / nombre, email, phone / telefono, specialty / especialidad,
        zone / zona, current_load / carga, certifications / certificaciones
    """
    technicians = []
    for row in _read_csv(file_path):
        tech = {
            "id": row.get("id") or "",
            "name": row.get("name") or row.get("nombre") or "",
            "email": row.get("email") or row.get("correo") or "",
            "phone": row.get("phone") or row.get("telefono") or "",
            "specialty": parse_tag(row.get("specialty") or row.get("especialidad")),
            "zone": parse_tag(row.get("zone") or row.get("zona")),
            "availability": parse_tag(row.get("availability") or row.get("disponibilidad")) or "available",
            "current_load": _parse_int(row.get("current_load") or row.get("carga")),
            "certifications": parse_list(row.get("certifications") or row.get("certificaciones")),
        }
        if not tech["id"] or not tech["specialty"] or not tech["zone"]:
            logger.warning("Skipping technician row without id/specialty/zone: %s", row)
            continue
        technicians.append(tech)
    logger.info("Parsed %d technicians", len(technicians))
    return technicians


def load_work_orders(file_path: Path) -> list[dict]:
    """Load and normalize the work orders CSV.

    Expected columns (after normalization):
        id, client_name / cliente, address / direccion, zone / zona,
        priority / prioridad, specialty / especialidad, description / descripcion
    """
    orders = []
    for row in _read_csv(file_path):
        order = {
            "id": row.get("id") or "",
            "client_name": row.get("client_name") or row.get("cliente") or "",
            "address": row.get("address") or row.get("direccion") or "",
            "zone": parse_tag(row.get("zone") or row.get("zona")),
            "priority": parse_tag(row.get("priority") or row.get("prioridad")) or "medium",
            "specialty": parse_tag(row.get("specialty") or row.get("especialidad")),
            "description": row.get("description") or row.get("descripcion") or "",
        }
        if not order["id"] or not order["specialty"] or not order["zone"]:
            logger.warning("Skipping work order row without id/specialty/zone: %s", row)
            continue
        orders.append(order)
    logger.info("Parsed %d work orders", len(orders))
    return orders


def load_users(file_path: Path) -> list[dict]:
    """Load the users CSV: username, name, password, role."""
    users = []
    for row in _read_csv(file_path):
        user = {
            "username": row.get("username") or row.get("usuario") or "",
            "name": row.get("name") or row.get("nombre") or "",
            "password": row.get("password") or row.get("contrasena") or "",
            "role": parse_tag(row.get("role") or row.get("rol")) or "technician",
        }
        if not user["username"] or not user["password"]:
            logger.warning("Skipping user row without username/password")
            continue
        users.append(user)
    logger.info("Parsed %d users", len(users))
    return users


def _parse_int(value: str | None) -> int:
    if not value:
        return 0
    try:
        # handle "4", "4.0"
        return max(0, int(float(str(value).replace(",", ".").strip())))
    except ValueError:
        return 0
