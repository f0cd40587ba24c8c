"""Revision reconciliation and final assembly."""

from covmerge.reconcile.assembly import Assembly, assemble, find_collisions
from covmerge.reconcile.engine import reconcile
from covmerge.reconcile.protocols import ContentOracle, OracleError
from covmerge.reconcile.snapshots import SourceSnapshots, variant_name

__all__ = [
    "Assembly",
    "ContentOracle",
    "OracleError",
    "SourceSnapshots",
    "assemble",
    "find_collisions",
    "reconcile",
    "variant_name",
]
