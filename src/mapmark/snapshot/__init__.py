"""Snapshot export/import: codec and merge."""

from mapmark.snapshot.codec import dump_snapshot, encode_snapshot, iso_timestamp, parse_snapshot, snapshot_filename
from mapmark.snapshot.merge import describe_import, plan_import

__all__ = [
    "describe_import",
    "dump_snapshot",
    "encode_snapshot",
    "iso_timestamp",
    "parse_snapshot",
    "plan_import",
    "snapshot_filename",
]
