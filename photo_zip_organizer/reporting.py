import csv
import logging
from pathlib import Path
from typing import List, Optional

from .models import EntryResult, OrganizeSummary, Placement, SkipReason


class ReportGenerator:
    """
    Accumulates per-entry outcomes into an OrganizeSummary and renders the
    end-of-run summary and the optional per-file CSV.
    """

    HEADERS = [
        "Archive Path",
        "Decision",
        "Reason",
        "Capture Date",
        "Date Source",
        "Destination Path",
        "Notes",
    ]

    def __init__(self):
        self.summary = OrganizeSummary()
        self._rows: List[list] = []

    def record(self, result: EntryResult, note: str = ""):
        s = self.summary
        s.total_files += 1
        decision = result.decision
        if decision.is_keep:
            s.kept_files += 1
            if result.placement is not None and result.placement.is_unknown_date:
                s.unknown_date_files += 1
        else:
            s.skipped[decision.reason] += 1

        cd = result.capture_date
        self._rows.append([
            result.entry.original_path,
            decision.action.value,
            decision.reason.value if decision.reason else "",
            cd.isoformat() if cd else "",
            cd.source.value if cd else "",
            result.placement.relative_path.as_posix() if result.placement else "",
            note,
        ])

    def record_write(self, written: bool, placement: Optional[Placement] = None):
        """
        Counts the write of the last recorded entry. placement is where the
        writer actually put it, which differs from the planned one when a
        different file already held the planned name.
        """
        if written:
            self.summary.written_files += 1
        else:
            self.summary.already_present += 1
            if self._rows:
                self._rows[-1][-1] = "Already present"

        if placement is not None and self._rows:
            final = placement.relative_path.as_posix()
            row = self._rows[-1]
            if row[5] and row[5] != final:
                row[5] = final
                row[-1] = "Renamed: a different file had the planned name"

    def record_error(self, path: str, error: Exception):
        msg = f"{path}: {error}"
        self.summary.errors.append(msg)
        if self._rows and self._rows[-1][0] == path:
            self._rows[-1][-1] = f"Error: {error}"

    def set_orphaned_edits(self, orphans: List[str]):
        self.summary.orphaned_edits = list(orphans)

    def log_summary(self, dry_run: bool = False):
        s = self.summary
        logging.info("=== Organization Summary ===")
        logging.info(f"Total files:   {s.total_files}")
        logging.info(f"Kept:          {s.kept_files}")
        logging.info(f"  unknown date: {s.unknown_date_files}")
        logging.info(f"Skipped:       {s.skipped_files}")
        for reason in SkipReason:
            if s.skipped[reason]:
                logging.info(f"  {reason.value}: {s.skipped[reason]}")
        label = "Would write:" if dry_run else "Written:"
        logging.info(f"{label:<14} {s.written_files}")
        if s.already_present:
            logging.info(f"Already present: {s.already_present}")

        if s.orphaned_edits:
            logging.info(f"Edited files kept without originals: {len(s.orphaned_edits)}")
            for name in s.orphaned_edits:
                logging.info(f"  - {name}")

        if s.errors:
            logging.warning(f"Errors: {len(s.errors)}")
            for err in s.errors:
                logging.warning(f"  - {err}")

    def write_csv(self, output_csv: Path):
        output_csv = Path(output_csv)
        logging.info(f"Writing report to {output_csv}")
        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.HEADERS)
            writer.writerows(self._rows)
