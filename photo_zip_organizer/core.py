import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from tqdm import tqdm

from . import config
from .filtering.rules import DEFAULT_RULES, FilterRule, build_rules, classify
from .metadata.dates import extract_date
from .metadata.extract import MetadataExtractor
from .metadata.linking import EditedFileLinker
from .models import Decision, EntryResult, ImportEntry, OrganizeSummary
from .organization.rules import DestinationPlanner
from .organization.writer import FileWriter
from .reporting import ReportGenerator
from .scanning.archive import open_reader


def build_entries(pairs: Iterable[Tuple[str, bytes]],
                  extractor: Optional[MetadataExtractor] = None) -> Iterator[ImportEntry]:
    """Wraps archive (name, bytes) pairs into ImportEntry objects with parsed EXIF."""
    extractor = extractor or MetadataExtractor()
    for name, content in pairs:
        yield ImportEntry(name, content, extractor.get_image_metadata(content, name))


def process(entries: Iterable[ImportEntry],
            filter_enabled: bool = True,
            planner: Optional[DestinationPlanner] = None,
            rules: Sequence[FilterRule] = DEFAULT_RULES) -> Iterator[EntryResult]:
    """
    Decides the fate of every entry in the batch.

    Phase 1 collects every basename, since an edited copy can only be judged
    once all of its siblings are known. Phase 2 visits entries in archive
    order: date -> classification -> placement (kept entries only).
    """
    entries = list(entries)
    planner = planner or DestinationPlanner()

    # --- Phase 1: Filename set ---
    filename_set = frozenset(e.filename for e in entries)
    logging.debug(f"Indexed {len(filename_set)} distinct filenames from {len(entries)} entries")

    # --- Phase 2: Per-entry decisions ---
    for entry in entries:
        try:
            capture_date = extract_date(entry.filename, entry.metadata)
            decision = classify(entry, filename_set, filter_enabled, rules)
        except Exception as e:
            # One bad entry degrades to unknown date / keep, never the whole batch
            logging.warning(f"Could not evaluate {entry.original_path}, keeping with unknown date: {e}")
            capture_date, decision = None, Decision.keep()

        if not decision.is_keep:
            logging.info(f"{entry.original_path}: skipped ({decision.reason.value})")
            yield EntryResult(entry, decision, capture_date, None)
            continue

        if capture_date is None:
            logging.warning(f"{entry.original_path}: no capture date, placing in {config.UNKNOWN_DATE_FOLDER}/")

        placement = planner.plan(capture_date, entry.filename)
        yield EntryResult(entry, decision, capture_date, placement)


class PhotoZipOrganizerApp:
    def __init__(self,
                 filter_enabled: bool = True,
                 dslr_markers: Sequence[str] = config.DSLR_MARKERS,
                 edited_word: str = config.EDITED_WORD):
        self.filter_enabled = filter_enabled
        self.rules = build_rules(dslr_markers, edited_word)
        self.linker = EditedFileLinker(edited_word)
        self.extractor = MetadataExtractor()

    def organize(self,
                 input_path: Path,
                 output_root: Path,
                 dry_run: bool = False,
                 report_csv: Optional[Path] = None) -> OrganizeSummary:
        """
        Full pipeline:
        1. Read (archive or extracted directory)
        2. Decide (date, filter, placement)
        3. Write kept entries
        4. Report

        Raises ArchiveReadError / OutputWriteError on fatal problems.
        """
        # A bad input must fail before anything is created under the output root
        reader = open_reader(input_path)
        writer = FileWriter(output_root, dry_run=dry_run)
        writer.ensure_root()

        # --- Step 1: Reading ---
        logging.info(f"Reading {input_path}...")
        entries: List[ImportEntry] = list(build_entries(reader.iter_entries(), self.extractor))
        logging.info(f"Found {len(entries)} image(s).")

        reporter = ReportGenerator()
        if self.filter_enabled:
            reporter.set_orphaned_edits(self.linker.find_orphaned_edits(e.filename for e in entries))

        # --- Step 2 & 3: Decide and write ---
        planner = DestinationPlanner.for_output_root(Path(output_root))
        results = process(entries, self.filter_enabled, planner, self.rules)

        for result in tqdm(results, total=len(entries), desc="Organizing"):
            reporter.record(result)
            if result.placement is None:
                continue
            try:
                placement, written = writer.write(result.placement, result.entry.content)
            except OSError as e:
                logging.error(f"Failed to write {result.entry.original_path} -> "
                              f"{writer.full_path(result.placement)}: {e}")
                reporter.record_error(result.entry.original_path, e)
                continue
            reporter.record_write(written, placement)
            logging.debug(f"{result.entry.original_path}: copied to {writer.full_path(placement)}")

        # --- Step 4: Reporting ---
        reporter.log_summary(dry_run=dry_run)
        if report_csv:
            reporter.write_csv(report_csv)

        return reporter.summary
