import argparse
import logging
import sys
from pathlib import Path

from . import config
from .core import PhotoZipOrganizerApp
from .exceptions import PhotoZipOrganizerError


def setup_logging(dest_root: Path, verbose: bool, log_to_file: bool = True):
    """Sets up logging to the console and, when log_to_file, a file in the destination."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        try:
            dest_root.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(dest_root / config.LOG_FILE_NAME, encoding='utf-8'))
        except OSError as e:
            print(f"Cannot log to {dest_root}: {e}", file=sys.stderr)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    # Turn down exifread's own chatter (it logs "File format not recognized")
    logging.getLogger("exifread").setLevel(logging.ERROR)


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="organize-photo-zip",
        description="Organize a Google Photos Takeout export into YYYY/YYYY-MM-DD folders.",
    )

    p.add_argument("-i", "--input", type=Path, required=True,
                   help="Path to the Google Photos ZIP file or extracted directory")
    p.add_argument("-o", "--output", type=Path, required=True,
                   help="Output directory for organized photos")
    p.add_argument("-n", "--no-filter", action="store_true",
                   help="Disable filtering (by default DSLR/Lightroom/Google -MIX/-edited duplicates are skipped)")
    p.add_argument("--dry-run", action="store_true", help="Decide and report without writing files")
    p.add_argument("--dslr-marker", action="append", default=[], metavar="TEXT",
                   help="Extra camera make/model text treated as DSLR (repeatable; NIKON is always included)")
    p.add_argument("--edited-word", default=config.EDITED_WORD,
                   help="Google Photos 'edited' suffix word (default: %(default)s)")
    p.add_argument("--report-csv", type=Path, default=None, help="Optional path to write per-file report CSV")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    output_root = args.output.resolve()
    # A dry run must not touch the destination, and neither must a run whose
    # input is missing; both log to the console only
    setup_logging(output_root, args.verbose, log_to_file=not args.dry_run and args.input.exists())

    logging.info("=== Photo ZIP Organizer Started ===")
    logging.info(f"Input:  {args.input}")
    logging.info(f"Output: {output_root}")
    if args.no_filter:
        logging.info("Filtering: disabled (organizing all photos)")
    else:
        logging.info("Filtering: skipping existing collection photos (DSLR, Lightroom, Google -MIX/-edited files)")

    app = PhotoZipOrganizerApp(
        filter_enabled=not args.no_filter,
        dslr_markers=tuple(config.DSLR_MARKERS) + tuple(args.dslr_marker),
        edited_word=args.edited_word,
    )

    try:
        app.organize(
            input_path=args.input,
            output_root=output_root,
            dry_run=args.dry_run,
            report_csv=args.report_csv,
        )
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except PhotoZipOrganizerError as e:
        logging.error(f"Failed to organize photos: {e}")
        return 1
    except OSError as e:
        logging.exception(f"Fatal I/O error during organization: {e}")
        return 1

    logging.info("Organization complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
