import logging

import pytest

from photo_zip_organizer import main as cli


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    # setup_logging attaches handlers to tmp_path and the captured stdout;
    # drop them so later tests don't log into closed streams
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler).__module__.startswith("_pytest"):
            continue
        handler.close()
        root.removeHandler(handler)


def test_cli_success(takeout_zip, tmp_path):
    out = tmp_path / "out"

    code = cli.main(["--input", str(takeout_zip), "--output", str(out)])

    assert code == 0
    assert (out / "2014" / "2014-09-29" / "2014-09-29.jpg").exists()
    assert (out / "organizer.log").exists()


def test_cli_no_filter(takeout_zip, tmp_path):
    out = tmp_path / "out"

    code = cli.main(["-i", str(takeout_zip), "-o", str(out), "--no-filter"])

    assert code == 0
    assert (out / "2012" / "2012-10-06" / "DSC_9157.JPG").exists()


def test_cli_dslr_marker_and_report(takeout_zip, tmp_path):
    out = tmp_path / "out"
    report = tmp_path / "report.csv"

    code = cli.main(["-i", str(takeout_zip), "-o", str(out),
                     "--dslr-marker", "Pixel", "--report-csv", str(report)])

    assert code == 0
    assert report.exists()
    assert not (out / "2016").exists()


def test_cli_dry_run(takeout_zip, tmp_path):
    out = tmp_path / "out"
    assert cli.main(["-i", str(takeout_zip), "-o", str(out), "--dry-run"]) == 0
    assert not out.exists()


def test_cli_missing_input_exits_nonzero(tmp_path):
    out = tmp_path / "out"
    assert cli.main(["-i", str(tmp_path / "missing.zip"), "-o", str(out)]) == 1
    # A mistyped input leaves no output tree or log behind
    assert not out.exists()


def test_cli_corrupt_archive_exits_nonzero(tmp_path):
    bogus = tmp_path / "bogus.zip"
    bogus.write_bytes(b"nope")
    assert cli.main(["-i", str(bogus), "-o", str(tmp_path / "out")]) == 1


def test_cli_requires_input_and_output():
    with pytest.raises(SystemExit):
        cli.parse_args(["--input", "x.zip"])
