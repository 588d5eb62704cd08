#!filepath: tests/dataloader/test_csv_reader.py
from decimal import Decimal

import pytest

from tickmedian.dataloader.csv_reader import PriceCsvReader, load_records
from tickmedian.utils.errors import InputAccessError, InputFormatError


def test_basic_read(tmp_path, write_csv):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price", "1;10", "2;20.5"])

    records = PriceCsvReader().read(path)

    assert [(r.receive_ts, r.price, r.line_no) for r in records] == [
        (1, Decimal("10"), 2),
        (2, Decimal("20.5"), 3),
    ]
    assert all(r.source_file == str(path) for r in records)


def test_extra_columns_and_header_whitespace(tmp_path, write_csv):
    """额外列忽略，列顺序任意，header 去首尾空白"""
    path = write_csv(
        tmp_path / "a.csv",
        [" symbol ; price ;qty; receive_ts", "BTC;100.25;3;1700000000000000000"],
    )

    (record,) = PriceCsvReader().read(path)

    assert record.receive_ts == 1_700_000_000_000_000_000
    assert record.price == Decimal("100.25")


def test_price_precision_is_kept(tmp_path, write_csv):
    path = write_csv(
        tmp_path / "a.csv", ["receive_ts;price", "1;0.123456789012345678901234567890"]
    )

    (record,) = PriceCsvReader().read(path)

    assert record.price == Decimal("0.123456789012345678901234567890")


def test_blank_lines_skipped_but_counted(tmp_path, write_csv):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price", "1;10", "", "3;30"])

    records = PriceCsvReader().read(path)

    assert [r.line_no for r in records] == [2, 4]


def test_empty_file_yields_nothing(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    assert PriceCsvReader().read(path) == []


def test_header_only_file(tmp_path, write_csv):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price"])

    assert PriceCsvReader().read(path) == []


def test_missing_required_column(tmp_path, write_csv):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;bid", "1;10"])

    with pytest.raises(InputFormatError, match="missing required columns") as exc:
        PriceCsvReader().read(path)

    assert exc.value.line_no == 1
    assert exc.value.file == str(path)


def test_short_row_reports_file_and_line(tmp_path, write_csv):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price", "1;10", "2"])

    with pytest.raises(InputFormatError, match="not enough columns") as exc:
        PriceCsvReader().read(path)

    assert exc.value.line_no == 3
    assert "a.csv at line 3" in str(exc.value)


@pytest.mark.parametrize("raw", ["-1", "1.5", "abc", " 1", "", "18446744073709551616"])
def test_invalid_receive_ts(tmp_path, write_csv, raw):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price", f"{raw};10"])

    with pytest.raises(InputFormatError, match="Invalid receive_ts") as exc:
        PriceCsvReader().read(path)

    assert exc.value.line_no == 2


def test_max_uint64_receive_ts(tmp_path, write_csv):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price", "18446744073709551615;1"])

    (record,) = PriceCsvReader().read(path)

    assert record.receive_ts == 2 ** 64 - 1


@pytest.mark.parametrize("raw", ["abc", "", "nan", "inf", "1_000", "1,5"])
def test_invalid_price(tmp_path, write_csv, raw):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price", f"1;{raw}"])

    with pytest.raises(InputFormatError, match="Invalid price"):
        PriceCsvReader().read(path)


@pytest.mark.parametrize("raw", ["1E+5000", "-1E+5000", "1E-5000"])
def test_price_magnitude_out_of_range(tmp_path, write_csv, raw):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price", f"1;{raw}"])

    with pytest.raises(InputFormatError, match=r"Invalid price \(out of range\)"):
        PriceCsvReader().read(path)


def test_zero_price_exponent_is_dropped(tmp_path, write_csv):
    """0E-99999 不应带着超大指数进入 median 计算"""
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price", "1;0E-99999", "2;1E+300"])

    zero, big = PriceCsvReader().read(path)
    assert zero.price == 0
    assert zero.price.as_tuple().exponent == 0
    assert big.price == Decimal("1E+300")


@pytest.mark.parametrize("raw, expected", [("1e2", "100"), ("-0.5", "-0.5"), (" 7 ", "7")])
def test_price_numeric_forms(tmp_path, write_csv, raw, expected):
    path = write_csv(tmp_path / "a.csv", ["receive_ts;price", f"1;{raw}"])

    (record,) = PriceCsvReader().read(path)

    assert record.price == Decimal(expected)


def test_unopenable_file(tmp_path):
    target = tmp_path / "dir.csv"
    target.mkdir()

    with pytest.raises(InputAccessError, match="Failed to open CSV file"):
        PriceCsvReader().read(target)


def test_load_records_keeps_file_order_and_fails_fast(tmp_path, write_csv):
    a = write_csv(tmp_path / "a.csv", ["receive_ts;price", "5;1"])
    b = write_csv(tmp_path / "b.csv", ["receive_ts;price", "oops;1"])
    c = write_csv(tmp_path / "c.csv", ["receive_ts;price", "1;1"])

    records = load_records([a, c])
    assert [r.source_file for r in records] == [str(a), str(c)]

    with pytest.raises(InputFormatError) as exc:
        load_records([a, b, c])
    assert exc.value.file == str(b)
