import itertools
import logging
from decimal import Decimal

from sales_report import sales
from sales_report.catalog import load_products, load_salespersons
from sales_report.sales import apply_outcomes, process_sale_file, process_sales_directory
from sales_report.schemas import SaleDelta, SaleFileOutcome


def test_round_trip(tmp_path, write_lines, products, salespersons):
    path = write_lines(tmp_path / "ventas_CC_123.csv", "CC;123", "P001;3")

    outcome = process_sale_file(path, products, salespersons)

    assert outcome.success
    assert outcome.lines_processed == 1
    assert outcome.lines_with_error == 0
    assert outcome.total_amount == Decimal("30.00")
    assert outcome.salesperson.document_number == "123"
    assert outcome.deltas == [
        SaleDelta(
            product_id="P001",
            document_number="123",
            quantity=3,
            amount=Decimal("30.00"),
        )
    ]
    # Nothing is folded until apply_outcomes runs.
    assert products["P001"].units_sold == 0
    assert salespersons["123"].total_revenue == 0

    apply_outcomes([outcome], products, salespersons)

    assert products["P001"].units_sold == 3
    assert salespersons["123"].total_revenue == Decimal("30.00")


def test_empty_file_fails(tmp_path, write_lines, products, salespersons):
    path = write_lines(tmp_path / "ventas.csv")

    outcome = process_sale_file(path, products, salespersons)

    assert not outcome.success
    assert "Empty" in outcome.message
    assert outcome.deltas == []


def test_missing_file_fails_without_raising(tmp_path, products, salespersons):
    outcome = process_sale_file(tmp_path / "nope.csv", products, salespersons)

    assert not outcome.success
    assert outcome.file_name == "nope.csv"


def test_short_header_fails(tmp_path, write_lines, products, salespersons):
    path = write_lines(tmp_path / "ventas.csv", "CC", "P001;3")

    outcome = process_sale_file(path, products, salespersons)

    assert not outcome.success
    assert outcome.lines_processed == 0


def test_unknown_salesperson_fails(tmp_path, write_lines, products, salespersons):
    path = write_lines(tmp_path / "ventas.csv", "CC;999", "P001;3")

    outcome = process_sale_file(path, products, salespersons)

    assert not outcome.success
    assert "999" in outcome.message
    assert outcome.salesperson is None
    assert outcome.deltas == []


def test_each_bad_line_counts_once(tmp_path, write_lines, products, salespersons, caplog):
    caplog.set_level(logging.WARNING)
    path = write_lines(
        tmp_path / "ventas.csv",
        "CC;123",
        "P001;2",
        "P001",
        "P001;abc",
        "P001;0",
        "P001;-3",
        "P999;1",
        "",
        "P002;4;",
    )

    outcome = process_sale_file(path, products, salespersons)

    assert outcome.success
    assert outcome.lines_processed == 2
    assert outcome.lines_with_error == 6
    assert outcome.total_amount == Decimal("30.00")
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 6


def test_all_lines_bad_is_still_success(tmp_path, write_lines, products, salespersons):
    path = write_lines(tmp_path / "ventas.csv", "CC;123", "P001;x", "P404;1")

    outcome = process_sale_file(path, products, salespersons)

    assert outcome.success
    assert outcome.lines_processed == 0
    assert outcome.lines_with_error == 2
    assert outcome.total_amount == 0


def test_bad_lines_never_change_totals(tmp_path, write_lines, products, salespersons):
    path = write_lines(tmp_path / "ventas.csv", "CC;123", "P001;0", "P001;-1", "P001;1.5")

    apply_outcomes([process_sale_file(path, products, salespersons)], products, salespersons)

    assert products["P001"].units_sold == 0
    assert salespersons["123"].total_revenue == 0


def test_free_product_adds_units_only(tmp_path, write_lines, products, salespersons):
    path = write_lines(tmp_path / "ventas.csv", "CC;123", "P003;5")

    outcome = process_sale_file(path, products, salespersons)
    apply_outcomes([outcome], products, salespersons)

    assert outcome.lines_processed == 1
    assert products["P003"].units_sold == 5
    assert salespersons["123"].total_revenue == 0


def test_apply_skips_failed_outcomes(products, salespersons):
    failed = SaleFileOutcome(
        file_name="bad.csv",
        success=False,
        message="failed",
        deltas=[
            SaleDelta(product_id="P001", document_number="123", quantity=1, amount=Decimal("10"))
        ],
    )

    apply_outcomes([failed], products, salespersons)

    assert products["P001"].units_sold == 0
    assert salespersons["123"].total_revenue == 0


def test_missing_directory_gives_no_outcomes(tmp_path, products, salespersons, caplog):
    caplog.set_level(logging.ERROR)

    assert process_sales_directory(tmp_path / "ventas", products, salespersons) == []
    assert any("does not exist" in r.getMessage() for r in caplog.records)


def test_file_instead_of_directory_gives_no_outcomes(tmp_path, write_lines, products, salespersons):
    path = write_lines(tmp_path / "ventas", "CC;123")

    assert process_sales_directory(path, products, salespersons) == []


def test_directory_only_reads_csv_files(tmp_path, write_lines, products, salespersons):
    sales_dir = tmp_path / "ventas"
    write_lines(sales_dir / "a.csv", "CC;123", "P001;1")
    write_lines(sales_dir / "b.CSV", "CE;456", "P002;2")
    write_lines(sales_dir / "notes.txt", "CC;123", "P001;100")
    write_lines(sales_dir / "nested" / "c.csv", "CC;123", "P001;100")

    outcomes = process_sales_directory(sales_dir, products, salespersons)

    assert sorted(o.file_name for o in outcomes) == ["a.csv", "b.CSV"]
    assert all(o.success for o in outcomes)


def test_fault_isolation(tmp_path, write_lines, products, salespersons):
    sales_dir = tmp_path / "ventas"
    write_lines(sales_dir / "good.csv", "CC;123", "P001;3")
    write_lines(sales_dir / "bad.csv", "CC;000", "P001;7")

    outcomes = process_sales_directory(sales_dir, products, salespersons)
    apply_outcomes(outcomes, products, salespersons)

    by_name = {o.file_name: o for o in outcomes}
    assert by_name["good.csv"].success
    assert not by_name["bad.csv"].success
    assert products["P001"].units_sold == 3
    assert salespersons["123"].total_revenue == Decimal("30.00")


def _totals(tmp_path, write_lines, file_contents):
    """Writes the given files into a fresh dataset and returns the folded totals."""
    write_lines(tmp_path / "productos.csv", "P001;Widget;10.00", "P002;Gadget;2.35")
    write_lines(tmp_path / "vendedores.csv", "CC;123;Ana;Pérez", "CE;456;Luis;Gómez")
    products = load_products(tmp_path / "productos.csv")
    salespersons = load_salespersons(tmp_path / "vendedores.csv")

    outcomes = []
    for index, lines in enumerate(file_contents):
        path = write_lines(tmp_path / "ventas" / f"f{index}.csv", *lines)
        outcomes.append(process_sale_file(path, products, salespersons))
    apply_outcomes(outcomes, products, salespersons)

    return (
        {key: p.units_sold for key, p in products.items()},
        {key: s.total_revenue for key, s in salespersons.items()},
    )


def test_totals_do_not_depend_on_line_order(tmp_path, write_lines):
    lines = ["P001;3", "P002;7", "P001;1", "P002;x", "P002;2"]

    expected = _totals(tmp_path / "base", write_lines, [["CC;123", *lines]])
    for index, permutation in enumerate(itertools.permutations(lines)):
        run_dir = tmp_path / f"run{index}"
        assert _totals(run_dir, write_lines, [["CC;123", *permutation]]) == expected

    units, revenue = expected
    assert units == {"P001": 4, "P002": 9}
    assert revenue["123"] == Decimal("61.15")


def test_totals_do_not_depend_on_file_order(tmp_path, write_lines):
    files = [
        ["CC;123", "P001;2", "P002;3"],
        ["CE;456", "P001;5"],
        ["CC;123", "P002;1"],
        ["CC;999", "P001;50"],
    ]

    results = [
        _totals(tmp_path / f"run{index}", write_lines, list(order))
        for index, order in enumerate(itertools.permutations(files))
    ]

    assert all(result == results[0] for result in results)
    units, revenue = results[0]
    assert units == {"P001": 7, "P002": 4}
    assert revenue == {"123": Decimal("29.40"), "456": Decimal("50.00")}


def test_oversized_quantity_is_one_line_error(tmp_path, write_lines, products, salespersons):
    path = write_lines(tmp_path / "ventas.csv", "CC;123", "P001;" + "9" * 5000, "P001;2")

    outcome = process_sale_file(path, products, salespersons)

    assert outcome.success
    assert outcome.lines_processed == 1
    assert outcome.lines_with_error == 1
    assert outcome.total_amount == Decimal("20.00")


def _unreadable(*names):
    """A read_text_lines replacement that refuses the given file names."""
    real = sales.read_text_lines

    def read(path):
        if path.name in names:
            raise PermissionError(f"Permission denied: '{path}'")
        return real(path)

    return read


def test_unreadable_file_fails_without_raising(
    tmp_path, write_lines, products, salespersons, monkeypatch
):
    path = write_lines(tmp_path / "ventas.csv", "CC;123", "P001;3")
    monkeypatch.setattr(sales, "read_text_lines", _unreadable("ventas.csv"))

    outcome = process_sale_file(path, products, salespersons)

    assert not outcome.success
    assert "Could not read ventas.csv" in outcome.message
    assert outcome.deltas == []


def test_unreadable_file_does_not_stop_the_directory(
    tmp_path, write_lines, products, salespersons, monkeypatch
):
    sales_dir = tmp_path / "ventas"
    write_lines(sales_dir / "good.csv", "CC;123", "P001;3")
    write_lines(sales_dir / "locked.csv", "CE;456", "P001;7")
    monkeypatch.setattr(sales, "read_text_lines", _unreadable("locked.csv"))

    outcomes = process_sales_directory(sales_dir, products, salespersons)
    apply_outcomes(outcomes, products, salespersons)

    by_name = {o.file_name: o for o in outcomes}
    assert by_name["good.csv"].success
    assert not by_name["locked.csv"].success
    assert products["P001"].units_sold == 3
    assert salespersons["456"].total_revenue == 0
